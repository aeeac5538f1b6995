'''
file        : skewpf/algebra/skew.py

Dense real skew-symmetric matrices.

A ``SkewMatrix`` is built once, either from the row-major strict upper
triangle or from an existing array, and is read-only afterwards. For a 4x4
matrix the six values (a, b, c, d, e, f) map to

    0  a  b  c
   -a  0  d  e
   -b -d  0  f
   -c -e -f  0
'''

import operator
from typing import Optional, Sequence, Union

import numpy as np
import numba

from .errors import (
    SkewMatrixError, SkewMatrixErrorMsg,
    InvalidDimension, InvalidValueCount, NotSkewSymmetric
)
from .utils import Array, DEFAULT_NP_FLOAT_TYPE, PY_SKEW_TOL, PY_GLOBAL_SEED

################################################################################################################

@numba.njit(cache=True)
def _max_skew_violation(A):
    """
    Largest entry of |A + A^T| (the diagonal counts as 2|A_ii|).
    NaN entries are skipped so that they propagate through the Pfaffian instead.
    """
    n       = A.shape[0]
    worst   = 0.0
    for i in range(n):
        for j in range(i, n):
            v = abs(A[i, j] + A[j, i])
            if v > worst:
                worst = v
    return worst

def check_skew_symmetric(A: Array, tol: Optional[float] = None) -> bool:
    """
    Checks if a matrix A is skew-symmetric within a tolerance.
    A matrix is skew-symmetric if A^T = -A (hence a zero diagonal).

    Parameters:
        A (np.ndarray):
            The matrix to check.
        tol (float):
            Absolute tolerance; ``PY_SKEW_TOL`` when None.
    Returns:
        bool: True if A is skew-symmetric, False otherwise.
    Raises:
        SkewMatrixError: If A is not a square 2D array.
    """
    A = _as_square(A)
    return _max_skew_violation(A) <= (PY_SKEW_TOL if tol is None else tol)

def _as_square(A) -> np.ndarray:
    A = np.ascontiguousarray(A, dtype=DEFAULT_NP_FLOAT_TYPE)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise SkewMatrixError(SkewMatrixErrorMsg.NOT_SQUARE, f"Input must be a square matrix, got shape {A.shape}.")
    return A

def _checked_dimension(n) -> int:
    try:
        n = operator.index(n)
    except TypeError:
        raise InvalidDimension(n) from None
    if n < 0 or n % 2 != 0:
        raise InvalidDimension(n)
    return n

def num_upper_values(n: int) -> int:
    '''Number of strict upper-triangle entries of an n x n matrix.'''
    return n * (n - 1) // 2

################################################################################################################

class SkewMatrix:
    """
    Immutable dense skew-symmetric matrix of even order.

    Invariants: ``M[i, j] == -M[j, i]`` for all i != j and ``M[i, i] == 0``.
    The backing array is float64 and flagged read-only.
    """

    __slots__ = ('_data',)

    def __init__(self, n: int, values: Sequence[float]):
        """
        Build the matrix from its strict upper triangle.

        Parameters:
            n (int):
                Even, non-negative order of the matrix.
            values (Sequence[float]):
                ``n*(n-1)/2`` values assigned row-major to the pairs (i, j), i < j:
                (0,1), (0,2), ..., (0,n-1), (1,2), ..., (n-2,n-1).
        Raises:
            InvalidDimension:
                If n is odd or negative.
            InvalidValueCount:
                If the number of values is not n*(n-1)/2.
            SkewMatrixError:
                If the values are not one-dimensional.
        """
        n           = _checked_dimension(n)
        vals        = np.asarray(values, dtype=DEFAULT_NP_FLOAT_TYPE)
        if vals.ndim != 1:
            raise SkewMatrixError(SkewMatrixErrorMsg.INVALID_VALUE_COUNT,
                                f"Upper-triangle values must be a flat sequence, got shape {vals.shape}.")
        expected    = num_upper_values(n)
        if vals.size != expected:
            raise InvalidValueCount(n, expected, vals.size)

        m           = np.zeros((n, n), dtype=DEFAULT_NP_FLOAT_TYPE)
        rows, cols  = np.triu_indices(n, k=1)   # row-major order
        m[rows, cols] = vals
        m[cols, rows] = -vals
        self._freeze(m)

    def _freeze(self, m: np.ndarray):
        m.flags.writeable   = False
        self._data          = m

    # ------------------------------------------------------------------
    #! Alternative constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_upper_triangle(cls, n: int, values: Sequence[float]) -> "SkewMatrix":
        """Same as ``SkewMatrix(n, values)``."""
        return cls(n, values)

    @classmethod
    def from_array(cls, A, tol: Optional[float] = None) -> "SkewMatrix":
        """
        Wrap a copy of an existing skew-symmetric array.

        Parameters:
            A (array-like):
                Square matrix of even order.
            tol (float):
                Absolute tolerance of the skew-symmetry check (``PY_SKEW_TOL`` when None).
        Raises:
            SkewMatrixError:
                If A is not square.
            InvalidDimension:
                If the order of A is odd.
            NotSkewSymmetric:
                If |A + A^T| exceeds ``tol`` anywhere.
        """
        A   = _as_square(A)
        _checked_dimension(A.shape[0])
        tol = PY_SKEW_TOL if tol is None else tol

        worst = _max_skew_violation(A)
        if worst > tol:
            raise NotSkewSymmetric(tol, worst)

        obj = cls.__new__(cls)
        obj._freeze(A.copy())
        return obj

    @classmethod
    def random(cls, n: int, seed: Optional[int] = None, scale: float = 1.0) -> "SkewMatrix":
        """
        Random skew-symmetric matrix with standard-normal upper-triangle entries.

        Parameters:
            n (int):
                Even order.
            seed (int):
                Seed of the numpy Generator (``PY_GLOBAL_SEED`` when None).
            scale (float):
                Multiplies every entry.
        """
        n   = _checked_dimension(n)
        rng = np.random.default_rng(PY_GLOBAL_SEED if seed is None else seed)
        return cls(n, scale * rng.standard_normal(num_upper_values(n)))

    # ------------------------------------------------------------------
    #! Access
    # ------------------------------------------------------------------

    @property
    def n(self) -> int:
        return self._data.shape[0]

    dim = n

    @property
    def shape(self):
        return self._data.shape

    @property
    def data(self) -> np.ndarray:
        '''Read-only float64 view of the matrix.'''
        return self._data

    def upper_triangle(self) -> np.ndarray:
        '''Row-major strict upper triangle; ``SkewMatrix(n, m.upper_triangle()) == m``.'''
        return self._data[np.triu_indices(self.n, k=1)].copy()

    def pfaffian(self, method=None) -> float:
        '''Pfaffian of this matrix, see ``skewpf.algebra.pfaffian.pfaffian``.'''
        from .pfaffian import pfaffian
        return pfaffian(self, method)

    def __getitem__(self, key):
        return self._data[key]

    def __len__(self) -> int:
        return self.n

    def __array__(self, dtype=None, copy=None):
        if dtype is not None and np.dtype(dtype) != self._data.dtype:
            return self._data.astype(dtype)
        if copy:
            return self._data.copy()
        return self._data

    def __eq__(self, other) -> bool:
        if not isinstance(other, SkewMatrix):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __hash__(self) -> int:
        return hash((self.n, self._data.tobytes()))

    def __repr__(self) -> str:
        return f"SkewMatrix(n={self.n})"

    def __str__(self) -> str:
        return np.array2string(self._data, precision=6, suppress_small=True, max_line_width=120)

################################################################################################################

def build(n: int, values: Sequence[float]) -> SkewMatrix:
    """
    Construct a skew-symmetric matrix from its row-major strict upper triangle.

    Example:
        >>> m = build(4, [2.0, 3.0, 4.0, 5.0, 6.0, 7.0])
        >>> float(m[1, 0])
        -2.0
    """
    return SkewMatrix(n, values)

MatrixLike = Union[SkewMatrix, np.ndarray, Sequence[Sequence[float]]]

################################################################################################################
