'''
file        : skewpf/algebra/pfaffian.py

Algorithms for computing the Pfaffian of a real skew-symmetric matrix.

The primary algorithm expands along the first active index, summing over
the index it is matched with:

    Pf(A) = sum_{j=1}^{n-1} (-1)^(j+1) A[0, j] Pf(A_{0j}),

where A_{0j} removes rows/columns 0 and j. Sub-Pfaffians are memoized by
the ordered tuple of surviving indices, so the (n-1)!! matchings collapse
onto the states actually reachable by "remove the first index and one
other". The O(n^3) factorizations (Parlett-Reid, Hessenberg, Schur) are
kept as independent cross-checks.
'''

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

import numpy as np
import scipy.linalg
import numba

from .errors import NotSkewSymmetric
from .skew import SkewMatrix, MatrixLike, _as_square, _max_skew_violation
from .utils import PY_PFAFFIAN_METHOD, PY_SKEW_TOL
from ..common.flog import get_global_logger

log = get_global_logger()

################################################################################################################

@unique
class PfaffianAlgorithms(Enum):
    """
    Enum for the available Pfaffian algorithms.
    """
    Recursive   = 0     # memoized expansion over matchings (default)
    Iterative   = 1     # same recurrence, explicit stack, bitmask memo
    BruteForce  = 2     # same recurrence, no memo; exponential
    ParlettReid = 3
    Hessenberg  = 4
    Schur       = 5

    @classmethod
    def resolve(cls, method: Union[None, str, "PfaffianAlgorithms"]) -> "PfaffianAlgorithms":
        """
        Map None (configured default), an enum member or a name such as
        'recursive', 'parlett_reid' or 'Parlett-Reid' onto a member.
        """
        if method is None:
            method = PY_PFAFFIAN_METHOD
        if isinstance(method, cls):
            return method
        if isinstance(method, str):
            key = method.replace('_', '').replace('-', '').replace(' ', '').lower()
            for member in cls:
                if member.name.lower() == key:
                    return member
        valid = ", ".join(m.name.lower() for m in cls)
        raise ValueError(f"Unknown Pfaffian method {method!r}; expected one of: {valid}.")

_MEMOIZING = (PfaffianAlgorithms.Recursive, PfaffianAlgorithms.Iterative, PfaffianAlgorithms.BruteForce)
BRUTEFORCE_MAX_N = 12   # warn above this order

class PfaffianResult(NamedTuple):
    '''
    Value of a Pfaffian together with the bookkeeping of the expansion.

    Attributes:
        value (float):
            The Pfaffian.
        method (PfaffianAlgorithms):
            Algorithm that produced it.
        calls (int):
            Recursive invocations (Recursive/BruteForce) or stack visits (Iterative).
        memo_hits (int):
            Sub-Pfaffians answered from the memo table.
        memo_size (int):
            Distinct non-empty index subsets stored in the memo table.
    '''
    value       : float
    method      : PfaffianAlgorithms
    calls       : int
    memo_hits   : int
    memo_size   : int

@dataclass(slots=True)
class _Counters:
    calls       : int = 0
    memo_hits   : int = 0
    memo_size   : int = 0

################################################################################################################

@numba.njit(cache=True)
def _parlett_reid_kernel(A):
    """
    Pfaffian via the Parlett-Reid tridiagonalization with pivoting.
    Overwrites A; N must be even and positive.
    """
    N               = A.shape[0]
    pfaffian_val    = 1.0

    for k in range(0, N - 1, 2):
        #! Pivoting: largest entry of column k below row k
        kp = k + 1 + np.argmax(np.abs(A[k + 1:, k]))
        if kp != k + 1:
            for c in range(N):
                tmp         = A[k + 1, c]
                A[k + 1, c] = A[kp, c]
                A[kp, c]    = tmp
            for r in range(N):
                tmp         = A[r, k + 1]
                A[r, k + 1] = A[r, kp]
                A[r, kp]    = tmp
            # the symmetric swap negates the Pfaffian
            pfaffian_val *= -1.0

        #! Elimination
        if A[k + 1, k] == 0.0:
            return 0.0

        pfaffian_val *= A[k, k + 1]

        if k + 2 < N:
            tau = A[k, k + 2:] / A[k, k + 1]
            col = A[k + 2:, k + 1].copy()
            m   = N - k - 2
            for i in range(m):
                for j in range(m):
                    A[k + 2 + i, k + 2 + j] += tau[i] * col[j] - col[i] * tau[j]
    return pfaffian_val

################################################################################################################

class Pfaffian:
    """
    Pfaffian algorithms on a validated float64 skew-symmetric array.

    Every ``_pfaffian_*`` method takes the array (even order n >= 0) and
    returns a Python float. The expansion-based ones also fill a ``_Counters``.
    """

    ############################################################################################################
    #! Memoized recursive Pfaffian
    ############################################################################################################

    @staticmethod
    def _expand(rows: List[List[float]], active: Tuple[int, ...], memo: Dict[Tuple[int, ...], float], counters: _Counters) -> float:
        """
        Pfaffian of the principal submatrix on ``active``.

        ``active`` keeps the relative order of the original indices; the sign
        of each term depends on the position of the partner in this tuple.
        """
        counters.calls += 1
        if not active:
            return 1.0

        cached = memo.get(active)
        if cached is not None:
            counters.memo_hits += 1
            return cached

        row     = rows[active[0]]
        total   = 0.0
        for j_idx in range(1, len(active)):
            # partner right after the fixed index contributes positively
            sign    = 1.0 if j_idx % 2 == 1 else -1.0
            sub     = active[1:j_idx] + active[j_idx + 1:]
            total  += sign * row[active[j_idx]] * Pfaffian._expand(rows, sub, memo, counters)

        memo[active] = total
        return total

    @staticmethod
    def _pfaffian_recursive(A: np.ndarray, counters: Optional[_Counters] = None) -> float:
        """
        Memoized expansion over perfect matchings.
        The memo table lives for this call only. Recursion depth is n/2.
        """
        counters            = _Counters() if counters is None else counters
        memo                = {}
        value               = Pfaffian._expand(A.tolist(), tuple(range(A.shape[0])), memo, counters)
        counters.memo_size  = len(memo)
        return value

    ############################################################################################################
    #! Iterative (explicit stack) Pfaffian
    ############################################################################################################

    @staticmethod
    def _pfaffian_iterative(A: np.ndarray, counters: Optional[_Counters] = None) -> float:
        """
        The memoized recurrence evaluated with an explicit stack.

        A state is the bitmask of surviving indices. Since every state
        inherits the order of 0..n-1, the mask identifies the ordered tuple
        uniquely and the lowest set bit is the fixed index. Terms are summed in
        the same order as ``_pfaffian_recursive``, so results are bit-identical.
        """
        counters    = _Counters() if counters is None else counters
        n           = A.shape[0]
        rows        = A.tolist()
        memo        = {}

        def value_of(mask):
            return 1.0 if mask == 0 else memo.get(mask)

        full        = (1 << n) - 1
        stack       = [full] if n > 0 else []
        while stack:
            counters.calls += 1
            mask = stack[-1]
            if mask in memo:
                counters.memo_hits += 1
                stack.pop()
                continue

            lowest      = mask & -mask
            i           = lowest.bit_length() - 1
            rest        = mask ^ lowest

            partners    = []
            pending     = []
            bits        = rest
            while bits:
                lsb     = bits & -bits
                bits   ^= lsb
                sub     = rest ^ lsb
                partners.append((lsb.bit_length() - 1, sub))
                if value_of(sub) is None:
                    pending.append(sub)

            if pending:
                stack.extend(pending)
                continue

            row     = rows[i]
            total   = 0.0
            sign    = 1.0
            for j, sub in partners:
                total  += sign * row[j] * value_of(sub)
                sign    = -sign
            memo[mask] = total
            stack.pop()

        counters.memo_size = len(memo)
        return 1.0 if n == 0 else memo[full]

    ############################################################################################################
    #! Brute-force Pfaffian
    ############################################################################################################

    @staticmethod
    def _brute(rows: List[List[float]], active: Tuple[int, ...], counters: _Counters) -> float:
        counters.calls += 1
        if not active:
            return 1.0
        row     = rows[active[0]]
        total   = 0.0
        for j_idx in range(1, len(active)):
            sign    = 1.0 if j_idx % 2 == 1 else -1.0
            total  += sign * row[active[j_idx]] * Pfaffian._brute(rows, active[1:j_idx] + active[j_idx + 1:], counters)
        return total

    @staticmethod
    def _pfaffian_bruteforce(A: np.ndarray, counters: Optional[_Counters] = None) -> float:
        """
        The same expansion without memoization.
        WARNING:
            (n-1)!! leaves; practical only for n <= 12.
        """
        counters = _Counters() if counters is None else counters
        return Pfaffian._brute(A.tolist(), tuple(range(A.shape[0])), counters)

    ############################################################################################################
    #! Parlett-Reid Pfaffian
    ############################################################################################################

    @staticmethod
    def _pfaffian_parlett_reid(A: np.ndarray, counters: Optional[_Counters] = None) -> float:
        if A.shape[0] == 0:
            return 1.0
        return float(_parlett_reid_kernel(np.array(A, dtype=np.float64, copy=True)))

    ############################################################################################################
    #! Hessenberg Pfaffian
    ############################################################################################################

    @staticmethod
    def _pfaffian_hessenberg(A: np.ndarray, counters: Optional[_Counters] = None) -> float:
        """
        Pfaffian from the Hessenberg form A = Q H Q^T.

        For skew-symmetric A, H is skew-symmetric tridiagonal and
        Pf(A) = Pf(Q H Q^T) = det(Q) Pf(H), with Pf(H) = H[0,1] H[2,3] ... H[N-2,N-1].
        """
        if A.shape[0] == 0:
            return 1.0
        H, Q        = scipy.linalg.hessenberg(A, calc_q=True)
        super_diag  = np.diag(H, k=1)
        return float(np.linalg.det(Q) * np.prod(super_diag[::2]))

    ############################################################################################################
    #! Schur Pfaffian
    ############################################################################################################

    @staticmethod
    def _pfaffian_schur(A: np.ndarray, counters: Optional[_Counters] = None) -> float:
        """
        Pfaffian from the real Schur form A = Z T Z^T.

        For real skew-symmetric A, T is block diagonal with 2x2 blocks
        [[0, b], [-b, 0]], hence Pf(A) = det(Z) * T[0,1] T[2,3] ... T[N-2,N-1].
        """
        if A.shape[0] == 0:
            return 1.0
        T, Z        = scipy.linalg.schur(A, output='real')
        super_diag  = np.diag(T, k=1)
        return float(np.linalg.det(Z) * np.prod(super_diag[::2]))

_DISPATCH = {
    PfaffianAlgorithms.Recursive    : Pfaffian._pfaffian_recursive,
    PfaffianAlgorithms.Iterative    : Pfaffian._pfaffian_iterative,
    PfaffianAlgorithms.BruteForce   : Pfaffian._pfaffian_bruteforce,
    PfaffianAlgorithms.ParlettReid  : Pfaffian._pfaffian_parlett_reid,
    PfaffianAlgorithms.Hessenberg   : Pfaffian._pfaffian_hessenberg,
    PfaffianAlgorithms.Schur        : Pfaffian._pfaffian_schur,
}

################################################################################################################
#! Public interface
################################################################################################################

def _prepare(matrix: MatrixLike) -> np.ndarray:
    """
    Float64 array of a SkewMatrix as is; raw input is checked to be square
    and skew-symmetric within ``PY_SKEW_TOL``.
    """
    if isinstance(matrix, SkewMatrix):
        return matrix.data
    A       = _as_square(matrix)
    worst   = _max_skew_violation(A)
    if worst > PY_SKEW_TOL:
        raise NotSkewSymmetric(PY_SKEW_TOL, worst)
    return A

def pfaffian_with_stats(matrix: MatrixLike, method: Union[None, str, PfaffianAlgorithms] = None) -> PfaffianResult:
    """
    Computes the Pfaffian and reports how much work the expansion did.

    Parameters
    ----------
    matrix : SkewMatrix or array-like
        Skew-symmetric matrix. Raw arrays are validated; an odd order yields 0.0.
    method : str or PfaffianAlgorithms, optional
        Algorithm; ``PY_PFAFFIAN_METHOD`` ('recursive' by default) when None.

    Returns
    -------
    PfaffianResult
        Value plus call / memo counters (zero for the factorization methods).

    Raises
    ------
    ValueError
        Unknown method name.
    SkewMatrixError
        Raw input that is not square or not skew-symmetric.
    """
    algo    = PfaffianAlgorithms.resolve(method)
    A       = _prepare(matrix)
    n       = A.shape[0]

    if n % 2 != 0:
        log.debug(f"Pfaffian[{algo.name}] n={n} is odd, returning 0.0", lvl=1)
        return PfaffianResult(0.0, algo, 0, 0, 0)

    if algo is PfaffianAlgorithms.BruteForce and n > BRUTEFORCE_MAX_N:
        log.warning(f"Pfaffian[BruteForce] n={n} expands {n - 1}!! matchings, prefer 'recursive'", lvl=1)

    counters    = _Counters()
    value       = _DISPATCH[algo](A, counters)
    if algo in _MEMOIZING:
        log.debug(f"Pfaffian[{algo.name}] n={n} calls={counters.calls} hits={counters.memo_hits} memo={counters.memo_size}", lvl=1)
    else:
        log.debug(f"Pfaffian[{algo.name}] n={n}", lvl=1)
    return PfaffianResult(value, algo, counters.calls, counters.memo_hits, counters.memo_size)

def pfaffian(matrix: MatrixLike, method: Union[None, str, PfaffianAlgorithms] = None) -> float:
    """
    Computes the Pfaffian of a skew-symmetric matrix.

    Pf of the 0x0 matrix is 1.0 and Pf of a 2x2 matrix is M[0, 1]. In general it
    is the signed sum over perfect matchings of {0..n-1} of the product of the
    matched entries.

    Parameters
    ----------
    matrix : SkewMatrix or array-like
        Skew-symmetric matrix of even order (raw arrays of odd order give 0.0).
    method : {"recursive", "iterative", "bruteforce", "parlettreid", "hessenberg", "schur", None}
        Algorithm to use:
            - "recursive"   : memoized expansion over matchings (default)
            - "iterative"   : the same recurrence with an explicit stack
            - "bruteforce"  : the same recurrence without memo (tiny n only)
            - "parlettreid", "hessenberg", "schur" : O(n^3) factorizations
            - None          : ``PY_PFAFFIAN_METHOD``

    Returns
    -------
    float
        The Pfaffian. The expansion methods are deterministic: repeated calls
        on the same matrix are bit-identical.

    Example
    -------
        >>> from skewpf.algebra.skew import build
        >>> pfaffian(build(4, [2.0, 3.0, 4.0, 5.0, 6.0, 7.0]))
        16.0
    """
    return pfaffian_with_stats(matrix, method).value

################################################################################################################
