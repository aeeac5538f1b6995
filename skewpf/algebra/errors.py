'''
Errors raised while constructing or validating skew-symmetric matrices.

All of them derive from ``SkewMatrixError``, itself a ``ValueError``, so
callers that only care about "bad input" can catch ``ValueError``.
'''

from enum import Enum
from typing import Optional

# -----------------------------------------------------------------------------
#! Errors
# -----------------------------------------------------------------------------

class SkewMatrixErrorMsg(Enum):
    '''
    Enumeration class for skew-matrix error codes.
    '''
    INVALID_DIMENSION   = 201
    INVALID_VALUE_COUNT = 202
    NOT_SQUARE          = 203
    NOT_SKEW_SYMMETRIC  = 204

    def __str__(self):
        return self.name.replace('_', ' ').title()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}: '{str(self)}'>"

class SkewMatrixError(ValueError):
    '''
    Base class for exceptions in the skew-matrix builder and Pfaffian engine.
    '''
    def __init__(self, code: SkewMatrixErrorMsg, message: Optional[str] = None):
        self.code       = code
        self.message    = message if message else str(code)
        super().__init__(self.message)

    def __str__(self):
        return f"[SkewMatrixError {self.code.name} ({self.code.value})]: {self.message}"

    def __repr__(self):
        return self.__str__()

class InvalidDimension(SkewMatrixError):
    '''
    The requested matrix order is odd or negative.
    '''
    def __init__(self, n):
        self.n = n
        super().__init__(SkewMatrixErrorMsg.INVALID_DIMENSION,
                        f"Matrix must have an even, non-negative dimension, got n={n!r}.")

class InvalidValueCount(SkewMatrixError):
    '''
    The number of upper-triangle values does not match n*(n-1)/2.
    '''
    def __init__(self, n: int, expected: int, actual: int):
        self.n          = n
        self.expected   = expected
        self.actual     = actual
        super().__init__(SkewMatrixErrorMsg.INVALID_VALUE_COUNT,
                        f"Incorrect number of values for an {n}x{n} matrix: expected {expected}, got {actual}.")

class NotSkewSymmetric(SkewMatrixError):
    '''
    The array violates A == -A.T (or has a non-zero diagonal) beyond the tolerance.
    '''
    def __init__(self, tol: float, max_violation: float):
        self.tol            = tol
        self.max_violation  = max_violation
        super().__init__(SkewMatrixErrorMsg.NOT_SKEW_SYMMETRIC,
                        f"Matrix is not skew-symmetric: max |A + A^T| = {max_violation:.3e} exceeds tol = {tol:.3e}.")

# -----------------------------------------------------------------------------
