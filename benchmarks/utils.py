import numpy as np

from skewpf.algebra.skew import SkewMatrix

def create_random_skew(n: int, seed: int = 0) -> SkewMatrix:
    """
    Random skew-symmetric matrix with entries of order one.
    """
    return SkewMatrix.random(n, seed=seed)

def create_block_skew(n: int, b: float = 1.0) -> SkewMatrix:
    r"""
    Block-diagonal skew matrix \bigoplus_k [[0, b], [-b, 0]].

    Its Pfaffian is b^(n/2), which makes it a cheap sanity check at any n.
    """
    A = np.zeros((n, n))
    for k in range(0, n, 2):
        A[k, k + 1] = b
        A[k + 1, k] = -b
    return SkewMatrix.from_array(A)

def double_factorial(k: int) -> int:
    """k!! for odd k >= -1 (number of perfect matchings of k + 1 points)."""
    out = 1
    while k > 1:
        out *= k
        k   -= 2
    return out
