import time

import numpy as np

from skewpf.algebra.pfaffian import PfaffianAlgorithms, pfaffian_with_stats
from .utils import create_random_skew, create_block_skew, double_factorial

def benchmark_method(n, method, seed=0):
    """
    Time one Pfaffian of a random n x n skew matrix.
    """
    m = create_random_skew(n, seed)

    start_time = time.perf_counter()
    res = pfaffian_with_stats(m, method)
    end_time = time.perf_counter()

    det = np.linalg.det(m.data)
    return {
        "name": f"{res.method.name} (n={n})",
        "duration": end_time - start_time,
        "calls": res.calls,
        "memo_size": res.memo_size,
        "rel_err_det": abs(res.value ** 2 - det) / max(abs(det), 1e-300),
    }

def benchmark_block(n, method):
    """
    Time the block-diagonal matrix whose Pfaffian is known exactly (2^(n/2)).
    """
    m = create_block_skew(n, b=2.0)

    start_time = time.perf_counter()
    res = pfaffian_with_stats(m, method)
    end_time = time.perf_counter()

    return {
        "name": f"{res.method.name} block (n={n})",
        "duration": end_time - start_time,
        "value": res.value,
        "expected": 2.0 ** (n // 2),
    }

def run_benchmarks(heavy=False):
    results = []

    # expansion family: memoized vs. iterative vs. brute force
    sizes_memo = [6, 10, 14, 18] if heavy else [6, 10, 14]
    sizes_brute = [6, 8, 10, 12] if heavy else [6, 8, 10]

    for n in sizes_memo:
        results.append(benchmark_method(n, PfaffianAlgorithms.Recursive))
        results.append(benchmark_method(n, PfaffianAlgorithms.Iterative))

    for n in sizes_brute:
        res = benchmark_method(n, PfaffianAlgorithms.BruteForce)
        res["matchings"] = double_factorial(n - 1)
        results.append(res)

    # O(n^3) factorizations; the first call includes numba compilation
    for n in [10, 100, 400] if heavy else [10, 100]:
        for method in (PfaffianAlgorithms.ParlettReid, PfaffianAlgorithms.Hessenberg, PfaffianAlgorithms.Schur):
            results.append(benchmark_method(n, method))

    results.append(benchmark_block(12, PfaffianAlgorithms.Recursive))
    return results
