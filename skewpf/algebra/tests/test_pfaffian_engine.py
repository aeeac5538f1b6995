import logging

import pytest
import numpy as np

from skewpf.algebra.skew import SkewMatrix, build, num_upper_values
from skewpf.algebra.errors import SkewMatrixError, NotSkewSymmetric
from skewpf.algebra.pfaffian import (
    Pfaffian, PfaffianAlgorithms, PfaffianResult,
    pfaffian, pfaffian_with_stats, _Counters
)

EXPANSIONS = [PfaffianAlgorithms.Recursive, PfaffianAlgorithms.Iterative, PfaffianAlgorithms.BruteForce]

class TestPfaffianBasics:

    @pytest.mark.parametrize("method", list(PfaffianAlgorithms))
    def test_empty_matrix_is_one(self, method):
        assert pfaffian(build(0, []), method) == 1.0

    @pytest.mark.parametrize("method", EXPANSIONS)
    @pytest.mark.parametrize("n", [2, 4, 6, 8])
    def test_zero_matrix_is_zero(self, n, method):
        assert pfaffian(build(n, [0.0] * num_upper_values(n)), method) == 0.0

    @pytest.mark.parametrize("a", [12.0, -3.5, 0.0, 1e-300, 7e200])
    def test_two_by_two(self, a):
        assert pfaffian(build(2, [a])) == a

    @pytest.mark.parametrize("vals", [
        (2.0, 3.0, 4.0, 5.0, 6.0, 7.0),
        (1.0, 1.0, 1.0, 1.0, 1.0, 1.0),
        (-0.5, 2.25, 3.0, -1.0, 0.125, 4.0),
        (0.1, 0.2, 0.3, 0.4, 0.5, 0.6),
    ])
    def test_four_by_four_formula(self, vals):
        """Pf = af - be + cd for pairs (0,1),(0,2),(0,3),(1,2),(1,3),(2,3)."""
        a, b, c, d, e, f = vals
        assert pfaffian(build(4, vals)) == pytest.approx(a * f - b * e + c * d, rel=1e-14, abs=1e-15)

    def test_four_by_four_demo_value(self):
        assert pfaffian(build(4, [2.0, 3.0, 4.0, 5.0, 6.0, 7.0])) == 16.0

    def test_six_by_six_consecutive_values(self):
        """Values 1..15 row-major; the 15 signed matchings sum to 256."""
        m = build(6, [float(v) for v in range(1, 16)])
        pf = pfaffian(m)
        assert pf == 256.0
        assert pf ** 2 == pytest.approx(np.linalg.det(m.data), rel=1e-9)

    def test_method_on_matrix(self):
        m = build(4, [2.0, 3.0, 4.0, 5.0, 6.0, 7.0])
        assert m.pfaffian() == 16.0
        assert m.pfaffian("iterative") == 16.0

    def test_block_diagonal(self):
        n, b = 12, 1.5
        A = np.zeros((n, n))
        for k in range(0, n, 2):
            A[k, k + 1] = b
            A[k + 1, k] = -b
        assert pfaffian(SkewMatrix.from_array(A)) == pytest.approx(b ** (n // 2), rel=1e-14)

    def test_swapping_two_indices_flips_sign(self):
        m = SkewMatrix.random(6, seed=21)
        P = np.eye(6)[[1, 0, 2, 3, 4, 5]]
        swapped = SkewMatrix.from_array(P @ m.data @ P.T)
        assert pfaffian(swapped) == pytest.approx(-pfaffian(m), rel=1e-12)

    def test_scaling(self):
        m = SkewMatrix.random(8, seed=4)
        scaled = SkewMatrix.from_array(2.0 * m.data)
        assert pfaffian(scaled) == pytest.approx(2.0 ** 4 * pfaffian(m), rel=1e-12)

    def test_congruence(self):
        """Pf(B A B^T) = det(B) Pf(A)."""
        m = SkewMatrix.random(6, seed=8)
        B = np.random.default_rng(9).standard_normal((6, 6))
        C = B @ m.data @ B.T
        C = 0.5 * (C - C.T)
        lhs = pfaffian(SkewMatrix.from_array(C))
        assert lhs == pytest.approx(np.linalg.det(B) * pfaffian(m), rel=1e-8)

    def test_returns_python_float(self):
        assert type(pfaffian(SkewMatrix.random(4, seed=0))) is float

class TestPfaffianMemoization:

    @pytest.mark.parametrize("n", [2, 4, 6, 8])
    def test_memoized_equals_bruteforce(self, n):
        m = SkewMatrix.random(n, seed=100 + n)
        brute = pfaffian(m, PfaffianAlgorithms.BruteForce)
        assert pfaffian(m, PfaffianAlgorithms.Recursive) == brute
        assert pfaffian(m, PfaffianAlgorithms.Iterative) == brute

    @pytest.mark.parametrize("n", [10, 12, 14])
    def test_iterative_bit_identical_to_recursive(self, n):
        m = SkewMatrix.random(n, seed=n)
        assert pfaffian(m, "iterative") == pfaffian(m, "recursive")

    @pytest.mark.parametrize("method", EXPANSIONS)
    def test_deterministic(self, method):
        m = SkewMatrix.random(10, seed=2) if method is not PfaffianAlgorithms.BruteForce else SkewMatrix.random(8, seed=2)
        first = pfaffian(m, method)
        for _ in range(3):
            assert pfaffian(m, method) == first

    def test_counters_six_by_six(self):
        """
        n=6 visits the full set, 5 four-element sets and the 6 pairs inside {2,..,5}.
        The 15 pair lookups hit the memo 9 times.
        """
        m = build(6, [float(v) for v in range(1, 16)])
        res = pfaffian_with_stats(m, PfaffianAlgorithms.Recursive)
        assert isinstance(res, PfaffianResult)
        assert res.memo_size == 12
        assert res.memo_hits == 9
        assert res.calls == 27

        brute = pfaffian_with_stats(m, PfaffianAlgorithms.BruteForce)
        assert brute.calls == 36
        assert brute.memo_size == 0
        assert brute.value == res.value

    @pytest.mark.parametrize("n", [4, 8, 10])
    def test_iterative_memo_matches_recursive(self, n):
        m = SkewMatrix.random(n, seed=1)
        rec = pfaffian_with_stats(m, "recursive")
        it = pfaffian_with_stats(m, "iterative")
        assert it.memo_size == rec.memo_size

    def test_memo_smaller_than_bruteforce(self):
        m = SkewMatrix.random(10, seed=3)
        rec = pfaffian_with_stats(m, "recursive")
        brute = pfaffian_with_stats(m, "bruteforce")
        assert rec.calls < brute.calls
        assert rec.memo_size < brute.calls

    @pytest.mark.parametrize("n,states", [(2, 1), (4, 4), (6, 12), (8, 33), (10, 88), (16, 1596)])
    def test_memo_size_is_fibonacci(self, n, states):
        """
        Sets of size n-2k are the (n-2k)-subsets of {k,..,n-1}, so the memo holds
        sum_k C(n-k, k) = F(n+1) - 1 entries, far fewer than 2^(n-1).
        """
        res = pfaffian_with_stats(SkewMatrix.random(n, seed=5), "recursive")
        assert res.memo_size == states
        assert res.memo_size < 2 ** (n - 1)

    def test_bruteforce_warns_for_large_order(self, monkeypatch):
        from skewpf.algebra import pfaffian as pf_module

        class _Records(logging.Handler):
            def __init__(self):
                super().__init__(level=logging.DEBUG)
                self.records = []
            def emit(self, record):
                self.records.append(record)

        handler = _Records()
        pf_module.log.logger.addHandler(handler)
        try:
            monkeypatch.setattr(pf_module, "BRUTEFORCE_MAX_N", 4)
            pfaffian(SkewMatrix.random(6, seed=2), "bruteforce")
            pfaffian(SkewMatrix.random(6, seed=2), "recursive")
        finally:
            pf_module.log.logger.removeHandler(handler)
        warnings = [r for r in handler.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "n=6" in warnings[0].getMessage()

    def test_fresh_memo_per_call(self):
        """Counters do not accumulate across calls."""
        m = SkewMatrix.random(8, seed=13)
        a = pfaffian_with_stats(m, "recursive")
        b = pfaffian_with_stats(m, "recursive")
        assert a == b

    def test_expand_preserves_order(self):
        """The sub-Pfaffian over a non-initial ordered subset matches the explicit 4x4 formula."""
        m = build(6, [float(v) for v in range(1, 16)])
        rows = m.data.tolist()
        active = (1, 3, 4, 5)
        got = Pfaffian._expand(rows, active, {}, _Counters())
        a13, a14, a15, a34, a35, a45 = 7.0, 8.0, 9.0, 13.0, 14.0, 15.0
        assert got == a13 * a45 - a14 * a35 + a15 * a34

class TestPfaffianInputs:

    def test_raw_numpy_array(self):
        A = np.array([[0.0, 2.0], [-2.0, 0.0]])
        assert pfaffian(A) == 2.0

    def test_nested_lists(self):
        assert pfaffian([[0.0, -4.0], [4.0, 0.0]]) == -4.0

    def test_raw_odd_order_is_zero(self):
        A = np.array([[0.0, 1.0, 2.0], [-1.0, 0.0, 3.0], [-2.0, -3.0, 0.0]])
        res = pfaffian_with_stats(A)
        assert res.value == 0.0
        assert res.calls == 0

    def test_raw_not_skew(self):
        with pytest.raises(NotSkewSymmetric):
            pfaffian(np.ones((2, 2)))

    def test_raw_not_square(self):
        with pytest.raises(SkewMatrixError):
            pfaffian(np.zeros((2, 4)))

    def test_nan_propagates(self):
        m = build(4, [np.nan, 1.0, 1.0, 1.0, 1.0, 1.0])
        assert np.isnan(pfaffian(m))

    def test_inf_propagates(self):
        m = build(2, [np.inf])
        assert pfaffian(m) == np.inf

class TestMethodResolution:

    @pytest.mark.parametrize("name,expected", [
        ("recursive",       PfaffianAlgorithms.Recursive),
        ("Iterative",       PfaffianAlgorithms.Iterative),
        ("brute_force",     PfaffianAlgorithms.BruteForce),
        ("Parlett-Reid",    PfaffianAlgorithms.ParlettReid),
        ("parlett_reid",    PfaffianAlgorithms.ParlettReid),
        ("HESSENBERG",      PfaffianAlgorithms.Hessenberg),
        ("schur",           PfaffianAlgorithms.Schur),
    ])
    def test_names(self, name, expected):
        assert PfaffianAlgorithms.resolve(name) is expected

    def test_enum_passthrough(self):
        assert PfaffianAlgorithms.resolve(PfaffianAlgorithms.Schur) is PfaffianAlgorithms.Schur

    def test_default_from_config(self):
        from skewpf.algebra.utils import PY_PFAFFIAN_METHOD
        assert PfaffianAlgorithms.resolve(None) is PfaffianAlgorithms.resolve(PY_PFAFFIAN_METHOD)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown Pfaffian method"):
            pfaffian(build(2, [1.0]), "gauss")

    def test_stats_report_method(self):
        res = pfaffian_with_stats(build(2, [1.0]), "iterative")
        assert res.method is PfaffianAlgorithms.Iterative
