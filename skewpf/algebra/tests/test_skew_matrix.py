import pytest
import numpy as np

from skewpf.algebra.skew import SkewMatrix, build, check_skew_symmetric, num_upper_values
from skewpf.algebra.errors import (
    SkewMatrixError, SkewMatrixErrorMsg,
    InvalidDimension, InvalidValueCount, NotSkewSymmetric
)

class TestSkewMatrixBuild:

    def test_upper_triangle_layout_4x4(self):
        """Values fill (0,1),(0,2),(0,3),(1,2),(1,3),(2,3) in that order."""
        m = build(4, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        expected = np.array([
            [ 0.0,  1.0,  2.0,  3.0],
            [-1.0,  0.0,  4.0,  5.0],
            [-2.0, -4.0,  0.0,  6.0],
            [-3.0, -5.0, -6.0,  0.0],
        ])
        np.testing.assert_array_equal(m.data, expected)
        assert m.n == 4
        assert m.shape == (4, 4)
        assert len(m) == 4

    def test_antisymmetry_invariant(self):
        for n in (2, 4, 6, 8, 10):
            m = SkewMatrix.random(n, seed=n)
            A = m.data
            for i in range(n):
                assert A[i, i] == 0.0
                for j in range(n):
                    if i != j:
                        assert A[i, j] == -A[j, i]

    def test_empty_matrix(self):
        m = build(0, [])
        assert m.n == 0
        assert m.data.shape == (0, 0)

    def test_two_by_two(self):
        m = build(2, [12.0])
        assert m[0, 1] == 12.0
        assert m[1, 0] == -12.0

    def test_from_upper_triangle_alias(self):
        vals = [0.5, -1.5, 2.0, 3.25, 4.0, -7.0]
        assert SkewMatrix.from_upper_triangle(4, vals) == build(4, vals)

    def test_upper_triangle_inverts_build(self):
        m = SkewMatrix.random(8, seed=3)
        assert build(8, m.upper_triangle()) == m

    def test_values_accept_numpy(self):
        m = build(6, np.arange(1.0, 16.0))
        assert m[4, 5] == 15.0
        assert m[0, 1] == 1.0
        assert m[1, 2] == 6.0

    def test_determinism(self):
        vals = np.random.default_rng(1).standard_normal(num_upper_values(6))
        assert build(6, vals) == build(6, vals)

class TestSkewMatrixErrors:

    @pytest.mark.parametrize("n", [1, 3, 5, 7])
    def test_odd_dimension(self, n):
        with pytest.raises(InvalidDimension) as exc:
            build(n, [0.0] * num_upper_values(n))
        assert exc.value.n == n
        assert exc.value.code is SkewMatrixErrorMsg.INVALID_DIMENSION

    @pytest.mark.parametrize("n", [-2, 2.5, "4"])
    def test_invalid_dimension_type_or_sign(self, n):
        with pytest.raises(InvalidDimension):
            build(n, [])

    def test_value_count_too_short(self):
        with pytest.raises(InvalidValueCount) as exc:
            build(4, [1.0, 2.0, 3.0])
        err = exc.value
        assert err.expected == 6
        assert err.actual == 3
        assert "expected 6" in str(err)
        assert "got 3" in str(err)

    def test_value_count_too_long(self):
        with pytest.raises(InvalidValueCount) as exc:
            build(2, [1.0, 2.0])
        assert (exc.value.expected, exc.value.actual) == (1, 2)

    def test_value_count_for_empty(self):
        with pytest.raises(InvalidValueCount):
            build(0, [1.0])

    def test_values_must_be_flat(self):
        # right count (6 for n=4), wrong shape
        with pytest.raises(SkewMatrixError) as exc:
            build(4, np.arange(6.0).reshape(2, 3))
        assert exc.value.code is SkewMatrixErrorMsg.INVALID_VALUE_COUNT
        assert "(2, 3)" in str(exc.value)

    def test_scalar_value_rejected(self):
        with pytest.raises(SkewMatrixError):
            build(2, 5.0)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            build(3, [1.0, 2.0, 3.0])
        with pytest.raises(ValueError):
            build(4, [])

    def test_error_rendering(self):
        err = InvalidValueCount(4, 6, 5)
        assert str(err).startswith("[SkewMatrixError INVALID_VALUE_COUNT (202)]")
        assert isinstance(err, SkewMatrixError)

class TestSkewMatrixImmutability:

    def test_data_is_read_only(self):
        m = build(4, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        with pytest.raises(ValueError):
            m.data[0, 1] = 10.0

    def test_no_item_assignment(self):
        m = build(2, [1.0])
        with pytest.raises(TypeError):
            m[0, 1] = 2.0

    def test_from_array_copies_input(self):
        A = np.array([[0.0, 2.0], [-2.0, 0.0]])
        m = SkewMatrix.from_array(A)
        A[0, 1] = 99.0
        assert m[0, 1] == 2.0

    def test_array_protocol(self):
        m = build(2, [3.0])
        A = np.asarray(m)
        np.testing.assert_array_equal(A, [[0.0, 3.0], [-3.0, 0.0]])
        assert np.array(m, dtype=np.float32).dtype == np.float32

class TestFromArray:

    def test_round_trip(self):
        m = SkewMatrix.random(6, seed=11)
        assert SkewMatrix.from_array(m.data) == m

    def test_not_skew(self):
        A = np.array([[0.0, 1.0], [1.0, 0.0]])
        with pytest.raises(NotSkewSymmetric) as exc:
            SkewMatrix.from_array(A)
        assert exc.value.max_violation == pytest.approx(2.0)

    def test_nonzero_diagonal(self):
        A = np.array([[1.0, 1.0], [-1.0, 0.0]])
        with pytest.raises(NotSkewSymmetric):
            SkewMatrix.from_array(A)

    def test_tolerance(self):
        A = np.array([[0.0, 1.0], [-1.0 + 1e-6, 0.0]])
        with pytest.raises(NotSkewSymmetric):
            SkewMatrix.from_array(A, tol=1e-9)
        assert SkewMatrix.from_array(A, tol=1e-5)[0, 1] == 1.0

    def test_not_square(self):
        with pytest.raises(SkewMatrixError) as exc:
            SkewMatrix.from_array(np.zeros((2, 3)))
        assert exc.value.code is SkewMatrixErrorMsg.NOT_SQUARE

    def test_odd_order(self):
        with pytest.raises(InvalidDimension):
            SkewMatrix.from_array(np.zeros((3, 3)))

class TestSkewHelpers:

    def test_check_skew_symmetric(self):
        assert check_skew_symmetric(np.array([[0.0, 1.0], [-1.0, 0.0]]))
        assert not check_skew_symmetric(np.array([[0.0, 1.0], [1.0, 0.0]]))
        assert check_skew_symmetric(np.zeros((3, 3)))

    def test_random_reproducible(self):
        assert SkewMatrix.random(8, seed=5) == SkewMatrix.random(8, seed=5)
        assert SkewMatrix.random(8, seed=5) != SkewMatrix.random(8, seed=6)

    def test_random_rejects_odd(self):
        with pytest.raises(InvalidDimension):
            SkewMatrix.random(5)

    def test_str_and_repr(self):
        m = build(2, [12.0])
        assert repr(m) == "SkewMatrix(n=2)"
        assert "12." in str(m)

    def test_hashable(self):
        a = build(2, [1.0])
        b = build(2, [1.0])
        assert hash(a) == hash(b)
        assert len({a, b}) == 1
