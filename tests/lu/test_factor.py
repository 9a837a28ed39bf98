"""
Tests for factor(): elimination, permutation record, condition estimate
and singularity detection on the reference backend.
"""

import warnings

import numpy as np
import pytest

from pylinsolve import Solver, Status
from pylinsolve.core.compute.precision import SINGULAR_CONDITION
from pylinsolve.core.exceptions import ConfigurationError, SingularMatrixError
from pylinsolve.lu import LUDesign, factor


def hilbert(n):
    i = np.arange(n)
    return 1.0 / (i[:, None] + i[None, :] + 1.0)


# ═══════════════════════════════════════════════════════════════════════
# Well-conditioned matrices
# ═══════════════════════════════════════════════════════════════════════


class TestFactorBasic:

    def test_identity(self):
        lu = factor(np.eye(3))
        assert lu.status is Status.OK
        assert lu.condition == 1.0
        np.testing.assert_array_equal(lu.pivot, [0, 1, 1])
        np.testing.assert_array_equal(lu.factors, np.eye(3))
        assert lu.determinant == 1.0

    def test_two_by_two(self):
        lu = factor([[2.0, 1.0], [1.0, 3.0]])
        assert lu.status is Status.OK
        assert lu.pivot[0] == 0
        assert lu.parity == 1
        # Negated multiplier stored below the diagonal
        assert lu.factors[1, 0] == pytest.approx(-0.5)
        assert lu.factors[1, 1] == pytest.approx(2.5)
        assert lu.determinant == pytest.approx(5.0)

    def test_permutation_matrix(self):
        lu = factor([[0.0, 1.0], [1.0, 0.0]])
        assert lu.status is Status.OK
        assert lu.pivot[0] == 1
        assert lu.parity == -1
        assert lu.determinant == pytest.approx(-1.0)

    def test_interchange_at_every_step(self, pivoting_matrix):
        lu = factor(pivoting_matrix)
        np.testing.assert_array_equal(lu.pivot, [2, 2, 1])
        np.testing.assert_allclose(np.diag(lu.factors), [7.0, 6.0 / 7.0, -0.5])
        assert lu.determinant == pytest.approx(-3.0)

    def test_multiplier_magnitudes_bounded(self, rng):
        """Partial pivoting keeps every multiplier at most 1 in magnitude."""
        A = rng.standard_normal((12, 12))
        lu = factor(A)
        assert np.all(np.abs(np.tril(lu.factors, -1)) <= 1.0)

    def test_determinant_matches_numpy(self, rng):
        A = rng.standard_normal((6, 6))
        lu = factor(A)
        assert lu.determinant == pytest.approx(np.linalg.det(A), rel=1e-10)

    def test_one_by_one(self):
        lu = factor([[5.0]])
        assert lu.status is Status.OK
        assert lu.condition == 1.0
        np.testing.assert_array_equal(lu.pivot, [1])
        assert lu.determinant == 5.0

    def test_norm_recorded(self):
        lu = factor([[1.0, -4.0], [2.0, 3.0]])
        assert lu.norm == 7.0

    def test_caller_matrix_untouched(self, pivoting_matrix):
        original = pivoting_matrix.copy()
        factor(pivoting_matrix)
        np.testing.assert_array_equal(pivoting_matrix, original)

    def test_overwrite_a_factors_in_place(self, pivoting_matrix):
        lu = factor(pivoting_matrix, overwrite_a=True)
        assert np.shares_memory(lu.factors, pivoting_matrix)
        assert pivoting_matrix[0, 0] == 7.0

    def test_info_and_timing(self):
        lu = factor(np.eye(2))
        assert lu.backend_name == 'cpu_gauss'
        assert lu.info['method'] == 'gaussian_elimination'
        assert lu.info['status'] == 'ok'
        assert 'elimination' in lu.timing
        assert 'condition_estimate' in lu.timing


# ═══════════════════════════════════════════════════════════════════════
# Strided buffers
# ═══════════════════════════════════════════════════════════════════════


class TestStride:

    def test_strided_matches_unstrided(self, pivoting_matrix):
        plain = factor(pivoting_matrix)
        strided = factor(pivoting_matrix, ndim=6)
        assert strided.ndim == 6
        np.testing.assert_allclose(strided.factors, plain.factors, rtol=1e-15)
        np.testing.assert_array_equal(strided.pivot, plain.pivot)
        assert strided.condition == pytest.approx(plain.condition, rel=1e-15)

    def test_padding_untouched(self, pivoting_matrix):
        buf = np.full(3 * 5, -99.0)
        buf.reshape(3, 5)[:, :3] = pivoting_matrix
        factor(LUDesign.from_buffer(buf, 3, ndim=5))
        assert np.all(buf.reshape(3, 5)[:, 3:] == -99.0)

    def test_leading_block_of_larger_buffer(self, pivoting_matrix):
        """Only the leading n x n block of an oversized buffer is factored."""
        buf = np.zeros(30)
        buf[:15].reshape(3, 5)[:, :3] = pivoting_matrix
        tail = buf[15:].copy()
        lu = factor(LUDesign.from_buffer(buf, 3, ndim=5))
        assert lu.determinant == pytest.approx(-3.0)
        np.testing.assert_array_equal(buf[15:], tail)


# ═══════════════════════════════════════════════════════════════════════
# Badly scaled matrices
# ═══════════════════════════════════════════════════════════════════════


class TestScaling:
    """Results must not depend on the magnitude of the entries."""

    def test_large_entries_solve(self):
        A = np.array([[2.0, 1.0], [1.0, 3.0]]) * 1e16
        lu = factor(A)
        assert lu.status is Status.OK
        assert lu.factors[1, 1] == pytest.approx(2.5e16)
        assert lu.determinant == pytest.approx(5e32, rel=1e-12)
        x = Solver(lu).solve(np.array([3.0, 4.0]) * 1e16)
        np.testing.assert_allclose(x, [1.0, 1.0], rtol=1e-12)

    def test_large_entries_match_unscaled(self, rng):
        A = rng.standard_normal((6, 6))
        plain = factor(A)
        scaled = factor(A * 1e20)
        np.testing.assert_array_equal(scaled.pivot, plain.pivot)
        np.testing.assert_allclose(np.tril(scaled.factors, -1), np.tril(plain.factors, -1),
                                   rtol=1e-10, atol=1e-12)
        np.testing.assert_allclose(np.triu(scaled.factors), np.triu(plain.factors) * 1e20,
                                   rtol=1e-10)
        assert scaled.condition == pytest.approx(plain.condition, rel=1e-8)

    def test_entries_near_overflow(self):
        A = np.array([[1e300, 1e300], [1e300, -1e300]])
        lu = factor(A)
        assert lu.status is Status.OK
        assert lu.factors[1, 1] == pytest.approx(-2e300)
        x = Solver(lu).solve(np.array([2e300, 0.0]))
        np.testing.assert_allclose(x, [1.0, 1.0], rtol=1e-12)

    def test_tiny_entries_condition_finite(self):
        lu = factor(np.diag([1e-300, 1e-300]))
        assert lu.status is Status.OK
        assert np.isfinite(lu.condition)
        assert lu.condition >= 1.0
        assert lu.condition == pytest.approx(1.0)

    def test_one_by_one_tiny_element_is_ok(self):
        """A 1x1 matrix is singular only when its element is exactly zero."""
        lu = factor([[1e-300]])
        assert lu.status is Status.OK
        assert lu.condition == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Condition estimate
# ═══════════════════════════════════════════════════════════════════════


class TestCondition:

    def test_at_least_one(self, rng):
        lu = factor(rng.standard_normal((5, 5)))
        assert lu.condition >= 1.0

    def test_bounded_by_true_condition(self, rng):
        """The estimate never exceeds ||A||_1 * ||A^-1||_1."""
        for _ in range(5):
            A = rng.standard_normal((7, 7))
            true_cond = np.linalg.cond(A, 1)
            lu = factor(A)
            assert lu.condition <= true_cond * (1.0 + 1e-8)

    def test_scaled_identity(self):
        lu = factor(4.0 * np.eye(4))
        assert lu.condition == pytest.approx(1.0)

    def test_hilbert_ill_conditioned(self):
        lu = factor(hilbert(8))
        assert lu.status is Status.OK
        assert lu.condition > 1e4
        assert lu.condition <= np.linalg.cond(hilbert(8), 1) * (1.0 + 1e-6)
        assert any('ill-conditioned' in w for w in lu.warnings)


# ═══════════════════════════════════════════════════════════════════════
# Singular matrices
# ═══════════════════════════════════════════════════════════════════════


class TestSingular:

    def test_duplicate_rows(self):
        with pytest.warns(RuntimeWarning, match="singular"):
            lu = factor([[1.0, 2.0], [1.0, 2.0]])
        assert lu.status is Status.SINGULAR
        assert lu.is_singular
        assert lu.condition == SINGULAR_CONDITION
        assert lu.singular_step == 1

    def test_zero_row(self):
        with pytest.warns(RuntimeWarning, match="singular"):
            lu = factor([[1.0, 2.0], [0.0, 0.0]])
        assert lu.status is Status.SINGULAR
        assert lu.singular_step == 1

    def test_zero_column_stops_elimination(self):
        A = np.array([[0.0, 1.0, 2.0], [0.0, 3.0, 4.0], [0.0, 5.0, 6.0]])
        with pytest.warns(RuntimeWarning, match="singular"):
            lu = factor(A)
        assert lu.singular_step == 0
        assert lu.condition == SINGULAR_CONDITION
        # Elimination stopped before touching anything
        np.testing.assert_array_equal(lu.factors, A)

    def test_zero_matrix(self):
        with pytest.warns(RuntimeWarning, match="singular"):
            lu = factor(np.zeros((3, 3)))
        assert lu.status is Status.SINGULAR
        assert lu.singular_step == 0

    def test_one_by_one_zero(self):
        with pytest.warns(RuntimeWarning, match="singular"):
            lu = factor([[0.0]])
        assert lu.status is Status.SINGULAR
        assert lu.condition == SINGULAR_CONDITION

    def test_classic_rank_two(self):
        A = [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]]
        with pytest.warns(RuntimeWarning, match="singular"):
            lu = factor(A)
        assert lu.status is Status.SINGULAR

    def test_condition_too_large_to_add_one(self):
        """Every pivot passes the threshold but cond + 1 == cond."""
        with pytest.warns(RuntimeWarning, match="singular"):
            lu = factor(hilbert(12))
        assert lu.status is Status.SINGULAR
        assert lu.singular_step is None
        assert lu.condition + 1.0 == lu.condition
        assert lu.condition < SINGULAR_CONDITION
        with pytest.raises(SingularMatrixError) as exc_info:
            Solver(lu).solve(np.ones(12))
        assert exc_info.value.step is None
        assert "step" not in str(exc_info.value)

    def test_determinant_zero_when_singular(self):
        with pytest.warns(RuntimeWarning):
            lu = factor([[1.0, 2.0], [2.0, 4.0]])
        assert lu.determinant == 0.0

    def test_singular_recorded_in_result(self):
        with pytest.warns(RuntimeWarning):
            lu = factor([[1.0, 2.0], [2.0, 4.0]])
        assert lu.info['status'] == 'singular'
        assert any('singular' in w for w in lu.warnings)

    def test_no_warning_when_ok(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            factor(np.eye(3))


# ═══════════════════════════════════════════════════════════════════════
# Configuration errors
# ═══════════════════════════════════════════════════════════════════════


class TestFactorErrors:

    def test_unknown_backend(self):
        with pytest.raises(ConfigurationError, match="Unknown backend"):
            factor(np.eye(2), backend='gpu')

    def test_unknown_backend_leaves_matrix_alone(self):
        A = np.array([[0.0, 1.0], [1.0, 0.0]])
        with pytest.raises(ConfigurationError):
            factor(A, overwrite_a=True, backend='gpu')
        np.testing.assert_array_equal(A, [[0.0, 1.0], [1.0, 0.0]])

    def test_rectangular(self):
        with pytest.raises(ConfigurationError, match="square"):
            factor(np.zeros((2, 3)))

    def test_empty(self):
        with pytest.raises(ConfigurationError, match="empty"):
            factor(np.zeros((0, 0)))

    def test_infinite_entry(self):
        with pytest.raises(ConfigurationError, match="non-finite"):
            factor([[1.0, np.inf], [0.0, 1.0]])

    def test_configuration_error_status(self):
        with pytest.raises(ConfigurationError) as exc_info:
            factor(np.zeros((2, 3)))
        assert exc_info.value.status is Status.CONFIGURATION_ERROR
