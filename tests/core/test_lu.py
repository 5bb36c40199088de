"""
Tests for LU decomposition with partial pivoting.

Factors are checked against their defining identity A[perm] = L @ U and
against SciPy's LAPACK-backed getrf; solves are checked against
numpy.linalg.solve.
"""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal
from scipy.linalg import lu_factor

from pylinsolve.core.exceptions import DimensionError
from pylinsolve.core.compute.linalg import (
    LUResult,
    lu_factor_cpu,
    lu_solve_cpu,
    min_abs_pivot,
)


def _lower(result):
    return np.tril(result.lu, k=-1) + np.eye(result.n, dtype=result.lu.dtype)


def _upper(result):
    return np.triu(result.lu)


# ═══════════════════════════════════════════════════════════════════════
# Factorization
# ═══════════════════════════════════════════════════════════════════════


class TestLUFactor:

    def test_reconstruction(self, rng):
        A = rng.standard_normal((6, 6))
        result = lu_factor_cpu(A)
        assert isinstance(result, LUResult)
        assert_allclose(A[result.perm], _lower(result) @ _upper(result), rtol=1e-10, atol=1e-12)

    def test_matches_lapack_getrf(self, rng):
        A = rng.standard_normal((7, 7))
        lu_ref, piv_ref = lu_factor(A)
        result = lu_factor_cpu(A)
        assert_array_equal(result.pivots, piv_ref)
        assert_allclose(result.lu, lu_ref, rtol=1e-10, atol=1e-12)

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_large_matrix_matches_lapack(self, rng, dtype):
        A = rng.standard_normal((300, 300)).astype(dtype)
        lu_ref, piv_ref = lu_factor(A)
        result = lu_factor_cpu(A)
        assert result.lu.dtype == dtype
        assert_array_equal(result.pivots, piv_ref)
        assert_allclose(result.lu, lu_ref, rtol=1e-5, atol=1e-5)

    def test_zero_pivot_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = lu_factor_cpu(np.zeros((3, 3)))
        assert_array_equal(result.lu, 0.0)

    def test_largest_pivot_chosen(self):
        A = np.array([[1.0, 2.0], [3.0, 4.0]])
        result = lu_factor_cpu(A)
        assert result.pivots[0] == 1
        assert_array_equal(result.perm, [1, 0])
        assert _upper(result)[0, 0] == 3.0

    def test_first_row_wins_ties(self):
        A = np.array([[-2.0, 1.0], [2.0, 5.0]])
        result = lu_factor_cpu(A)
        assert result.pivots[0] == 0

    def test_factors_are_triangular(self, rng):
        result = lu_factor_cpu(rng.standard_normal((5, 5)))
        assert_array_equal(np.diagonal(_lower(result)), np.ones(5))
        assert_array_equal(np.triu(_lower(result), k=1), 0.0)
        assert_array_equal(np.tril(_upper(result), k=-1), 0.0)

    def test_multipliers_bounded(self, rng):
        result = lu_factor_cpu(rng.standard_normal((8, 8)))
        assert np.all(np.abs(np.tril(result.lu, k=-1)) <= 1.0)

    def test_input_not_modified(self, rng):
        A = rng.standard_normal((4, 4))
        A_copy = A.copy()
        lu_factor_cpu(A)
        assert_array_equal(A, A_copy)

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_dtype_preserved(self, rng, dtype):
        A = rng.standard_normal((4, 4)).astype(dtype)
        assert lu_factor_cpu(A).lu.dtype == dtype

    def test_zero_column_skipped(self):
        A = np.array([
            [0.0, 1.0, 2.0],
            [0.0, 3.0, 4.0],
            [0.0, 5.0, 7.0],
        ])
        result = lu_factor_cpu(A)
        assert result.lu[0, 0] == 0.0
        assert np.all(np.isfinite(result.lu))
        assert_allclose(A[result.perm], _lower(result) @ _upper(result), atol=1e-14)

    def test_empty_matrix(self):
        result = lu_factor_cpu(np.zeros((0, 0)))
        assert result.n == 0
        assert result.perm.shape == (0,)

    @pytest.mark.parametrize("shape", [(3, 2), (2, 3), (2, 2, 2), (3,)])
    def test_non_square_rejected(self, shape):
        with pytest.raises(DimensionError):
            lu_factor_cpu(np.ones(shape))


# ═══════════════════════════════════════════════════════════════════════
# Pivot magnitude
# ═══════════════════════════════════════════════════════════════════════


class TestMinAbsPivot:

    def test_regular_matrix(self):
        A = np.array([[2.0, 0.0], [0.0, -4.0]])
        assert min_abs_pivot(lu_factor_cpu(A)) == 2.0

    def test_singular_matrix(self, singular_matrix):
        assert min_abs_pivot(lu_factor_cpu(singular_matrix)) == 0.0

    def test_zero_matrix(self):
        assert min_abs_pivot(lu_factor_cpu(np.zeros((3, 3)))) == 0.0

    def test_nan_propagates(self):
        A = np.array([[np.nan, 1.0], [1.0, 1.0]])
        assert np.isnan(min_abs_pivot(lu_factor_cpu(A)))

    def test_empty_is_inf(self):
        assert min_abs_pivot(lu_factor_cpu(np.zeros((0, 0)))) == np.inf


# ═══════════════════════════════════════════════════════════════════════
# Substitution
# ═══════════════════════════════════════════════════════════════════════


class TestLUSolve:

    def test_matches_numpy(self, well_conditioned_system):
        A, B, X_true = well_conditioned_system
        X = lu_solve_cpu(lu_factor_cpu(A), B)
        assert_allclose(X, np.linalg.solve(A, B), rtol=1e-10, atol=1e-12)
        assert_allclose(X, X_true, rtol=1e-10, atol=1e-12)

    def test_permutation_needed(self):
        A = np.array([[0.0, 1.0], [1.0, 0.0]])
        B = np.array([[3.0], [5.0]])
        assert_allclose(lu_solve_cpu(lu_factor_cpu(A), B), [[5.0], [3.0]])

    def test_float32(self, well_conditioned_system):
        A, B, X_true = (m.astype(np.float32) for m in well_conditioned_system)
        X = lu_solve_cpu(lu_factor_cpu(A), B)
        assert X.dtype == np.float32
        assert_allclose(X, X_true, rtol=1e-4, atol=1e-5)

    def test_zero_rhs_columns(self, rng):
        result = lu_factor_cpu(rng.standard_normal((3, 3)))
        X = lu_solve_cpu(result, np.zeros((3, 0)))
        assert X.shape == (3, 0)

    def test_row_mismatch(self, rng):
        result = lu_factor_cpu(rng.standard_normal((3, 3)))
        with pytest.raises(DimensionError, match="4 rows"):
            lu_solve_cpu(result, np.ones((4, 1)))
