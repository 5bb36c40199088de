"""
Tests for pylinsolve exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyLinSolveError)
    - Shape errors and numerical errors live on separate branches
    - Diagnostic attributes on SingularMatrixError and BatchSolveError
    - batch_index tagging
"""

import pytest

from pylinsolve.core.compute.batching import ElementFailure
from pylinsolve.core.exceptions import (
    BatchSolveError,
    DimensionError,
    NumericalError,
    PyLinSolveError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyLinSolveError."""

    def test_validation_error_is_pylinsolve_error(self):
        with pytest.raises(PyLinSolveError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_singular_matrix_error_is_pylinsolve_error(self):
        with pytest.raises(PyLinSolveError):
            raise SingularMatrixError("singular")

    def test_shape_and_singularity_are_distinct(self):
        """A shape error must never be mistaken for a singular matrix."""
        assert not isinstance(DimensionError("x"), NumericalError)
        assert not isinstance(SingularMatrixError("x"), ValidationError)

    def test_batch_solve_error_is_pylinsolve_error(self):
        with pytest.raises(PyLinSolveError):
            raise BatchSolveError("several failed", failures=[])


# ═══════════════════════════════════════════════════════════════════════
# batch_index
# ═══════════════════════════════════════════════════════════════════════


class TestBatchIndex:
    """Element-level errors know which element they belong to."""

    def test_default_is_none(self):
        assert DimensionError("x").batch_index is None

    def test_with_batch_index_sets_and_returns_self(self):
        err = DimensionError("Input matrix must be square.")
        tagged = err.with_batch_index((2, 1))
        assert tagged is err
        assert err.batch_index == (2, 1)

    def test_constructor_argument(self):
        err = SingularMatrixError("singular", batch_index=(0,))
        assert err.batch_index == (0,)


# ═══════════════════════════════════════════════════════════════════════
# SingularMatrixError
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries pivot diagnostics."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "Input matrix is not invertible.",
            matrix_name="matrix",
            min_abs_pivot=0.0,
            batch_index=(3,),
        )
        assert str(err) == "Input matrix is not invertible."
        assert err.matrix_name == "matrix"
        assert err.min_abs_pivot == 0.0
        assert err.batch_index == (3,)

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.min_abs_pivot is None
        assert err.batch_index is None


# ═══════════════════════════════════════════════════════════════════════
# BatchSolveError
# ═══════════════════════════════════════════════════════════════════════


class TestBatchSolveError:

    def test_failures_stored_as_tuple(self):
        failures = [
            ElementFailure(index=(0,), error=SingularMatrixError("a")),
            ElementFailure(index=(2,), error=DimensionError("b")),
        ]
        err = BatchSolveError("2 failed", failures=failures)
        assert isinstance(err.failures, tuple)
        assert [f.index for f in err.failures] == [(0,), (2,)]
        assert err.failures[1].message == "b"
