"""
Exception hierarchy for pylinsolve.

All exceptions inherit from PyLinSolveError to allow catching any
library-specific error. Structural problems (shapes, dtypes) and numerical
problems (singular matrices) live on separate branches so callers can tell
"you passed the wrong thing" apart from "the matrix cannot be inverted".

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Messages say what failed, not how to fix the input
    - Element-level errors know which batch element they belong to
"""

from __future__ import annotations

from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from pylinsolve.core.compute.batching import ElementFailure


class PyLinSolveError(Exception):
    """Base exception for all pylinsolve errors."""

    def __init__(self, message: str, batch_index: tuple[int, ...] | None = None):
        super().__init__(message)
        self.batch_index = batch_index

    def with_batch_index(self, batch_index: tuple[int, ...]) -> PyLinSolveError:
        """Tag this error with the batch element it was raised for."""
        self.batch_index = batch_index
        return self


class ValidationError(PyLinSolveError):
    """
    Input validation failed.

    Raised when user-provided inputs cannot be solved at all: non-numeric
    data, unsupported scalar types, non-finite values when finiteness was
    requested, or unknown option values.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised for structural failures: a non-square coefficient matrix, a
    right-hand side whose row count differs from the matrix, or batch
    dimensions that do not line up. Always detected before any
    factorization is attempted.
    """
    pass


class NumericalError(PyLinSolveError):
    """
    Numerical computation failed.

    Base class for errors arising from the numbers themselves rather than
    the shapes that hold them.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is not invertible.

    Raised when LU factorization produces a pivot whose magnitude is not
    strictly positive. Only exact zeros (and NaN) are caught; a tiny
    nonzero pivot passes and may produce very large results.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        min_abs_pivot: Smallest pivot magnitude found during factorization
        batch_index: Index of the failing element in the leading dimensions
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        min_abs_pivot: float | None = None,
        batch_index: tuple[int, ...] | None = None,
    ):
        super().__init__(message, batch_index=batch_index)
        self.matrix_name = matrix_name
        self.min_abs_pivot = min_abs_pivot


class BatchSolveError(PyLinSolveError):
    """
    More than one element of a batched solve failed.

    Attributes:
        failures: Every recorded ElementFailure, in batch order
    """

    def __init__(self, message: str, failures: Sequence['ElementFailure']):
        super().__init__(message)
        self.failures = tuple(failures)
