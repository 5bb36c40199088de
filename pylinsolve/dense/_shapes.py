"""
Shape validation and output-shape derivation for linear solves.

Both checks are structural: they look only at shapes, run before any
factorization, and raise DimensionError so a shape problem is never
confused with a singular matrix.
"""

from __future__ import annotations

from pylinsolve.core.exceptions import DimensionError


def derive_output_shape(
    matrix_shape: tuple[int, ...],
    rhs_shape: tuple[int, ...],
) -> tuple[int, ...]:
    """
    Shape of X for A @ X = B.

    Same shape as the matrix with its last dimension replaced by the
    number of right-hand-side columns. Works for a single (rows, cols)
    pair and for whole (..., rows, cols) stacks alike.

    Raises:
        DimensionError: If the ranks differ or are below 2
    """
    if len(matrix_shape) != len(rhs_shape):
        raise DimensionError(
            f"Input matrix and rhs must have the same rank, "
            f"got {len(matrix_shape)} and {len(rhs_shape)}"
        )
    if len(matrix_shape) < 2:
        raise DimensionError(
            f"Input matrix must be at least 2D, got shape {tuple(matrix_shape)}"
        )
    return tuple(matrix_shape[:-1]) + (rhs_shape[-1],)


def check_matrix_pair(
    matrix_shape: tuple[int, ...],
    rhs_shape: tuple[int, ...],
) -> None:
    """
    Verify one (matrix, rhs) pair can be solved.

    Only the trailing two dimensions are inspected.

    Raises:
        DimensionError: "Input matrix must be square." or
            "Input matrix and rhs are incompatible."
    """
    rows, cols = matrix_shape[-2:]
    if rows != cols:
        raise DimensionError("Input matrix must be square.")
    if rows != rhs_shape[-2]:
        raise DimensionError("Input matrix and rhs are incompatible.")
