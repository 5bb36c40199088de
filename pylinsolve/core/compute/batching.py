"""
Generic batch driver for binary matrix kernels.

Given a kernel implementing BinaryMatrixKernel and two stacks of matrices,
the driver:

1. Validates ranks and leading (batch) dimensions
2. Asks the kernel for the output shape and allocates the output
3. Asks the kernel for a per-element cost and plans shards from it
4. Calls kernel.compute_matrix once per element, possibly in parallel

Failures are per element. A kernel error is recorded against the element
that raised it, that element's output slice is left as NaN, and every
other element still runs. Whether a partial failure fails the whole call
is for the caller to decide.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import prod
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import PyLinSolveError
from pylinsolve.core.protocols import BinaryMatrixKernel
from pylinsolve.core.compute.sharding import parallel_for
from pylinsolve.core.validation import (
    check_batch_dims,
    check_min_ndim,
    check_ndim,
    check_same_ndim,
)


@dataclass(frozen=True)
class ElementFailure:
    """
    One batch element that could not be computed.

    Attributes:
        index: Position in the leading dimensions, () for a single matrix
        error: The exception the kernel raised for this element
    """
    index: tuple[int, ...]
    error: PyLinSolveError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class BatchOutcome:
    """
    Everything the driver produced for one call.

    Attributes:
        output: Output stack; failed elements are NaN
        failures: Failed elements in batch order
        n_elements: Number of (matrix, rhs) pairs processed
        n_shards: Number of shards the work was split into
        cost_per_unit: Kernel cost estimate the split was based on
    """
    output: NDArray[np.floating[Any]]
    failures: tuple[ElementFailure, ...]
    n_elements: int
    n_shards: int
    cost_per_unit: int


def validate_batch_inputs(
    matrix: NDArray[Any],
    rhs: NDArray[Any],
    *,
    supports_batch: bool,
) -> None:
    """
    Check ranks and batch dimensions before any work is scheduled.

    Single-matrix mode requires both inputs to be exactly 2D. Batch mode
    requires both to be at least 2D, of equal rank, with identical
    leading dimensions.

    Raises:
        DimensionError: On any mismatch
    """
    if supports_batch:
        check_min_ndim(matrix, 2, 'matrix')
        check_min_ndim(rhs, 2, 'rhs')
        check_same_ndim(matrix, rhs, names=('matrix', 'rhs'))
        check_batch_dims(matrix, rhs, names=('matrix', 'rhs'))
    else:
        check_ndim(matrix, 2, 'matrix')
        check_ndim(rhs, 2, 'rhs')


def _batch_index(flat_index: int, batch_shape: tuple[int, ...]) -> tuple[int, ...]:
    if not batch_shape:
        return ()
    return tuple(int(i) for i in np.unravel_index(flat_index, batch_shape))


def run_binary_kernel(
    kernel: BinaryMatrixKernel,
    matrix: NDArray[np.floating[Any]],
    rhs: NDArray[np.floating[Any]],
    *,
    supports_batch: bool,
    max_workers: int | None = None,
) -> BatchOutcome:
    """
    Drive a kernel over every (matrix, rhs) element of a batch.

    Args:
        kernel: Per-matrix kernel
        matrix: Coefficient stack, shape (..., rows, cols)
        rhs: Right-hand side stack, shape (..., rows, rhss)
        supports_batch: Whether leading dimensions are allowed
        max_workers: Thread count for the shard pool (None = CPU count)

    Returns:
        BatchOutcome with the output stack and any per-element failures

    Raises:
        DimensionError: If ranks or batch dimensions are inconsistent, or
            the kernel rejects the stack shapes outright
    """
    validate_batch_inputs(matrix, rhs, supports_batch=supports_batch)

    output_shape = kernel.derive_shape(matrix.shape, rhs.shape)
    output = np.full(output_shape, np.nan, dtype=matrix.dtype)

    batch_shape = matrix.shape[:-2]
    n_elements = prod(batch_shape)
    matrices = matrix.reshape((n_elements,) + matrix.shape[-2:])
    rhss = rhs.reshape((n_elements,) + rhs.shape[-2:])
    outputs = output.reshape((n_elements,) + output.shape[-2:])

    cost = kernel.cost_per_unit(matrix.shape[-2], rhs.shape[-1])

    # Each shard writes only its own indices
    errors: list[PyLinSolveError | None] = [None] * n_elements

    def work(start: int, stop: int) -> None:
        for i in range(start, stop):
            try:
                kernel.compute_matrix(matrices[i], rhss[i], outputs[i])
            except PyLinSolveError as e:
                outputs[i].fill(np.nan)
                errors[i] = e.with_batch_index(_batch_index(i, batch_shape))

    n_shards = parallel_for(n_elements, cost, work, max_workers=max_workers)

    failures = tuple(
        ElementFailure(index=err.batch_index or (), error=err)
        for err in errors
        if err is not None
    )

    return BatchOutcome(
        output=output,
        failures=failures,
        n_elements=n_elements,
        n_shards=n_shards,
        cost_per_unit=cost,
    )
