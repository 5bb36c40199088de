"""
Registered solve operations.

One MatrixSolveOp class covers all four registrations. The scalar type
and the batch flag are constructor parameters:

    MatrixSolve       float32 / float64   inputs must be exactly 2D
    BatchMatrixSolve  float32 / float64   inputs are (..., n, n) and (..., n, k)
"""

from __future__ import annotations

from functools import partial

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from pylinsolve.core.compute.batching import BatchOutcome, run_binary_kernel
from pylinsolve.core.compute.precision import SUPPORTED_DTYPES, check_supported_dtype
from pylinsolve.core.protocols import BinaryMatrixKernel
from pylinsolve.core.registry import register_op
from pylinsolve.dense._kernel import MatrixSolveKernel

MATRIX_SOLVE = 'MatrixSolve'
BATCH_MATRIX_SOLVE = 'BatchMatrixSolve'


class MatrixSolveOp:
    """
    A solve operation bound to one scalar type and one batch mode.

    Calling the op casts both inputs to its scalar type and runs the batch
    driver with the solve kernel.
    """

    def __init__(
        self,
        dtype: DTypeLike,
        supports_batch: bool,
        kernel: BinaryMatrixKernel | None = None,
    ):
        self.dtype = check_supported_dtype(dtype)
        self.supports_batch = supports_batch
        self.kernel = kernel if kernel is not None else MatrixSolveKernel()

    @property
    def name(self) -> str:
        return BATCH_MATRIX_SOLVE if self.supports_batch else MATRIX_SOLVE

    def __call__(
        self,
        matrix: ArrayLike,
        rhs: ArrayLike,
        *,
        max_workers: int | None = None,
    ) -> BatchOutcome:
        """
        Solve every (matrix, rhs) element.

        Returns:
            BatchOutcome; element failures are recorded, not raised

        Raises:
            DimensionError: If ranks or batch dimensions don't fit this op
        """
        matrix_arr = np.asarray(matrix, dtype=self.dtype)
        rhs_arr = np.asarray(rhs, dtype=self.dtype)
        return run_binary_kernel(
            self.kernel,
            matrix_arr,
            rhs_arr,
            supports_batch=self.supports_batch,
            max_workers=max_workers,
        )

    def __repr__(self) -> str:
        return f"MatrixSolveOp(name={self.name!r}, dtype={self.dtype.name!r})"


def _register_all() -> None:
    for name, supports_batch in ((MATRIX_SOLVE, False), (BATCH_MATRIX_SOLVE, True)):
        for dtype in SUPPORTED_DTYPES:
            register_op(name, dtype, partial(MatrixSolveOp, dtype, supports_batch))


_register_all()
