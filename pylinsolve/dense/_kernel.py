"""
Per-matrix solve kernel.

MatrixSolveKernel implements BinaryMatrixKernel for A @ X = B using LU
with partial pivoting. It is stateless; the factorization lives only for
the duration of one compute_matrix call, so one kernel instance can be
driven from many threads at once.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import SingularMatrixError
from pylinsolve.core.compute.linalg.lu import lu_factor_cpu, lu_solve_cpu, min_abs_pivot
from pylinsolve.dense._shapes import check_matrix_pair, derive_output_shape
from pylinsolve.dense._cost import cost_per_unit


class MatrixSolveKernel:
    """
    Solve one dense square system A @ X = B.

    Uses one general method for every input: no symmetric or positive
    definite shortcuts.
    """

    def derive_shape(
        self,
        matrix_shape: tuple[int, ...],
        rhs_shape: tuple[int, ...],
    ) -> tuple[int, ...]:
        return derive_output_shape(matrix_shape, rhs_shape)

    def cost_per_unit(self, rows: int, rhss: int) -> int:
        return cost_per_unit(rows, rhss)

    def compute_matrix(
        self,
        matrix: NDArray[np.floating[Any]],
        rhs: NDArray[np.floating[Any]],
        out: NDArray[np.floating[Any]],
    ) -> None:
        """
        Solve matrix @ X = rhs into out.

        Algorithm:
            1. Check the pair is square and row-compatible
            2. Empty system: nothing to write
            3. Factor P·A = L·U with partial pivoting
            4. Refuse if any pivot is exactly zero (or NaN)
            5. Substitute and write X

        Only exact zero pivots are caught. A tiny nonzero pivot passes and
        can produce huge or infinite entries in X.

        Raises:
            DimensionError: If the shapes are incompatible
            SingularMatrixError: If the matrix is not invertible
        """
        check_matrix_pair(matrix.shape, rhs.shape)

        # The solution of an empty system is the empty matrix
        if matrix.shape[0] == 0:
            return

        lu = lu_factor_cpu(matrix)
        smallest = min_abs_pivot(lu)
        if not smallest > 0:
            raise SingularMatrixError(
                "Input matrix is not invertible.",
                matrix_name='matrix',
                min_abs_pivot=smallest,
            )

        out[...] = lu_solve_cpu(lu, rhs)
