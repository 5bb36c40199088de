"""
CPU reference backend for linear solves.

Routes the design to the registered MatrixSolve / BatchMatrixSolve op for
its scalar type. The op drives the per-matrix LU kernel over the batch,
splitting the work across threads according to the kernel's cost
estimate.
"""

from __future__ import annotations

from typing import Any

from pylinsolve.core.result import Result
from pylinsolve.core.registry import get_op
from pylinsolve.core.compute.timing import Timer
from pylinsolve.dense._common import SolveParams
from pylinsolve.dense.design import SolveDesign
from pylinsolve.dense.ops import BATCH_MATRIX_SOLVE, MATRIX_SOLVE


class CPULUBackend:
    """
    CPU backend using LU decomposition with partial pivoting.

    Implements the Backend protocol for SolveDesign -> SolveParams.
    """

    def __init__(self, max_workers: int | None = None):
        """
        Args:
            max_workers: Thread count for batched solves. None uses the
                CPU count; 1 runs every element on the calling thread.
        """
        self._max_workers = max_workers

    @property
    def name(self) -> str:
        return 'cpu_lu'

    def solve(self, design: SolveDesign) -> Result[SolveParams]:
        """
        Solve every system in the design.

        Element failures (non-square A, singular A) are recorded in the
        payload rather than raised.
        """
        timer = Timer()
        timer.start()

        op_name = BATCH_MATRIX_SOLVE if design.is_batched else MATRIX_SOLVE
        op = get_op(op_name, design.dtype)

        with timer.section('solve'):
            outcome = op(design.A, design.B, max_workers=self._max_workers)

        timer.stop()

        params = SolveParams(
            solution=design.squeeze_solution(outcome.output),
            failures=outcome.failures,
            batch_shape=design.batch_shape,
            n=design.n,
            k=design.k,
            dtype=design.dtype,
        )

        info: dict[str, Any] = {
            'method': 'lu_partial_pivot',
            'op': op_name,
            'n_elements': outcome.n_elements,
            'n_failed': len(outcome.failures),
            'n_shards': outcome.n_shards,
            'cost_per_unit': outcome.cost_per_unit,
        }

        warnings_list: list[str] = []
        if outcome.failures:
            warnings_list.append(
                f"{len(outcome.failures)} of {outcome.n_elements} systems "
                f"could not be solved"
            )

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
