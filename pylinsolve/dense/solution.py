"""
Solution wrapper for linear solves.

SolveSolution wraps Result[SolveParams] with accessors, residual
diagnostics, failure handling and a printable summary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.result import Result
from pylinsolve.core.exceptions import BatchSolveError
from pylinsolve.core.compute.batching import ElementFailure
from pylinsolve.core.compute.tolerances import select_tolerance
from pylinsolve.dense._common import SolveParams

if TYPE_CHECKING:
    from pylinsolve.dense.design import SolveDesign


@dataclass
class SolveSolution:
    """
    User-facing result of solve().

    X has the shape of B: batch_shape + (n, k), or batch_shape + (n,) when
    B was a stack of vectors. Failed elements are NaN and listed in
    `failures`.
    """
    _result: Result[SolveParams]
    _design: 'SolveDesign'

    # --- Core fields ---

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Solution X."""
        return self._result.params.solution

    @property
    def failures(self) -> tuple[ElementFailure, ...]:
        """Elements that could not be solved, in batch order."""
        return self._result.params.failures

    @property
    def n_failed(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        """True when every element was solved."""
        return not self.failures

    @property
    def failed_mask(self) -> NDArray[np.bool_]:
        """Boolean array over the batch shape, True where solving failed."""
        mask = np.zeros(self.batch_shape, dtype=bool)
        for failure in self.failures:
            mask[failure.index] = True
        return mask

    @property
    def batch_shape(self) -> tuple[int, ...]:
        return self._result.params.batch_shape

    @property
    def dtype(self) -> np.dtype:
        return self._result.params.dtype

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Diagnostics ---

    def residuals(self) -> NDArray[np.floating[Any]]:
        """A @ X - B, in the shape of B. NaN for failed elements."""
        X = self.x[..., np.newaxis] if self._design.vector_rhs else self.x
        R = np.matmul(self._design.A, X) - self._design.B
        return self._design.squeeze_solution(R)

    def relative_residual(self) -> float:
        """
        Largest ||A X - B|| / (||A|| ||X|| + ||B||) over solved elements.

        Frobenius norms per element. 0.0 when nothing was solved or the
        systems are empty.
        """
        design = self._design
        if design.n == 0 or design.k == 0 or design.n_elements == 0:
            return 0.0
        A = design.A.reshape((-1,) + design.A.shape[-2:])
        B = design.B.reshape((-1,) + design.B.shape[-2:])
        X = self.x.reshape(B.shape)
        solved = ~self.failed_mask.reshape(-1)
        if not solved.any():
            return 0.0
        A, B, X = A[solved], B[solved], X[solved]
        num = np.linalg.norm(np.matmul(A, X) - B, axis=(-2, -1))
        den = (
            np.linalg.norm(A, axis=(-2, -1)) * np.linalg.norm(X, axis=(-2, -1))
            + np.linalg.norm(B, axis=(-2, -1))
        )
        with np.errstate(divide='ignore', invalid='ignore'):
            rel = np.where(den > 0, num / den, num)
        return float(np.max(rel))

    def raise_for_failures(self) -> None:
        """
        Raise if any element failed.

        A single failure re-raises that element's own exception
        (DimensionError or SingularMatrixError, with batch_index set).
        Several failures raise BatchSolveError carrying all of them.
        """
        if not self.failures:
            return
        if len(self.failures) == 1:
            raise self.failures[0].error
        first = self.failures[0]
        raise BatchSolveError(
            f"{len(self.failures)} of {self.info.get('n_elements')} systems could "
            f"not be solved; first at index {first.index}: {first.message}",
            failures=self.failures,
        )

    # --- Display ---

    def summary(self) -> str:
        """
        Plain-text report.

        Produces:
            Linear solve: LU with partial pivoting
            Backend:        cpu_lu
            Scalar type:    float64
            Batch shape:    (4,)
            System size:    3 x 3, 1 right-hand side(s)
            Solved:         3 of 4
            Max rel. resid: 1.2e-17 (within cpu_fp64 tolerance)

            Failures:
              (2,): Input matrix is not invertible.
        """
        params = self._result.params
        n_elements = self.info.get('n_elements', 1)
        tier = select_tolerance(self.backend_name, self.dtype)
        rel = self.relative_residual()
        verdict = 'within' if rel <= tier.rtol else 'OUTSIDE'

        lines = [
            "Linear solve: LU with partial pivoting",
            f"Backend:        {self.backend_name}",
            f"Scalar type:    {self.dtype.name}",
            f"Batch shape:    {self.batch_shape}",
            f"System size:    {params.n} x {params.n}, {params.k} right-hand side(s)",
            f"Solved:         {n_elements - self.n_failed} of {n_elements}",
            f"Max rel. resid: {rel:.3g} ({verdict} {tier.name} tolerance)",
        ]

        if self.failures:
            lines.append("")
            lines.append("Failures:")
            for failure in self.failures[:10]:
                lines.append(f"  {failure.index}: {failure.message}")
            if len(self.failures) > 10:
                lines.append(f"  ... and {len(self.failures) - 10} more")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SolveSolution(batch_shape={self.batch_shape}, "
            f"n={self._result.params.n}, k={self._result.params.k}, "
            f"dtype={self.dtype.name!r}, n_failed={self.n_failed}, "
            f"backend={self.backend_name!r})"
        )
