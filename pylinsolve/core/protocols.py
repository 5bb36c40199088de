"""
Core protocols for pylinsolve.

These define structural interfaces that concrete kernels and backends must
satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so the batch driver stays decoupled from the numeric kernels it
drives.

Design Principles:
    - Minimal contracts: prescribe only what the driver actually calls
    - Kernels are per-matrix; batching belongs to the driver
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, runtime_checkable, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pylinsolve.core.result import Result

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class BinaryMatrixKernel(Protocol):
    """
    Per-matrix operation over a (matrix, rhs) pair.

    A kernel knows nothing about batches. The batch driver calls
    derive_shape and cost_per_unit once with the trailing 2-D shapes, then
    compute_matrix once per batch element with 2-D views.

    Kernels must not keep state between compute_matrix calls: the driver
    may run several of them concurrently on different threads.
    """

    def derive_shape(
        self,
        matrix_shape: tuple[int, ...],
        rhs_shape: tuple[int, ...],
    ) -> tuple[int, ...]:
        """
        Output shape for one element (or a whole stack) of inputs.

        Raises:
            DimensionError: If the shapes cannot be combined
        """
        ...

    def cost_per_unit(self, rows: int, rhss: int) -> int:
        """
        Advisory cost of computing one element, used to size shards.

        Must be non-negative and must never overflow.
        """
        ...

    def compute_matrix(
        self,
        matrix: NDArray[np.floating],
        rhs: NDArray[np.floating],
        out: NDArray[np.floating],
    ) -> None:
        """
        Compute one element, writing into out.

        Raises:
            PyLinSolveError: If this element cannot be computed. The driver
                records the error against the element and carries on.
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated design and produces a Result. The
    backend handles all hardware-specific computation (CPU/GPU, precision,
    batching).

    Backends are stateless beyond their construction-time configuration.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_lu', 'gpu_lu_cuda'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Returns:
            Result envelope containing parameter payload and metadata
        """
        ...
