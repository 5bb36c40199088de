"""
Generic result container for pylinsolve computations.

Every backend returns its payload wrapped in Result. The envelope carries
the metadata that is the same regardless of backend (timing, which backend
ran, non-fatal warnings) while the payload type stays specific to the
operation.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, shard count, failures)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a result can't drift after it's reported
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The operation-specific payload type

    Attributes:
        params: Operation payload (solution array, failures, ...)
        info: Structured metadata (method, element counts, shard count)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=SolveParams(...),
        ...     info={'method': 'lu_partial_pivot', 'n_elements': 8},
        ...     timing={'total_seconds': 0.01, 'solve': 0.008},
        ...     backend_name='cpu_lu',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
