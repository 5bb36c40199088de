"""
Core infrastructure for pylinsolve.

This module provides shared abstractions and utilities used by the
operation modules (currently dense).

Key components:
    protocols: BinaryMatrixKernel, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    registry: Named op registry keyed by (name, scalar type)
    compute: Hardware detection, timing, batching, linear algebra kernels
"""

from pylinsolve.core.protocols import BinaryMatrixKernel, Backend
from pylinsolve.core.result import Result
from pylinsolve.core.exceptions import (
    PyLinSolveError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    BatchSolveError,
)

__all__ = [
    # Protocols
    "BinaryMatrixKernel",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyLinSolveError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "BatchSolveError",
]
