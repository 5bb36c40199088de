"""
pylinsolve: batched dense linear solves for Python.

Solves A @ X = B for single systems and stacks of independent systems by
LU decomposition with partial pivoting, on CPU (NumPy/SciPy, threaded
over the batch) or GPU (PyTorch).

Submodules:
    dense: solve(), matrix_solve(), batch_matrix_solve()
    core: exceptions, validation, op registry, batch driver, LU kernels
"""

__version__ = "0.1.0"

from pylinsolve.dense import solve, matrix_solve, batch_matrix_solve, SolveSolution
from pylinsolve.core.exceptions import (
    PyLinSolveError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    BatchSolveError,
)

__all__ = [
    "__version__",
    "solve",
    "matrix_solve",
    "batch_matrix_solve",
    "SolveSolution",
    "PyLinSolveError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "BatchSolveError",
]
