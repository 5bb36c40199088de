"""
Linear algebra kernels for pylinsolve.

All functions follow these conventions:
    - CPU functions use NumPy/SciPy and keep the input's precision
    - GPU functions use PyTorch and return NumPy arrays (data moved to CPU)
    - Factorizations return a structured result dataclass
    - Shape errors are raised immediately; numerical verdicts are left
      to the caller

Submodules:
    lu: LU decomposition with partial pivoting and triangular solves
"""

from pylinsolve.core.compute.linalg.lu import (
    LUResult,
    lu_factor_cpu,
    lu_factor_gpu,
    lu_solve_cpu,
    lu_solve_gpu,
    min_abs_pivot,
)

__all__ = [
    "LUResult",
    "lu_factor_cpu",
    "lu_factor_gpu",
    "lu_solve_cpu",
    "lu_solve_gpu",
    "min_abs_pivot",
]
