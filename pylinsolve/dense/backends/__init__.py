"""
Solve backends.

Available backends:
    CPULUBackend: CPU reference implementation, LU with partial pivoting
    GPULUBackend: Batched LU on GPU via PyTorch (imported lazily)
"""

from pylinsolve.dense.backends.cpu import CPULUBackend

__all__ = [
    "CPULUBackend",
]
