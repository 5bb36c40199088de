"""
Tolerance tiers for numerical validation.

A solve is correct when the residual A·X - B is small relative to the
size of the problem. How small depends on the precision it ran in:

- CPU FP64: near machine precision
- CPU FP32 / GPU FP32: relaxed for single-precision arithmetic
- GPU FP64: same as CPU FP64

Used by the test suite and by SolveSolution.summary().
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision',
)

CPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='cpu_fp32',
    description='CPU single precision',
)

GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

GPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='gpu_fp32',
    description='GPU single precision',
)


def select_tolerance(backend_name: str, dtype: np.dtype) -> ToleranceTier:
    """Select the tolerance tier for a backend and scalar type."""
    single = np.dtype(dtype) == np.float32
    if 'gpu' in backend_name:
        return GPU_FP32 if single else GPU_FP64
    return CPU_FP32 if single else CPU_FP64
