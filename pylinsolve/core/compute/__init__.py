"""
Shared compute infrastructure for pylinsolve.

This module provides hardware detection, timing, precision handling,
work partitioning and the generic batch driver, plus the linear algebra
kernels they serve.

IMPORTANT: This is NOT where operation-specific backends live. Those go in
{operation}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    precision: Supported scalar types and promotion rules
    tolerances: Accuracy expectations per precision
    sharding: Cost-based partitioning onto a thread pool
    batching: Batch driver for per-matrix kernels
    linalg: LU decomposition and triangular solves
"""

from pylinsolve.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.sharding import MIN_COST_PER_SHARD, plan_shards, parallel_for
from pylinsolve.core.compute.batching import (
    BatchOutcome,
    ElementFailure,
    run_binary_kernel,
    validate_batch_inputs,
)

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
    # Work partitioning
    "MIN_COST_PER_SHARD",
    "plan_shards",
    "parallel_for",
    # Batch driver
    "BatchOutcome",
    "ElementFailure",
    "run_binary_kernel",
    "validate_batch_inputs",
]
