"""
Cost-based work partitioning.

Splits `total` independent units of work into contiguous shards and runs
them on a thread pool. The number of shards is chosen from the per-unit
cost estimate so that each shard does at least MIN_COST_PER_SHARD worth
of work: a thousand 2x2 solves become one shard, eight 500x500 solves
become eight.

NumPy and SciPy release the GIL inside their array kernels, so threads
give real parallelism for the heavy part of each unit.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable

# Minimum estimated cost a shard must carry before it's worth a thread
MIN_COST_PER_SHARD = 10_000


def default_max_workers() -> int:
    """Number of worker threads used when the caller doesn't say."""
    return os.cpu_count() or 1


def plan_shards(
    total: int,
    cost_per_unit: int,
    max_workers: int,
) -> list[tuple[int, int]]:
    """
    Partition range(total) into contiguous (start, stop) shards.

    Shard count = max(1, min(max_workers, total * cost_per_unit // MIN_COST_PER_SHARD)),
    with units spread evenly (ceil division) across shards.

    Args:
        total: Number of units
        cost_per_unit: Estimated cost of one unit (non-negative)
        max_workers: Upper bound on parallelism

    Returns:
        Non-overlapping shards covering [0, total) in order. Empty when
        total is 0.
    """
    if total < 0 or cost_per_unit < 0:
        raise ValueError(
            f"total and cost_per_unit must be non-negative, got {total}, {cost_per_unit}"
        )
    if total == 0:
        return []
    if max_workers <= 1:
        return [(0, total)]

    # Python ints don't wrap, so the product is safe even for clamped costs
    num_shards = max(1, min(max_workers, total * cost_per_unit // MIN_COST_PER_SHARD))
    block_size = -(-total // num_shards)
    return [
        (start, min(start + block_size, total))
        for start in range(0, total, block_size)
    ]


def parallel_for(
    total: int,
    cost_per_unit: int,
    work: Callable[[int, int], None],
    max_workers: int | None = None,
) -> int:
    """
    Run work(start, stop) over every shard of range(total).

    A single shard runs inline on the calling thread. Otherwise shards run
    on a ThreadPoolExecutor, and this call returns only after every shard
    has finished. An exception escaping `work` is re-raised after all
    shards complete.

    Args:
        total: Number of units
        cost_per_unit: Estimated cost of one unit
        work: Callable processing units [start, stop)
        max_workers: Thread count; None uses default_max_workers()

    Returns:
        Number of shards that were run
    """
    if max_workers is None:
        max_workers = default_max_workers()

    shards = plan_shards(total, cost_per_unit, max_workers)
    if len(shards) <= 1:
        for start, stop in shards:
            work(start, stop)
        return len(shards)

    with ThreadPoolExecutor(max_workers=min(max_workers, len(shards))) as executor:
        futures = [executor.submit(work, start, stop) for start, stop in shards]
        wait(futures)
    for future in futures:
        future.result()
    return len(shards)
