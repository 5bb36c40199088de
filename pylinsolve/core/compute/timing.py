"""
Execution timing utilities.

Backends time their phases (validation, factorization and substitution,
host/device transfer) with Timer and hand the breakdown to Result.timing.
GPU timings synchronize CUDA first so queued kernels are counted.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating phase timer with optional CUDA synchronization.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('validation'):
            check_batch_dims(A, B, names=('A', 'B'))

        with timer.section('solve'):
            outcome = run_binary_kernel(kernel, A, B, supports_batch=True)

        timer.stop()
        timer.result()
        # {'total_seconds': 0.05, 'validation': 0.001, 'solve': 0.049}
    """

    def __init__(self, sync_cuda: bool = False):
        """
        Args:
            sync_cuda: If True, synchronize CUDA before timing measurements.
                       Required for accurate GPU timing.
        """
        self._sync_cuda = sync_cuda
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _sync(self) -> None:
        if self._sync_cuda:
            import torch
            if torch.cuda.is_available():
                torch.cuda.synchronize()

    def start(self) -> None:
        """Start the overall timer."""
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named section. Repeated sections accumulate.

        The section is recorded even if the body raises, so a failing
        solve still reports how long it ran.
        """
        self._sync()
        start = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Get timing results.

        Returns:
            Dictionary with 'total_seconds' and all section timings

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result
