"""
Common data structures for linear solves.

SolveParams is the parameter payload wrapped by Result[P] and exposed
through SolveSolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.compute.batching import ElementFailure


@dataclass(frozen=True)
class SolveParams:
    """
    Parameter payload for a (possibly batched) solve.

    - solution: X, shape batch_shape + (n, k), or batch_shape + (n,) for a
      vector right-hand side. Slices of failed elements are NaN.
    - failures: elements that could not be solved, in batch order
    """
    solution: NDArray[np.floating[Any]]
    failures: tuple[ElementFailure, ...]
    batch_shape: tuple[int, ...]
    n: int                                      # system size (rows of A)
    k: int                                      # right-hand-side columns
    dtype: np.dtype
