"""
Design for linear solves.

SolveDesign is the validated, immutable input to every solve backend:
A and B converted to one scalar type, a vector right-hand side turned into
a single column, and ranks and batch dimensions checked. Backends trust it
and never re-validate.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import prod
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pylinsolve.core.compute.batching import validate_batch_inputs
from pylinsolve.core.compute.precision import resolve_scalar_type
from pylinsolve.core.validation import check_array, check_finite, check_min_ndim


@dataclass(frozen=True)
class SolveDesign:
    """
    Frozen design for A @ X = B.

    Attributes:
        A: Coefficient stack, shape batch_shape + (n, n) (squareness is
            checked per element by the kernel, not here)
        B: Right-hand sides, shape batch_shape + (n, k)
        dtype: Scalar type every computation runs in
        vector_rhs: True when B was given as batch_shape + (n,); the
            solution is squeezed back to that shape
    """
    A: NDArray[np.floating[Any]]
    B: NDArray[np.floating[Any]]
    dtype: np.dtype
    vector_rhs: bool

    @classmethod
    def from_arrays(
        cls,
        A: ArrayLike,
        B: ArrayLike,
        *,
        dtype: DTypeLike | None = None,
        check_finite_values: bool = False,
    ) -> SolveDesign:
        """
        Create a solve design with validation.

        Args:
            A: Coefficient matrix or stack, (..., n, n)
            B: Right-hand side(s), (..., n, k) or (..., n)
            dtype: Force float32 or float64; default promotes the inputs
            check_finite_values: Reject NaN/Inf in A or B

        Returns:
            Validated SolveDesign

        Raises:
            ValidationError: On non-numeric, complex or unsupported inputs
            DimensionError: On rank or batch-dimension mismatch
        """
        A_arr = check_array(A, 'A')
        B_arr = check_array(B, 'B')
        check_min_ndim(A_arr, 2, 'A')

        # (..., n) against (..., n, n) is a stack of single columns
        vector_rhs = B_arr.ndim == A_arr.ndim - 1
        if vector_rhs:
            B_arr = B_arr[..., np.newaxis]

        scalar_type = resolve_scalar_type(A_arr.dtype, B_arr.dtype, override=dtype)
        A_arr = A_arr.astype(scalar_type, copy=False)
        B_arr = B_arr.astype(scalar_type, copy=False)

        if check_finite_values:
            check_finite(A_arr, 'A')
            check_finite(B_arr, 'B')

        validate_batch_inputs(A_arr, B_arr, supports_batch=True)

        return cls(A=A_arr, B=B_arr, dtype=scalar_type, vector_rhs=vector_rhs)

    # === Properties ===

    @property
    def batch_shape(self) -> tuple[int, ...]:
        """Leading dimensions, () for a single system."""
        return self.A.shape[:-2]

    @property
    def is_batched(self) -> bool:
        return self.A.ndim > 2

    @property
    def n_elements(self) -> int:
        """Number of independent systems."""
        return prod(self.batch_shape)

    @property
    def n(self) -> int:
        """Rows of A."""
        return self.A.shape[-2]

    @property
    def k(self) -> int:
        """Columns of B."""
        return self.B.shape[-1]

    def squeeze_solution(self, X: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Undo the vector-to-column expansion of B on a solution array."""
        return X[..., 0] if self.vector_rhs else X
