"""
LU decomposition with partial pivoting.

Provides a CPU factorization through LAPACK getrf (via SciPy), triangular
solves through SciPy's trtrs wrapper, and a batched GPU path through
PyTorch. Used by the solve kernel and its GPU backend.

The factorization never refuses a matrix. getrf carries on past a zero
pivot column and reports it through info > 0; that surfaces as an exact
zero on the diagonal of U, and deciding what it means is left to the
caller (see min_abs_pivot).
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import DimensionError

if TYPE_CHECKING:
    import torch


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition with partial pivoting, P·A = L·U.

    Attributes:
        lu: Packed factors (n x n). Strictly lower part holds the
            multipliers of unit-lower L, upper part including the diagonal
            holds U.
        pivots: pivots[k] is the row swapped into position k at step k
            (LAPACK getrf convention, 0-based)
        perm: Final row order, so that A[perm] = L @ U
    """
    lu: NDArray[np.floating[Any]]
    pivots: NDArray[np.intp]
    perm: NDArray[np.intp]

    @property
    def n(self) -> int:
        return self.lu.shape[0]


def lu_factor_cpu(A: NDArray[np.floating[Any]]) -> LUResult:
    """
    LU decomposition with partial (row) pivoting.

    At step k the row with the largest |A[i, k]| among rows i >= k is
    swapped into position k (first such row on ties). Runs LAPACK getrf
    in A's own precision (sgetrf for float32, dgetrf for float64) on a
    private copy; A is never modified.

    getrf's info is not checked here. A positive info only means some
    U[i, i] is exactly zero, which min_abs_pivot reports.

    Args:
        A: Square matrix (n x n)

    Returns:
        LUResult with packed factors and the row permutation

    Raises:
        DimensionError: If A is not a square 2D array
    """
    from scipy.linalg import get_lapack_funcs

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise DimensionError(f"LU needs a square 2D matrix, got shape {A.shape}")

    n = A.shape[0]
    if n == 0:
        empty = np.arange(0, dtype=np.intp)
        return LUResult(lu=np.array(A, copy=True), pivots=empty, perm=empty.copy())

    getrf, = get_lapack_funcs(('getrf',), (A,))
    lu, piv, info = getrf(A, overwrite_a=False)
    if info < 0:
        raise ValueError(f"illegal value in argument {-info} of internal getrf")

    pivots = np.asarray(piv, dtype=np.intp)
    perm = np.arange(n, dtype=np.intp)
    for k, p in enumerate(pivots):
        if p != k:
            perm[[k, p]] = perm[[p, k]]

    return LUResult(lu=lu, pivots=pivots, perm=perm)


def min_abs_pivot(result: LUResult) -> float:
    """
    Smallest pivot magnitude, min |diag(U)|.

    NaN if any pivot is NaN. inf for an empty factorization.
    """
    if result.n == 0:
        return float('inf')
    return float(np.min(np.abs(np.diagonal(result.lu))))


def lu_solve_cpu(
    result: LUResult,
    B: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve A @ X = B from a precomputed factorization.

    Permutes the rows of B, forward-substitutes against unit-lower L, then
    back-substitutes against U. Divides by the diagonal of U, so callers
    are expected to have checked min_abs_pivot first.

    Args:
        result: Factorization of A
        B: Right-hand side (n x k)

    Returns:
        X (n x k), same dtype as the factors
    """
    from scipy.linalg import solve_triangular

    if B.shape[0] != result.n:
        raise DimensionError(
            f"Right-hand side has {B.shape[0]} rows, factorization has {result.n}"
        )

    PB = B[result.perm]
    if PB.shape[1] == 0:
        return PB

    # L·Y = P·B
    Y = solve_triangular(result.lu, PB, lower=True, unit_diagonal=True, check_finite=False)
    # U·X = Y
    return solve_triangular(result.lu, Y, lower=False, check_finite=False)


def lu_factor_gpu(A: 'torch.Tensor') -> tuple['torch.Tensor', 'torch.Tensor', 'torch.Tensor']:
    """
    Batched LU with partial pivoting on the tensor's device.

    Args:
        A: Tensor (..., n, n), already on the desired device and dtype

    Returns:
        (LU, pivots, min_abs_pivots) where min_abs_pivots has shape (...)
        and holds min |diag(U)| per matrix
    """
    import torch

    LU, pivots, _ = torch.linalg.lu_factor_ex(A, check_errors=False)
    min_abs = torch.diagonal(LU, dim1=-2, dim2=-1).abs().amin(dim=-1)
    return LU, pivots, min_abs


def lu_solve_gpu(
    LU: 'torch.Tensor',
    pivots: 'torch.Tensor',
    B: 'torch.Tensor',
) -> NDArray[np.floating[Any]]:
    """
    Solve from a batched GPU factorization.

    Returns:
        X as a NumPy array (moved to CPU)
    """
    import torch

    X = torch.linalg.lu_solve(LU, pivots, B)
    return X.cpu().numpy()
