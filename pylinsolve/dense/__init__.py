"""
Dense linear solves, A @ X = B.

Solves one square system or a batch of independent systems by LU
decomposition with partial pivoting. Singular systems (an exactly zero
pivot) are reported per system; the rest of a batch is unaffected.

Public API:
    solve(A, B, ...) -> SolveSolution
    matrix_solve(A, B) -> ndarray               registered 'MatrixSolve'
    batch_matrix_solve(A, B) -> ndarray         registered 'BatchMatrixSolve'

Example:
    >>> from pylinsolve.dense import solve
    >>> result = solve(A, B)
    >>> print(result.x)
    >>> print(result.summary())
"""

from pylinsolve.dense.design import SolveDesign
from pylinsolve.dense.solution import SolveSolution
from pylinsolve.dense._common import SolveParams
from pylinsolve.dense._kernel import MatrixSolveKernel
from pylinsolve.dense.ops import MatrixSolveOp
from pylinsolve.dense.solvers import solve, matrix_solve, batch_matrix_solve

__all__ = [
    "solve",
    "matrix_solve",
    "batch_matrix_solve",
    "SolveDesign",
    "SolveSolution",
    "SolveParams",
    "MatrixSolveKernel",
    "MatrixSolveOp",
]
