"""
Solver dispatch for linear systems.

This module provides solve() (public API), the functional op entry points
matrix_solve() / batch_matrix_solve(), and backend selection.
"""

from __future__ import annotations

import warnings
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pylinsolve.core.registry import get_op
from pylinsolve.core.validation import check_array, check_choice
from pylinsolve.core.compute.device import select_device
from pylinsolve.core.compute.precision import resolve_scalar_type
from pylinsolve.dense.design import SolveDesign
from pylinsolve.dense.solution import SolveSolution
from pylinsolve.dense.backends.cpu import CPULUBackend
from pylinsolve.dense.ops import BATCH_MATRIX_SOLVE, MATRIX_SOLVE


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'gpu']
OnError = Literal['raise', 'collect']


def solve(
    A: ArrayLike,
    B: ArrayLike,
    *,
    backend: BackendChoice = 'auto',
    dtype: DTypeLike | None = None,
    on_error: OnError = 'raise',
    max_workers: int | None = None,
    check_finite: bool = False,
) -> SolveSolution:
    """
    Solve A @ X = B for one system or a batch of independent systems.

    Every system is solved by LU decomposition with partial pivoting. A
    system whose factorization has an exactly zero pivot is reported as
    not invertible; no least-squares answer is attempted and no condition
    number is estimated, so a nearly singular matrix still "succeeds".

    Args:
        A: Coefficient matrices, shape (..., n, n)
        B: Right-hand sides, shape (..., n, k), or (..., n) for one
            column per system
        backend: Computational backend to use:
            - 'auto': GPU if available and able to run the scalar type, else CPU
            - 'cpu': CPU LU kernel, batched over a thread pool
            - 'gpu': PyTorch batched LU (requires CUDA or MPS)
        dtype: Force float32 or float64. Default promotes the inputs:
            integers to float64, float16 to float32, mixed floats upward.
        on_error: What to do when some systems fail:
            - 'raise': after every system has been attempted, raise the
              failing system's own error, or BatchSolveError when more
              than one failed
            - 'collect': return the solution anyway; failed systems are
              NaN, listed in `failures`, and a RuntimeWarning is issued
        max_workers: Thread count for the CPU backend (None = CPU count)
        check_finite: Reject NaN/Inf in A or B before solving

    Returns:
        SolveSolution with X, failures, timing and summary methods

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If A is not square, A and B have different row
            counts, or batch dimensions disagree
        SingularMatrixError: If exactly one system is not invertible
            (on_error='raise')
        BatchSolveError: If several systems failed (on_error='raise')

    Example:
        >>> import numpy as np
        >>> from pylinsolve import solve
        >>>
        >>> result = solve([[2.0, 0.0], [0.0, 4.0]], [[4.0], [8.0]])
        >>> result.x
        array([[2.],
               [2.]])
    """
    check_choice(on_error, ('raise', 'collect'), 'on_error')

    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = SolveDesign.from_arrays(A, B, dtype=dtype, check_finite_values=check_finite)

    # === Select Backend ===
    backend_impl = _get_backend(backend, design, max_workers)

    # === Solve ===
    result = backend_impl.solve(design)
    solution = SolveSolution(_result=result, _design=design)

    # === Failure policy ===
    if solution.failures:
        if on_error == 'raise':
            solution.raise_for_failures()
        warnings.warn(
            f"{solution.n_failed} of {result.info['n_elements']} systems could not "
            f"be solved; their solutions are NaN",
            RuntimeWarning,
            stacklevel=2,
        )

    return solution


def matrix_solve(
    A: ArrayLike,
    B: ArrayLike,
    *,
    dtype: DTypeLike | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Run the registered 'MatrixSolve' op on one 2D system.

    Args:
        A: Square matrix (n, n)
        B: Right-hand side (n, k)
        dtype: float32 or float64; default promotes the inputs

    Returns:
        X with shape (n, k)

    Raises:
        DimensionError: If A or B is not 2D, or the pair is incompatible
        SingularMatrixError: If A is not invertible
    """
    return _run_registered(MATRIX_SOLVE, A, B, dtype=dtype, max_workers=1)


def batch_matrix_solve(
    A: ArrayLike,
    B: ArrayLike,
    *,
    dtype: DTypeLike | None = None,
    max_workers: int | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Run the registered 'BatchMatrixSolve' op on a stack of systems.

    Args:
        A: Square matrices (..., n, n)
        B: Right-hand sides (..., n, k), same leading dimensions as A
        dtype: float32 or float64; default promotes the inputs
        max_workers: Thread count (None = CPU count)

    Returns:
        X with shape (..., n, k)

    Raises:
        DimensionError: On rank, batch or pair mismatch
        SingularMatrixError: If any system is not invertible (the first
            one in batch order is reported)
    """
    return _run_registered(BATCH_MATRIX_SOLVE, A, B, dtype=dtype, max_workers=max_workers)


def _run_registered(
    op_name: str,
    A: ArrayLike,
    B: ArrayLike,
    *,
    dtype: DTypeLike | None,
    max_workers: int | None,
) -> NDArray[np.floating[Any]]:
    A_arr = check_array(A, 'A')
    B_arr = check_array(B, 'B')
    op = get_op(op_name, resolve_scalar_type(A_arr.dtype, B_arr.dtype, override=dtype))
    outcome = op(A_arr, B_arr, max_workers=max_workers)
    if outcome.failures:
        raise outcome.failures[0].error
    return outcome.output


def _get_backend(choice: BackendChoice, design: SolveDesign, max_workers: int | None):
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference
        design: The solve design (its scalar type decides GPU eligibility)
        max_workers: Passed to the CPU backend

    Returns:
        Backend instance ready to solve

    Raises:
        ValidationError: If unknown backend specified
        RuntimeError: If GPU requested but unavailable
    """
    check_choice(choice, ('auto', 'cpu', 'gpu'), 'backend')

    if choice == 'auto':
        device = select_device('auto')
        if device.is_gpu and (design.dtype == np.float32 or device.supports_fp64):
            from pylinsolve.dense.backends.gpu import GPULUBackend
            return GPULUBackend(device=device.device_type)
        return CPULUBackend(max_workers=max_workers)

    elif choice == 'cpu':
        return CPULUBackend(max_workers=max_workers)

    else:
        from pylinsolve.dense.backends.gpu import GPULUBackend
        return GPULUBackend()
