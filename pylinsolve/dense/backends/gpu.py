"""
GPU backend for linear solves using PyTorch.

Factors the whole batch at once with torch.linalg.lu_factor_ex and applies
the same verdicts as the CPU kernel: shape errors per element, and an
exact-zero pivot check on each factorization before its solution is kept.
Supports CUDA (Linux/Windows) and MPS (macOS Apple Silicon, float32 only).
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pylinsolve.core.result import Result
from pylinsolve.core.exceptions import DimensionError, SingularMatrixError
from pylinsolve.core.compute.batching import ElementFailure
from pylinsolve.core.compute.linalg.lu import lu_factor_gpu, lu_solve_gpu
from pylinsolve.core.compute.timing import Timer
from pylinsolve.dense._common import SolveParams
from pylinsolve.dense._shapes import check_matrix_pair, derive_output_shape
from pylinsolve.dense.design import SolveDesign


class GPULUBackend:
    """
    GPU backend using batched LU with partial pivoting.

    Runs in the design's scalar type. MPS has no float64 kernels, so float64
    designs need CUDA (or the CPU backend).
    """

    def __init__(self, device: str = 'auto'):
        """
        Args:
            device: 'auto', 'cuda', 'cuda:N' or 'mps'

        Raises:
            RuntimeError: If the requested device is not available
        """
        import torch

        self._torch = torch

        if device == 'auto':
            if torch.cuda.is_available():
                device = 'cuda'
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                device = 'mps'
            else:
                raise RuntimeError("No GPU available (need CUDA or MPS)")

        if device.startswith('cuda'):
            if not torch.cuda.is_available():
                raise RuntimeError(
                    "CUDA not available. Install PyTorch with CUDA support, "
                    "or use backend='cpu'."
                )
        elif device == 'mps':
            if not (hasattr(torch.backends, 'mps') and torch.backends.mps.is_available()):
                raise RuntimeError(
                    "MPS not available. Requires macOS with Apple Silicon "
                    "and PyTorch with MPS support."
                )
        else:
            raise ValueError(
                f"Unknown GPU device: {device!r}. Use 'cuda' or 'mps'."
            )

        self.device = torch.device(device)

    @property
    def name(self) -> str:
        return f'gpu_lu_{self.device.type}'

    def solve(self, design: SolveDesign) -> Result[SolveParams]:
        """
        Solve every system in the design on the GPU.

        Raises:
            RuntimeError: If the design is float64 and the device is MPS
        """
        torch = self._torch

        if design.dtype == np.float64:
            if self.device.type == 'mps':
                raise RuntimeError(
                    "MPS does not support float64. Pass dtype=np.float32 "
                    "or use backend='cpu' for double precision."
                )
            torch_dtype = torch.float64
        else:
            torch_dtype = torch.float32

        timer = Timer(sync_cuda=self.device.type == 'cuda')
        timer.start()

        output_shape = derive_output_shape(design.A.shape, design.B.shape)
        X = np.full(output_shape, np.nan, dtype=design.dtype)
        failures: list[ElementFailure] = []

        try:
            check_matrix_pair(design.A.shape, design.B.shape)
        except DimensionError as e:
            for index in np.ndindex(design.batch_shape):
                err = DimensionError(str(e), batch_index=index)
                failures.append(ElementFailure(index=index, error=err))
        else:
            if design.n == 0 or design.n_elements == 0:
                X = np.zeros(output_shape, dtype=design.dtype)
            else:
                with timer.section('transfer'):
                    A_t = torch.from_numpy(np.ascontiguousarray(design.A)).to(
                        device=self.device, dtype=torch_dtype
                    )
                    B_t = torch.from_numpy(np.ascontiguousarray(design.B)).to(
                        device=self.device, dtype=torch_dtype
                    )

                with timer.section('solve'):
                    LU, pivots, min_abs = lu_factor_gpu(A_t)
                    if design.k > 0:
                        X = lu_solve_gpu(LU, pivots, B_t).astype(design.dtype, copy=False)
                    else:
                        X = np.zeros(output_shape, dtype=design.dtype)
                    min_abs_np = min_abs.cpu().numpy()

                for index in np.ndindex(design.batch_shape):
                    smallest = float(min_abs_np[index])
                    if not smallest > 0:
                        X[index] = np.nan
                        err = SingularMatrixError(
                            "Input matrix is not invertible.",
                            matrix_name='matrix',
                            min_abs_pivot=smallest,
                            batch_index=index,
                        )
                        failures.append(ElementFailure(index=index, error=err))

        timer.stop()

        params = SolveParams(
            solution=design.squeeze_solution(X),
            failures=tuple(failures),
            batch_shape=design.batch_shape,
            n=design.n,
            k=design.k,
            dtype=design.dtype,
        )

        info: dict[str, Any] = {
            'method': 'lu_partial_pivot',
            'device': str(self.device),
            'n_elements': design.n_elements,
            'n_failed': len(failures),
        }

        warnings_list: list[str] = []
        if failures:
            warnings_list.append(
                f"{len(failures)} of {design.n_elements} systems could not be solved"
            )

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
