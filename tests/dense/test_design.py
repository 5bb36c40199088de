"""
Tests for SolveDesign construction and backend selection.
"""

import numpy as np
import pytest

from pylinsolve.core.exceptions import DimensionError, ValidationError
from pylinsolve.dense import SolveDesign
from pylinsolve.dense.backends import CPULUBackend
from pylinsolve.dense.solvers import _get_backend


class TestSolveDesign:

    def test_single_system(self):
        design = SolveDesign.from_arrays(np.eye(3), np.ones((3, 2)))
        assert design.batch_shape == ()
        assert not design.is_batched
        assert design.n_elements == 1
        assert (design.n, design.k) == (3, 2)
        assert design.dtype == np.float64
        assert not design.vector_rhs

    def test_batched(self):
        design = SolveDesign.from_arrays(np.zeros((4, 5, 3, 3)), np.zeros((4, 5, 3, 1)))
        assert design.batch_shape == (4, 5)
        assert design.is_batched
        assert design.n_elements == 20

    def test_vector_rhs_expanded(self):
        design = SolveDesign.from_arrays(np.eye(3), np.ones(3))
        assert design.vector_rhs
        assert design.B.shape == (3, 1)
        assert design.squeeze_solution(np.ones((3, 1))).shape == (3,)

    def test_dtype_resolution(self):
        design = SolveDesign.from_arrays(np.eye(2, dtype=np.float32), np.ones((2, 1), dtype=np.int8))
        assert design.dtype == np.float64
        assert design.A.dtype == np.float64
        assert design.B.dtype == np.float64

    def test_dtype_override(self):
        design = SolveDesign.from_arrays(np.eye(2), np.ones((2, 1)), dtype='float32')
        assert design.A.dtype == np.float32

    def test_frozen(self):
        design = SolveDesign.from_arrays(np.eye(2), np.ones((2, 1)))
        with pytest.raises(AttributeError):
            design.dtype = np.float32

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            SolveDesign.from_arrays([["a", "b"], ["c", "d"]], [[1.0], [2.0]])

    def test_infinite_rejected_when_checked(self):
        B = np.array([[np.inf], [1.0]])
        with pytest.raises(ValidationError, match="0 NaN, 1 Inf"):
            SolveDesign.from_arrays(np.eye(2), B, check_finite_values=True)

    def test_infinite_allowed_by_default(self):
        B = np.array([[np.inf], [1.0]])
        SolveDesign.from_arrays(np.eye(2), B)

    def test_batch_mismatch(self):
        with pytest.raises(DimensionError):
            SolveDesign.from_arrays(np.zeros((2, 3, 3)), np.zeros((3, 3, 2)))


class TestBackendSelection:

    def test_cpu(self):
        design = SolveDesign.from_arrays(np.eye(2), np.ones((2, 1)))
        backend = _get_backend('cpu', design, max_workers=2)
        assert isinstance(backend, CPULUBackend)
        assert backend.name == 'cpu_lu'

    def test_unknown(self):
        design = SolveDesign.from_arrays(np.eye(2), np.ones((2, 1)))
        with pytest.raises(ValidationError):
            _get_backend('fpga', design, max_workers=None)

    def test_auto_returns_a_backend(self):
        design = SolveDesign.from_arrays(np.eye(2), np.ones((2, 1)))
        backend = _get_backend('auto', design, max_workers=None)
        assert backend.name == 'cpu_lu' or backend.name.startswith('gpu_lu_')

    def test_cpu_backend_satisfies_protocol(self):
        from pylinsolve.core.protocols import Backend
        assert isinstance(CPULUBackend(), Backend)
