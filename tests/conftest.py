"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def well_conditioned_system(rng):
    """Diagonally dominant 5x5 system with three right-hand sides."""
    n, k = 5, 3
    A = rng.standard_normal((n, n)) + n * np.eye(n)
    X_true = rng.standard_normal((n, k))
    B = A @ X_true
    return A, B, X_true


@pytest.fixture
def singular_matrix():
    """Two identical rows: exactly singular."""
    return np.array([
        [1.0, 2.0, 3.0],
        [4.0, 5.0, 6.0],
        [1.0, 2.0, 3.0],
    ])
