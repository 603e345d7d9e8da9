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
def well_conditioned(rng):
    """5x5 diagonally dominant (hence invertible, well-conditioned) matrix."""
    n = 5
    A = rng.standard_normal((n, n))
    A += np.diag(np.sum(np.abs(A), axis=1) + 1.0)
    return A


@pytest.fixture
def spd_matrix(rng):
    """6x6 symmetric positive definite matrix."""
    n = 6
    G = rng.standard_normal((n, n))
    return G @ G.T + n * np.eye(n)


@pytest.fixture
def rotation_matrix():
    """Proper rotation: 0.7 rad about the normalized (1, 2, 3) axis."""
    axis = np.array([1.0, 2.0, 3.0])
    axis /= np.linalg.norm(axis)
    angle = 0.7
    K = np.array([
        [0.0, -axis[2], axis[1]],
        [axis[2], 0.0, -axis[0]],
        [-axis[1], axis[0], 0.0],
    ])
    # Rodrigues' formula
    return np.eye(3) + np.sin(angle) * K + (1.0 - np.cos(angle)) * (K @ K)
