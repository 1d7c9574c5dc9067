"""
Pytest configuration and shared fixtures for rowmat tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import rowmat
from rowmat import DenseMatrix, SparseMatrix


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config():
    """Restore default configuration after every test."""
    yield
    rowmat.config.reset()


@pytest.fixture
def small_matrix():
    """Create a small float64 matrix (3x3).

    Matrix:
    [[1, 2, 3],
     [4, 5, 6],
     [7, 8, 9]]
    """
    mat = DenseMatrix(3)
    mat.add_row([1.0, 2.0, 3.0])
    mat.add_row([4.0, 5.0, 6.0])
    mat.add_row([7.0, 8.0, 9.0])
    return mat


@pytest.fixture
def bool_matrix():
    """Create a small bool matrix (2x3).

    Matrix:
    [[T, T, T],
     [F, F, F]]
    """
    mat = DenseMatrix(3, dtype=rowmat.bool_)
    mat.add_row([True, True, True])
    mat.add_row([False, False, False])
    return mat


@pytest.fixture
def small_sparse():
    """Create a sparse matrix with two cells in row 0 and one in row 2."""
    mat = SparseMatrix()
    mat.set(0, 5, 2.0)
    mat.set(0, 1, 3.0)
    mat.set(2, 1, 4.0)
    return mat

