"""
Test configuration and fixtures for the bwsl lattice library.

This module provides pytest fixtures and configuration for testing
the lattice geometry, Monte Carlo bookkeeping and output utilities.
"""

import numpy as np
import pytest
import tempfile
import shutil
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

# Set random seed for reproducibility
np.random.seed(42)

# Add the repository root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from bwsl.lattices import CHAIN, CUBIC, SQUARE, TRIANGULAR, Boundaries, HyperCubicGrid, Lattice


@pytest.fixture(scope="session")
def test_seed():
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def rng(test_seed):
    """Seeded random generator."""
    return np.random.default_rng(test_seed)


@pytest.fixture(scope="session")
def temp_dir():
    """Temporary directory for test outputs."""
    temp_path = tempfile.mkdtemp(prefix="bwsl_test_")
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def grid_3x4():
    """Closed 3x4 grid."""
    return HyperCubicGrid([3, 4], Boundaries.CLOSED)


@pytest.fixture
def open_grid_3x4():
    """Open 3x4 grid."""
    return HyperCubicGrid([3, 4], Boundaries.OPEN)


@pytest.fixture(scope="session")
def square_3x3():
    """Periodic 3x3 square lattice."""
    return Lattice(SQUARE, [3, 3])


@pytest.fixture(scope="session")
def square_4x4():
    """Periodic 4x4 square lattice."""
    return Lattice(SQUARE, [4, 4])


@pytest.fixture(scope="session")
def open_square_4x4():
    """Open 4x4 square lattice."""
    return Lattice(SQUARE, [4, 4], Boundaries.OPEN)


@pytest.fixture(scope="session")
def rectangular_3x4():
    """Periodic 3x4 square lattice."""
    return Lattice(SQUARE, [3, 4])


@pytest.fixture(scope="session")
def chain_4():
    """Periodic chain of 4 sites."""
    return Lattice(CHAIN, [4])


@pytest.fixture(scope="session")
def triangular_6x6():
    """Periodic 6x6 triangular lattice."""
    return Lattice(TRIANGULAR, [6, 6])


@pytest.fixture(scope="session")
def cubic_3x3x3():
    """Periodic 3x3x3 cubic lattice."""
    return Lattice(CUBIC, [3, 3, 3])


@pytest.fixture
def tolerance_config():
    """Standard tolerance configuration for numerical tests."""
    return {
        'rtol': 1e-10,          # Relative tolerance
        'atol': 1e-12,          # Absolute tolerance
        'geometry_atol': 1e-9,  # Positions, vectors and distances
        'statistical_rtol': 0.1,  # Statistical test tolerance (10%)
    }


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual functions/methods"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for module interactions"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds"
    )
    config.addinivalue_line(
        "markers", "numerical: Tests that verify numerical accuracy"
    )
    config.addinivalue_line(
        "markers", "edge_case: Tests for edge cases and error conditions"
    )


def pytest_runtest_setup(item):
    """Setup for each test item - ensure reproducible random state."""
    np.random.seed(42)


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names and paths."""
    for item in items:
        # Add unit marker to unit test files
        if "unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add integration marker to integration test files
        if "integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        # Add numerical marker to numerical accuracy tests
        if any(keyword in item.name.lower() for keyword in ['accuracy', 'precision', 'numerical']):
            item.add_marker(pytest.mark.numerical)

        # Add edge_case marker to edge case tests
        if any(keyword in item.name.lower() for keyword in ['edge', 'invalid', 'degenerate']):
            item.add_marker(pytest.mark.edge_case)
