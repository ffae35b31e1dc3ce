"""Pytest configuration and fixtures."""
import numpy as np
import pytest

from regression_lab import default_dataset


@pytest.fixture
def line_data():
    """y = 2x + 1 on four points."""
    X = np.array([[0.0], [1.0], [2.0], [3.0]])
    y = 2 * X[:, 0] + 1
    return X, y


@pytest.fixture
def fish_dataset():
    return default_dataset()


@pytest.fixture
def binary_data():
    """Separable 1-D classification data."""
    X = np.array([[-2.0], [-1.5], [-1.0], [-0.5], [0.5], [1.0], [1.5], [2.0]])
    y = np.array([0, 0, 0, 0, 1, 1, 1, 1], dtype=float)
    return X, y
