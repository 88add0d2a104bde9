"""
Pytest fixtures for multiarray tests.
"""

import pytest

from multiarray import Config, ElementKind, NDArray


@pytest.fixture(autouse=True)
def reset_config():
    """Each test starts from the default configuration."""
    yield
    Config.reset()


@pytest.fixture
def cube():
    """Sequential 2 x 3 x 4 array, values 0..23."""
    return NDArray.sequential((2, 3, 4))


@pytest.fixture
def matrix_3x2():
    return NDArray([1, 2, 3, 4, 5, 6], (3, 2), ElementKind.FLOAT32)


@pytest.fixture
def row_1x2():
    return NDArray([10, 20], (1, 2), ElementKind.FLOAT32)
