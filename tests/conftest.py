import numpy as np
import pytest


@pytest.fixture
def line_0_10():
    """Filter values 0, 1, ..., 10 (range 10)."""
    return np.linspace(0.0, 10.0, 11)


@pytest.fixture
def cloud_2d():
    rng = np.random.default_rng(7)
    return rng.normal(size=(200, 2))
