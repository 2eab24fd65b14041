import random

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def seed_rng() -> None:
    random.seed(0)
    np.random.seed(0)


@pytest.fixture()
def disk_points() -> np.ndarray:
    """Random (x, y) points filling the unit disk, plus a few outside it."""
    rng = np.random.default_rng(1234)
    radius = np.sqrt(rng.uniform(0.0, 1.0, 200))
    angle = rng.uniform(0.0, 2.0 * np.pi, 200)
    inside = np.column_stack([radius * np.cos(angle), radius * np.sin(angle)])
    outside = np.array([[1.5, 0.0], [0.0, -2.0], [1.0, 1.0]])
    return np.vstack([inside, outside])
