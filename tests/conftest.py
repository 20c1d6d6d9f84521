import numpy as np
import pytest
from sklearn.datasets import make_blobs, make_moons


def absolute(a, b):
    return abs(a - b)


@pytest.fixture
def abs_metric():
    """1-D absolute difference metric."""
    return absolute


@pytest.fixture
def moons():
    """Two interleaving half circles with a few uniform outliers."""
    points, _ = make_moons(n_samples=150, noise=0.06, random_state=0)
    rng = np.random.RandomState(7)
    outliers = rng.uniform(low=-1.5, high=2.5, size=(10, 2))
    return np.vstack([points, outliers])


@pytest.fixture
def separated_blobs():
    """Three tight, far-apart blobs."""
    points, _ = make_blobs(
        n_samples=90,
        centers=[[0.0, 0.0], [10.0, 10.0], [-10.0, 10.0]],
        cluster_std=0.3,
        random_state=1,
    )
    return points
