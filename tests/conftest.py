"""
Shared fixtures: small synthetic current datasets.
"""

import numpy as np
import pytest

from current_trails import OceanDataset, TrailConfig


def make_record(grid_size=10, faces=3, depths=2, u=0.0, v=0.0):
    """Dataset as decoded JSON, with a uniform (u, v) field."""
    jj, ii = np.mgrid[0:grid_size, 0:grid_size].astype(float)
    lon = np.stack([-180.0 + f * 120.0 + ii * (120.0 / grid_size) for f in range(faces)])
    lat = np.stack([-60.0 + jj * (120.0 / (grid_size - 1)) for _ in range(faces)])
    shape = (depths, faces, grid_size, grid_size)
    return {
        "metadata": {"gridShape": [depths, grid_size, grid_size]},
        "data": {
            "U": np.full(shape, u).tolist(),
            "V": np.full(shape, v).tolist(),
        },
        "grid": {"lon": lon.tolist(), "lat": lat.tolist()},
    }


def make_dataset(**kwargs) -> OceanDataset:
    return OceanDataset.from_dict(make_record(**kwargs))


@pytest.fixture
def record():
    return make_record()


@pytest.fixture
def dataset():
    return make_dataset(u=0.1, v=0.05)


@pytest.fixture
def small_config():
    return TrailConfig(
        depth=0, faces=(0, 1, 2), grid_size=10, particles=300, seed=7,
        width=200, height=200, scale=80
    )
