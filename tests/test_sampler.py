"""
Tests for nearest-cell velocity sampling.
"""

import numpy as np
import pytest

from current_trails import ConfigError, OceanDataset, VectorFieldSampler


def _dataset():
    depths, faces, ny, nx = 2, 2, 3, 4
    U = np.arange(depths * faces * ny * nx, dtype=float).reshape(depths, faces, ny, nx)
    V = -U
    lon = np.zeros((faces, ny, nx))
    lat = np.zeros((faces, ny, nx))
    return OceanDataset(grid_shape=(depths, ny, nx), U=U, V=V, lon=lon, lat=lat)


def test_sample_nearest_cell():
    """Sampling rounds to the nearest cell at the chosen depth."""
    ds = _dataset()
    sampler = VectorFieldSampler(ds, depth=1)

    u, v = sampler.sample(1, 2.4, 0.6)
    assert u == ds.U[1, 1, 1, 2]
    assert v == ds.V[1, 1, 1, 2]


def test_sample_outside_domain_is_no_data():
    """Indices that round outside the face return None instead of clamping."""
    sampler = VectorFieldSampler(_dataset(), depth=0)

    assert sampler.sample(0, -0.6, 1.0) is None
    assert sampler.sample(0, 1.0, -0.6) is None
    assert sampler.sample(0, 3.5, 1.0) is None   # rounds to i == 4
    assert sampler.sample(0, 1.0, 2.5) is None   # rounds to j == 3
    assert sampler.sample(0, -0.4, 2.4) is not None
    assert sampler.sample(0, 3.4, 0.0) is not None


def test_nan_cell_is_no_data():
    """Cells without data (land) are reported as no data."""
    ds = _dataset()
    ds.U[0, 0, 1, 1] = np.nan
    sampler = VectorFieldSampler(ds, depth=0)

    assert sampler.sample(0, 1.0, 1.0) is None
    assert sampler.sample(0, 2.0, 1.0) is not None


def test_depth_out_of_range():
    """Asking for a depth the dataset lacks fails up front."""
    with pytest.raises(ConfigError):
        VectorFieldSampler(_dataset(), depth=2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
