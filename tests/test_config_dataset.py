"""
Tests for configuration and dataset loading.
"""

import asyncio
import json
import math

import numpy as np
import pytest

from current_trails import (
    ConfigError, DatasetError, OceanDataset, TrailConfig,
    load_config, load_dataset, load_dataset_async,
)


def test_config_defaults():
    """Defaults match the reference animation."""
    config = TrailConfig()

    assert config.depth == 10
    assert config.faces == (0, 1, 2)
    assert config.particles == 20000
    assert config.spawn_mode == "random"
    assert config.max_magnitude == 0.05
    assert config.lifespan_step == 0.01
    assert config.frame_interval_ms == 40
    assert config.bins == ((0.1, 0.1), (0.2, 0.2), (0.3, 0.3), (0.4, 0.4))
    assert config.scale == config.width


@pytest.mark.parametrize("overrides", [
    {"spawn_mode": "spiral"},
    {"faces": ()},
    {"faces": (0, 0)},
    {"particles": 2},
    {"max_magnitude": 0.0},
    {"lifespan_step": -0.01},
    {"bins": ((0.2, 0.1), (0.1, 0.2))},
    {"bins": ((0.1, 1.5),)},
    {"bins": ()},
])
def test_config_rejects_bad_values(overrides):
    """Out-of-range values raise ConfigError."""
    with pytest.raises(ConfigError):
        TrailConfig(**overrides)


def test_load_config(tmp_path, caplog):
    """JSON config files are read; unknown keys are ignored with a warning."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "depth": 3,
        "faces": [1, 2],
        "spawn_mode": "lattice",
        "bins": [[0.2, 0.5], [0.6, 0.9]],
        "colour": "red",
    }))

    config = load_config(str(path))

    assert config.depth == 3
    assert config.faces == (1, 2)
    assert config.spawn_mode == "lattice"
    assert config.bins == ((0.2, 0.5), (0.6, 0.9))
    assert "colour" in caplog.text


def test_config_replace():
    """replace() skips None values and recomputes the default scale."""
    config = TrailConfig(width=400)
    updated = config.replace(particles=99, depth=None, width=800)

    assert updated.particles == 99
    assert updated.depth == 10
    assert updated.scale == 800
    assert config.particles == 20000


def test_dataset_from_dict(record):
    """Arrays are converted to numpy with the declared shape."""
    ds = OceanDataset.from_dict(record)

    assert ds.grid_shape == (2, 10, 10)
    assert ds.U.shape == (2, 3, 10, 10)
    assert ds.lon.shape == (3, 10, 10)
    assert (ds.depth_count, ds.j_count, ds.i_count, ds.face_count) == (2, 10, 10, 3)


def test_dataset_missing_fields(record):
    """Absent arrays fail fast, naming every missing field."""
    del record["data"]["U"]
    record["grid"] = None

    with pytest.raises(DatasetError) as excinfo:
        OceanDataset.from_dict(record)

    message = str(excinfo.value)
    assert "data.U" in message
    assert "grid.lon" in message and "grid.lat" in message


def test_dataset_null_cells_become_nan(record):
    """JSON nulls (land cells) load as NaN."""
    record["data"]["U"][0][0][0][0] = None
    ds = OceanDataset.from_dict(record)

    assert math.isnan(ds.U[0, 0, 0, 0])
    assert not np.isnan(ds.U[0, 0, 0, 1])


def test_load_dataset_sync_and_async(tmp_path, record):
    """Files load the same through the blocking and async loaders."""
    path = tmp_path / "ocean_currents_data.json"
    path.write_text(json.dumps(record))

    ds = load_dataset(path)
    ds_async = asyncio.run(load_dataset_async(path))

    assert ds.grid_shape == ds_async.grid_shape
    np.testing.assert_array_equal(ds.lat, ds_async.lat)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
