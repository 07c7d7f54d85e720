"""
Ocean current dataset loading.

The dataset is a JSON record with the layout::

    {
      "metadata": {"gridShape": [depthCount, jCount, iCount]},
      "data": {"U": [depth][face][j][i], "V": [depth][face][j][i]},
      "grid": {"lon": [face][j][i], "lat": [face][j][i]}
    }

Arrays are converted to numpy once at load time. Only the presence of the
required fields is checked; shapes are trusted.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

import numpy as np


REQUIRED_FIELDS = (
    ("metadata", "gridShape"),
    ("data", "U"),
    ("data", "V"),
    ("grid", "lon"),
    ("grid", "lat"),
)


class DatasetError(ValueError):
    """Raised when the dataset is missing a required array."""


@dataclass
class OceanDataset:
    """Velocity field and geographic grid for one snapshot."""

    grid_shape: Tuple[int, int, int]  # (depth_count, j_count, i_count)
    U: np.ndarray    # (depth, face, j, i), grid cells per tick
    V: np.ndarray    # (depth, face, j, i)
    lon: np.ndarray  # (face, j, i), degrees
    lat: np.ndarray  # (face, j, i), degrees

    @property
    def depth_count(self) -> int:
        return self.grid_shape[0]

    @property
    def j_count(self) -> int:
        return self.grid_shape[1]

    @property
    def i_count(self) -> int:
        return self.grid_shape[2]

    @property
    def face_count(self) -> int:
        return self.lon.shape[0]

    @classmethod
    def from_dict(cls, record: dict) -> "OceanDataset":
        """
        Build a dataset from the decoded JSON record.

        Raises:
            DatasetError: if any of the required arrays is absent
        """
        missing = []
        for section, key in REQUIRED_FIELDS:
            if not isinstance(record.get(section), dict) or record[section].get(key) is None:
                missing.append(f"{section}.{key}")
        if missing:
            raise DatasetError(f"dataset is missing {', '.join(missing)}")

        grid_shape = tuple(int(n) for n in record["metadata"]["gridShape"])
        if len(grid_shape) != 3:
            raise DatasetError(
                f"metadata.gridShape must be [depth, j, i], got {list(grid_shape)}"
            )

        return cls(
            grid_shape=grid_shape,
            U=np.asarray(record["data"]["U"], dtype=float),
            V=np.asarray(record["data"]["V"], dtype=float),
            lon=np.asarray(record["grid"]["lon"], dtype=float),
            lat=np.asarray(record["grid"]["lat"], dtype=float),
        )


def load_dataset(path: Union[str, Path]) -> OceanDataset:
    """Read and convert a dataset JSON file."""
    path = Path(path)
    logging.info("Loading ocean current data: %s", path)
    with path.open("r", encoding="utf-8") as f:
        record = json.load(f)
    dataset = OceanDataset.from_dict(record)
    logging.info(
        "Loaded grid shape %s with %d faces",
        list(dataset.grid_shape), dataset.face_count
    )
    return dataset


async def load_dataset_async(path: Union[str, Path]) -> OceanDataset:
    """Load the dataset without blocking the event loop."""
    return await asyncio.to_thread(load_dataset, path)
