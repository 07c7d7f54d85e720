"""
Grid geometry: conversion from grid space (face, i, j) to longitude/latitude.

Lookups clamp fractional indices into the grid so that every particle has a
drawable position, even one sitting on the edge of a face.
"""

import math
from typing import Tuple

import numpy as np

from .dataset import OceanDataset


def round_index(x: float) -> int:
    """Round to the nearest integer index, halves rounding up."""
    return int(math.floor(x + 0.5))


def normalize_longitude(lon: float) -> float:
    """
    Map a longitude into (-180, 180].

    Args:
        lon: Longitude in degrees, any range

    Returns:
        Equivalent longitude in (-180, 180]
    """
    lon = math.fmod(lon, 360.0)
    if lon <= -180.0:
        lon += 360.0
    elif lon > 180.0:
        lon -= 360.0
    return lon


def interpolate_longitude(lon1: float, lon2: float, fraction: float) -> float:
    """
    Blend two longitudes along the shorter arc between them.

    When the endpoints are more than 180 degrees apart, 360 is taken off the
    larger one so the blend crosses the antimeridian instead of sweeping the
    long way round through 0.

    Args:
        lon1: Longitude at fraction 0 (degrees)
        lon2: Longitude at fraction 1 (degrees)
        fraction: Interpolation weight in [0, 1]

    Returns:
        Blended longitude in (-180, 180]
    """
    lon1 = normalize_longitude(lon1)
    lon2 = normalize_longitude(lon2)

    if abs(lon1 - lon2) > 180.0:
        if lon1 > lon2:
            lon1 -= 360.0
        else:
            lon2 -= 360.0

    return normalize_longitude(lon1 + (lon2 - lon1) * fraction)


def bilinear_interpolation(
    values: np.ndarray,
    face: int,
    x: float,
    y: float,
    is_longitude: bool = False
) -> float:
    """
    Bilinear interpolation of a [face][y][x] array at a fractional index.

    Corners come from floor/ceil on each axis. If either axis has zero width
    (the index is already integral) the exact cell value is returned.

    Args:
        values: Array indexed [face, y, x]
        face: Grid face
        x: Fractional index along i, already inside the grid
        y: Fractional index along j, already inside the grid
        is_longitude: Use circular blending for longitudes

    Returns:
        Interpolated value
    """
    x1, x2 = math.floor(x), math.ceil(x)
    y1, y2 = math.floor(y), math.ceil(y)

    if x2 == x1 or y2 == y1:
        return float(values[face, y1, x1])

    f11 = float(values[face, y1, x1])
    f12 = float(values[face, y1, x2])
    f21 = float(values[face, y2, x1])
    f22 = float(values[face, y2, x2])

    # Cells are unit width, so x2 - x1 == 1
    tx = x - x1
    ty = y - y1

    if is_longitude:
        r1 = interpolate_longitude(f11, f12, tx)
        r2 = interpolate_longitude(f21, f22, tx)
        return interpolate_longitude(r1, r2, ty)

    r1 = (1.0 - tx) * f11 + tx * f12
    r2 = (1.0 - tx) * f21 + tx * f22
    return (1.0 - ty) * r1 + ty * r2


class GridGeometry:
    """Geographic lookup over the static lon/lat grid of a dataset."""

    def __init__(self, dataset: OceanDataset):
        self.lon = dataset.lon
        self.lat = dataset.lat
        self.max_i = dataset.i_count - 1
        self.max_j = dataset.j_count - 1

    def _clamp(self, i: float, j: float) -> Tuple[float, float]:
        return (
            min(max(i, 0.0), self.max_i),
            min(max(j, 0.0), self.max_j),
        )

    def direct_lookup(self, face: int, i: float, j: float) -> Tuple[float, float]:
        """Stored (lon, lat) of the nearest cell, without blending."""
        i, j = self._clamp(i, j)
        ii, jj = round_index(i), round_index(j)
        return float(self.lon[face, jj, ii]), float(self.lat[face, jj, ii])

    def interpolated_lookup(self, face: int, i: float, j: float) -> Tuple[float, float]:
        """Bilinearly interpolated (lon, lat) with wraparound-safe longitude."""
        i, j = self._clamp(i, j)
        lon = bilinear_interpolation(self.lon, face, i, j, is_longitude=True)
        lat = bilinear_interpolation(self.lat, face, i, j)
        return lon, lat

    def lookup(
        self,
        face: int,
        i: float,
        j: float,
        interpolation: bool = True
    ) -> Tuple[float, float]:
        """Convert a grid coordinate to (longitude, latitude) in degrees."""
        if interpolation:
            return self.interpolated_lookup(face, i, j)
        return self.direct_lookup(face, i, j)
