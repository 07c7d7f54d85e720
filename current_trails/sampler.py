"""
Velocity sampling from the gridded current field.
"""

import math
from typing import Optional, Tuple

from .config import ConfigError
from .dataset import OceanDataset
from .geometry import round_index


class VectorFieldSampler:
    """
    Nearest-cell (u, v) lookup at a fixed depth layer.

    Unlike GridGeometry there is no clamping: an index outside the face
    returns None so the caller can recycle the particle.
    """

    def __init__(self, dataset: OceanDataset, depth: int):
        if not 0 <= depth < dataset.depth_count:
            raise ConfigError(
                f"depth {depth} outside dataset with {dataset.depth_count} layers"
            )
        self.depth = depth
        self.U = dataset.U[depth]
        self.V = dataset.V[depth]
        self.i_count = dataset.i_count
        self.j_count = dataset.j_count

    def sample(self, face: int, i: float, j: float) -> Optional[Tuple[float, float]]:
        """
        Get current velocity at a grid coordinate.

        Args:
            face: Grid face
            i: Fractional index along i
            j: Fractional index along j

        Returns:
            (u, v) in grid cells per tick, or None outside the domain or on
            a cell with no data (NaN, e.g. land)
        """
        ii = round_index(i)
        jj = round_index(j)

        if ii < 0 or ii >= self.i_count or jj < 0 or jj >= self.j_count:
            return None

        u = float(self.U[face, jj, ii])
        v = float(self.V[face, jj, ii])
        if not (math.isfinite(u) and math.isfinite(v)):
            return None
        return u, v
