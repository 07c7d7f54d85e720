"""
Raster mask of the visible globe disk.
"""

import math
from typing import Optional

import numpy as np
from matplotlib.path import Path

from .projection import OrthographicProjection


class VisibilityMask:
    """
    Two-tone raster (visible/hidden) of the projected sphere outline.

    Pixel (x, y) is visible when its centre falls inside the outline.
    """

    def __init__(self, projection: OrthographicProjection, width: int, height: int):
        self.projection = projection
        self.width = int(width)
        self.height = int(height)
        self.mask: Optional[np.ndarray] = None

    def build(self) -> np.ndarray:
        """
        Rasterize the sphere outline.

        Returns:
            Boolean array of shape (height, width), True where visible
        """
        outline = Path(self.projection.sphere_outline(), closed=True)
        xs, ys = np.meshgrid(
            np.arange(self.width) + 0.5,
            np.arange(self.height) + 0.5
        )
        inside = outline.contains_points(np.column_stack([xs.ravel(), ys.ravel()]))
        self.mask = inside.reshape(self.height, self.width)
        return self.mask

    def is_visible(self, x, y) -> bool:
        """True if the screen point lies on the visible globe; False for invalid points."""
        if x is None or y is None:
            return False
        if not (math.isfinite(x) and math.isfinite(y)):
            return False
        if self.mask is None:
            self.build()

        col = int(math.floor(x))
        row = int(math.floor(y))
        if col < 0 or col >= self.width or row < 0 or row >= self.height:
            return False
        return bool(self.mask[row, col])

    def visible_fraction(self) -> float:
        """Share of the viewport covered by the globe."""
        if self.mask is None:
            self.build()
        return float(self.mask.mean())
