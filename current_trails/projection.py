"""
Orthographic globe projection.

Follows the d3-geo conventions used by web globe renderers: a rotation of
(lambda, phi, gamma) degrees is applied first, then the orthographic raw
projection, then scale and translate with screen y growing downward.
"""

import math
from typing import Sequence, Tuple

import numpy as np


class OrthographicProjection:
    """Projects (lon, lat) degrees onto screen pixels."""

    def __init__(
        self,
        scale: float,
        translate: Tuple[float, float],
        rotate: Sequence[float] = (0.0, 0.0, 0.0)
    ):
        """
        Args:
            scale: Globe radius in pixels
            translate: Screen position of the projection centre (x, y)
            rotate: (lambda, phi[, gamma]) rotation in degrees
        """
        self.scale = float(scale)
        self.translate = (float(translate[0]), float(translate[1]))
        rotate = tuple(rotate) + (0.0,) * (3 - len(rotate))
        self.rotate = tuple(float(r) for r in rotate)

        d_lambda, d_phi, d_gamma = (math.radians(r) for r in self.rotate)
        self._d_lambda = d_lambda
        self._cos_phi, self._sin_phi = math.cos(d_phi), math.sin(d_phi)
        self._cos_gamma, self._sin_gamma = math.cos(d_gamma), math.sin(d_gamma)

    def _rotate(self, lon: float, lat: float) -> Tuple[float, float]:
        """Rotate a point given in degrees; returns radians."""
        lam = math.radians(lon) + self._d_lambda
        # wrap to [-pi, pi]
        if abs(lam) > math.pi:
            lam -= round(lam / (2 * math.pi)) * 2 * math.pi
        phi = math.radians(lat)

        cos_phi = math.cos(phi)
        x = math.cos(lam) * cos_phi
        y = math.sin(lam) * cos_phi
        z = math.sin(phi)
        k = z * self._cos_phi + x * self._sin_phi

        lam_r = math.atan2(
            y * self._cos_gamma - k * self._sin_gamma,
            x * self._cos_phi - z * self._sin_phi
        )
        phi_r = math.asin(max(-1.0, min(1.0, k * self._cos_gamma + y * self._sin_gamma)))
        return lam_r, phi_r

    def project(self, lon: float, lat: float) -> Tuple[float, float]:
        """
        Project a geographic point to screen coordinates.

        Points on the far hemisphere are projected too (they land inside the
        disk); use is_front or a VisibilityMask to tell them apart.
        """
        lam, phi = self._rotate(lon, lat)
        x = math.cos(phi) * math.sin(lam)
        y = math.sin(phi)
        tx, ty = self.translate
        return tx + x * self.scale, ty - y * self.scale

    __call__ = project

    def is_front(self, lon: float, lat: float) -> bool:
        """True if the point lies on the hemisphere facing the viewer."""
        lam, phi = self._rotate(lon, lat)
        return math.cos(phi) * math.cos(lam) > 0.0

    def sphere_outline(self, n_points: int = 360) -> np.ndarray:
        """
        Screen-space outline of the whole sphere.

        Returns:
            Closed polygon of shape (n_points + 1, 2)
        """
        theta = np.linspace(0.0, 2.0 * np.pi, n_points + 1)
        tx, ty = self.translate
        return np.column_stack([
            tx + self.scale * np.cos(theta),
            ty + self.scale * np.sin(theta),
        ])
