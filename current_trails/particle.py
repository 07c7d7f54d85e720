"""
Particle module for current trail advection.

Particles live in grid space (face, i, j) and carry the screen positions of
the segment they drew during the last tick.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(eq=False)
class Particle:
    """Represents a single passive tracer advected by the current field."""

    # Grid position
    face: int
    i: float
    j: float

    # Last sampled velocity (grid cells per tick) and normalized speed
    u: float = 0.0
    v: float = 0.0
    m: float = 0.0

    # Screen position before (x, y) and after (xt, yt) the last step
    x: float = 0.0
    y: float = 0.0
    xt: float = 0.0
    yt: float = 0.0

    lifespan: float = 0.0

    # Respawn point under lattice spawning: (face, i, j)
    origin: Optional[Tuple[int, float, float]] = None

    @property
    def segment(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """Screen-space line drawn for this particle, (from, to)."""
        return (self.x, self.y), (self.xt, self.yt)
