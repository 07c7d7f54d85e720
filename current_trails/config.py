"""
Configuration for the current trail animation.

Defaults reproduce the reference visualization: depth layer 10 (about -100 m),
three grid faces, 20000 particles and a 40 ms frame interval.
"""

import json
import logging
from dataclasses import dataclass, fields, asdict
from typing import Optional, Tuple


SPAWN_RANDOM = "random"
SPAWN_LATTICE = "lattice"
SPAWN_MODES = (SPAWN_RANDOM, SPAWN_LATTICE)

# (lower bound on normalized speed, opacity), ordered low -> high
DEFAULT_BINS = ((0.1, 0.1), (0.2, 0.2), (0.3, 0.3), (0.4, 0.4))


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass
class TrailConfig:
    # Field sampling
    depth: int = 10
    faces: Tuple[int, ...] = (0, 1, 2)
    grid_size: int = 90

    # Particle pool
    particles: int = 20000
    spawn_mode: str = SPAWN_RANDOM
    max_magnitude: float = 0.05
    lifespan_step: float = 0.01
    seed: Optional[int] = None

    # Speed buckets
    bins: Tuple[Tuple[float, float], ...] = DEFAULT_BINS

    # Animation / rendering
    frame_interval_ms: int = 40
    width: int = 960
    height: int = 960
    scale: Optional[float] = None  # defaults to width
    rotate: Tuple[float, ...] = (20.0, -75.0)
    line_width: float = 1.0
    trail_length: int = 20
    dark_mode: bool = False
    cull_hidden: bool = False

    def __post_init__(self):
        self.faces = tuple(int(f) for f in self.faces)
        self.rotate = tuple(float(r) for r in self.rotate)
        self.bins = tuple((float(lo), float(alpha)) for lo, alpha in self.bins)
        if self.scale is None:
            self.scale = float(self.width)
        self.validate()

    def validate(self):
        """Check value ranges, raising ConfigError on the first problem."""
        if self.spawn_mode not in SPAWN_MODES:
            raise ConfigError(
                f"spawn_mode must be one of {SPAWN_MODES}, got {self.spawn_mode!r}"
            )
        if not self.faces:
            raise ConfigError("at least one grid face is required")
        if len(set(self.faces)) != len(self.faces):
            raise ConfigError(f"duplicate faces in {self.faces}")
        if self.particles < len(self.faces):
            raise ConfigError("particles must be at least one per face")
        if self.grid_size <= 1:
            raise ConfigError("grid_size must be greater than 1")
        if self.depth < 0:
            raise ConfigError("depth must be non-negative")
        if self.max_magnitude <= 0:
            raise ConfigError("max_magnitude must be positive")
        if self.lifespan_step <= 0:
            raise ConfigError("lifespan_step must be positive")
        if self.frame_interval_ms < 0:
            raise ConfigError("frame_interval_ms must be non-negative")
        if not self.bins:
            raise ConfigError("at least one magnitude bin is required")
        bounds = [lo for lo, _ in self.bins]
        if bounds != sorted(bounds) or len(set(bounds)) != len(bounds):
            raise ConfigError("bin thresholds must be strictly increasing")
        for _, alpha in self.bins:
            if not 0.0 <= alpha <= 1.0:
                raise ConfigError(f"bin opacity {alpha} outside [0, 1]")
        if len(self.rotate) not in (2, 3):
            raise ConfigError("rotate takes (lambda, phi) or (lambda, phi, gamma)")
        if self.trail_length < 1:
            raise ConfigError("trail_length must be at least 1")

    @classmethod
    def from_dict(cls, values: dict) -> "TrailConfig":
        """Build a config from a mapping, ignoring keys it does not know."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            logging.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in values.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)

    def replace(self, **overrides) -> "TrailConfig":
        """Return a copy with the given non-None values replaced."""
        values = self.to_dict()
        if overrides.get("width") is not None and overrides.get("scale") is None:
            values["scale"] = None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return TrailConfig(**values)


def load_config(config_file: str) -> TrailConfig:
    """Load configuration from JSON file."""
    with open(config_file, 'r') as f:
        return TrailConfig.from_dict(json.load(f))
