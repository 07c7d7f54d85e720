"""
Current Trails - animated ocean-current particle trails on a globe.

This package advects passive particles through a gridded current field and
groups them into opacity buckets by speed for layered trail rendering.
"""

__version__ = "0.1.0"
__author__ = "current_trails contributors"

from .config import TrailConfig, ConfigError, load_config
from .dataset import OceanDataset, DatasetError, load_dataset, load_dataset_async
from .geometry import GridGeometry, normalize_longitude, interpolate_longitude
from .sampler import VectorFieldSampler
from .particle import Particle
from .binning import Bin, MagnitudeBinner
from .particle_system import ParticleSystem
from .projection import OrthographicProjection
from .mask import VisibilityMask

__all__ = [
    "TrailConfig",
    "ConfigError",
    "load_config",
    "OceanDataset",
    "DatasetError",
    "load_dataset",
    "load_dataset_async",
    "GridGeometry",
    "normalize_longitude",
    "interpolate_longitude",
    "VectorFieldSampler",
    "Particle",
    "Bin",
    "MagnitudeBinner",
    "ParticleSystem",
    "OrthographicProjection",
    "VisibilityMask",
]
