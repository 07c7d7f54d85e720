"""
Particle system driving the current trail animation.

Advects a fixed pool of passive tracers through the gridded current field,
one explicit Euler step per tick, recycling particles that leave the field
or outlive their lifespan.
"""

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .binning import Bin, MagnitudeBinner
from .config import ConfigError, SPAWN_LATTICE, SPAWN_RANDOM, SPAWN_MODES, TrailConfig
from .dataset import OceanDataset
from .geometry import GridGeometry
from .particle import Particle
from .projection import OrthographicProjection
from .sampler import VectorFieldSampler


class ParticleSystem:
    """
    Owns the particle pool and the bins produced by the last tick.

    Particles are created by reset() and never removed: respawning reuses the
    same Particle objects, so the pool size stays constant across ticks.
    """

    def __init__(
        self,
        dataset: OceanDataset,
        config: Optional[TrailConfig] = None,
        projection: Optional[OrthographicProjection] = None,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the particle system and spawn the pool.

        Args:
            dataset: Loaded current field and lon/lat grid
            config: Trail configuration (defaults if None)
            projection: Projection adapter; an orthographic globe centred on
                the configured viewport if None
            rng: Random generator; seeded from config.seed if None
        """
        self.config = config or TrailConfig()

        missing = [f for f in self.config.faces if not 0 <= f < dataset.face_count]
        if missing:
            raise ConfigError(
                f"faces {missing} not in dataset with {dataset.face_count} faces"
            )

        self.geometry = GridGeometry(dataset)
        self.i_count = dataset.i_count
        self.j_count = dataset.j_count
        self.sampler = VectorFieldSampler(dataset, self.config.depth)
        self.binner = MagnitudeBinner(self.config.bins)
        self.projection = projection or OrthographicProjection(
            scale=self.config.scale,
            translate=(self.config.width / 2, self.config.height / 2),
            rotate=self.config.rotate
        )
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        self.max_magnitude = self.config.max_magnitude
        self.lifespan_step = self.config.lifespan_step

        self.particles: List[Particle] = []
        self.bins: List[Bin] = self.binner.empty_bins()
        self.tick_count = 0
        self.last_advanced = 0
        self.last_respawned = 0

        self.reset(
            self.config.spawn_mode,
            self.config.particles,
            self.config.faces,
            self.config.grid_size
        )

    def screen_position(self, face: int, i: float, j: float) -> Tuple[float, float]:
        """Project a grid coordinate to screen space."""
        lon, lat = self.geometry.lookup(face, i, j)
        return self.projection.project(lon, lat)

    def reset(
        self,
        spawn_mode: str,
        particle_count: int,
        faces: Sequence[int],
        grid_size: int
    ):
        """
        Rebuild the whole particle pool.

        Args:
            spawn_mode: "random" or "lattice"
            particle_count: Total particles across all faces. Random mode
                spawns exactly this many; lattice mode rounds each face up
                to a full square lattice.
            faces: Grid faces to populate
            grid_size: Cells per face side to spawn over, clipped to the
                dataset's own i and j extents
        """
        if spawn_mode not in SPAWN_MODES:
            raise ConfigError(f"unknown spawn mode {spawn_mode!r}")

        self.spawn_mode = spawn_mode
        self.faces = tuple(faces)
        self.grid_size = grid_size
        self.i_extent = min(grid_size, self.i_count)
        self.j_extent = min(grid_size, self.j_count)
        if grid_size > self.i_extent or grid_size > self.j_extent:
            logging.warning(
                "grid_size %d exceeds dataset grid %dx%d; spawning within the dataset",
                grid_size, self.i_count, self.j_count
            )
        self.particles = []
        self.bins = self.binner.empty_bins()
        self.tick_count = 0

        if spawn_mode == SPAWN_RANDOM:
            per_face, extra = divmod(particle_count, len(self.faces))
            for index, face in enumerate(self.faces):
                count = per_face + (1 if index < extra else 0)
                positions = self.rng.uniform(
                    0.0, (self.i_extent, self.j_extent), size=(count, 2)
                )
                lifespans = self.rng.random(count)
                for (i, j), lifespan in zip(positions, lifespans):
                    self._spawn(face, float(i), float(j), float(lifespan))
        else:
            per_row = math.sqrt(particle_count / len(self.faces))
            i_spacing = self.i_extent / per_row
            j_spacing = self.j_extent / per_row
            rows = math.ceil(per_row)
            for face in self.faces:
                for a in range(rows):
                    for b in range(rows):
                        i, j = a * i_spacing, b * j_spacing
                        self._spawn(
                            face, i, j, float(self.rng.random()), origin=(face, i, j)
                        )

        logging.info(
            "Spawned %d particles on faces %s (%s mode, grid %dx%d)",
            len(self.particles), list(self.faces), spawn_mode,
            self.i_extent, self.j_extent
        )

    def _spawn(self, face, i, j, lifespan, origin=None):
        x, y = self.screen_position(face, i, j)
        self.particles.append(Particle(
            face=face, i=i, j=j,
            x=x, y=y, xt=x, yt=y,
            lifespan=lifespan,
            origin=origin
        ))

    def respawn(self, p: Particle):
        """
        Recycle a particle at a fresh position with a new lifespan.

        Random mode keeps the face and draws a new (i, j); lattice mode
        returns the particle to its origin. No segment is drawn this tick.
        """
        if self.spawn_mode == SPAWN_LATTICE and p.origin is not None:
            p.face, p.i, p.j = p.origin
        else:
            p.i = float(self.rng.uniform(0.0, self.i_extent - 1))
            p.j = float(self.rng.uniform(0.0, self.j_extent - 1))
        p.u = 0.0
        p.v = 0.0
        p.m = 0.0
        p.x, p.y = self.screen_position(p.face, p.i, p.j)
        p.xt, p.yt = p.x, p.y
        p.lifespan = float(self.rng.random())

    def tick(self) -> List[Bin]:
        """
        Advance every particle by one step.

        Returns:
            This tick's bins, ordered from slowest to fastest
        """
        to_bin = []
        advanced = 0
        respawned = 0

        for p in self.particles:
            p.lifespan -= self.lifespan_step

            vector = self.sampler.sample(p.face, p.i, p.j)
            if vector is None or p.lifespan <= 0:
                self.respawn(p)
                respawned += 1
                continue

            p.x, p.y = self.screen_position(p.face, p.i, p.j)
            p.u, p.v = vector
            p.i += p.u
            p.j += p.v
            p.m = math.hypot(p.u, p.v) / self.max_magnitude
            p.xt, p.yt = self.screen_position(p.face, p.i, p.j)
            advanced += 1

            if p.m > self.binner.lowest:
                to_bin.append(p)

        self.bins = self.binner.partition(to_bin)
        self.tick_count += 1
        self.last_advanced = advanced
        self.last_respawned = respawned
        logging.debug(
            "Tick %d: advanced=%d respawned=%d binned=%d",
            self.tick_count, advanced, respawned, len(to_bin)
        )
        return self.bins

    def run(
        self,
        ticks: int,
        progress_callback: Optional[Callable[[int, dict], None]] = None
    ):
        """
        Run a number of ticks without rendering.

        Args:
            ticks: Number of ticks
            progress_callback: Optional callback function(tick, statistics),
                called every 10 ticks
        """
        for tick_num in range(ticks):
            self.tick()
            if progress_callback and (tick_num % 10 == 0):
                progress_callback(self.tick_count, self.get_statistics())

    def get_statistics(self) -> dict:
        """
        Get particle pool statistics.

        Returns:
            Dictionary with statistics
        """
        per_face = {face: 0 for face in self.faces}
        for p in self.particles:
            per_face[p.face] += 1

        return {
            "total_particles": len(self.particles),
            "particles_per_face": per_face,
            "ticks": self.tick_count,
            "advanced": self.last_advanced,
            "respawned": self.last_respawned,
            "binned": [len(b) for b in self.bins],
        }
