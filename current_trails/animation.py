"""
Animation host for the particle system.

Ticks are never re-entrant: the next one is scheduled only after the current
tick (and its draw) has returned, and never sooner than the configured
frame interval.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from .config import TrailConfig
from .dataset import load_dataset_async
from .particle_system import ParticleSystem
from .render import TrailRenderer


class TrailAnimation:
    """Drives ParticleSystem ticks and hands each tick's bins to a renderer."""

    def __init__(self, system: ParticleSystem, renderer: Optional[TrailRenderer] = None):
        self.system = system
        self.config = system.config
        self.interval_ms = self.config.frame_interval_ms
        self.renderer = renderer
        self.animation = None

    @classmethod
    async def from_path(
        cls,
        path: Union[str, Path],
        config: Optional[TrailConfig] = None,
        render: bool = True
    ) -> "TrailAnimation":
        """
        Load the dataset, then build the particle system on top of it.

        No particle exists, and so no tick can run, until the load completes.
        """
        dataset = await load_dataset_async(path)
        system = ParticleSystem(dataset, config)
        renderer = TrailRenderer(system.projection, system.config) if render else None
        return cls(system, renderer)

    def step(self, frame: int = 0):
        """Advance one tick and draw it."""
        bins = self.system.tick()
        if self.renderer is None:
            return []
        return self.renderer.draw(bins)

    def start(self, frames: Optional[int] = None) -> FuncAnimation:
        """Create the matplotlib animation; frames=None runs until closed."""
        if self.renderer is None:
            raise RuntimeError("animation needs a renderer; use run_headless instead")
        self.animation = FuncAnimation(
            self.renderer.fig,
            self.step,
            frames=frames,
            interval=self.interval_ms,
            blit=False,
            cache_frame_data=False,
            repeat=False
        )
        return self.animation

    def show(self):
        """Open an interactive window."""
        self.start()
        plt.show()

    def save(self, filename: str, ticks: int):
        """
        Render a fixed number of ticks to a movie or GIF.

        Args:
            filename: Output path; ".gif" uses Pillow, other suffixes the
                default matplotlib movie writer
            ticks: Number of frames
        """
        animation = self.start(frames=ticks)
        writer = "pillow" if Path(filename).suffix.lower() == ".gif" else None
        fps = 1000.0 / self.interval_ms if self.interval_ms > 0 else 25
        logging.info("Writing %d frames to %s", ticks, filename)
        animation.save(filename, writer=writer, fps=fps)

    def run_headless(
        self,
        ticks: int,
        realtime: bool = False,
        progress_callback: Optional[Callable[[int, dict], None]] = None,
        log_every: int = 100
    ):
        """
        Tick without an interactive window.

        Args:
            ticks: Number of ticks to run
            realtime: Sleep so ticks start at most once per frame interval
            progress_callback: Optional callback function(tick, statistics)
            log_every: Call progress_callback every this many ticks
        """
        interval = self.interval_ms / 1000.0
        for tick_num in range(ticks):
            started = time.monotonic()
            self.step(tick_num)

            if progress_callback and (tick_num % log_every == 0):
                progress_callback(self.system.tick_count, self.system.get_statistics())

            if realtime:
                remaining = interval - (time.monotonic() - started)
                if remaining > 0:
                    time.sleep(remaining)
