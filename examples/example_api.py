"""
Example script demonstrating the Python API on a synthetic current field.
"""

import matplotlib
matplotlib.use("Agg")

import numpy as np

from current_trails import OceanDataset, ParticleSystem, TrailConfig
from current_trails.animation import TrailAnimation
from current_trails.render import TrailRenderer


def synthetic_dataset(grid_size=90, faces=3, depths=1):
    """A gyre on each face over a lon/lat grid spanning the globe."""
    jj, ii = np.mgrid[0:grid_size, 0:grid_size].astype(float)
    c = (grid_size - 1) / 2.0
    u = -(jj - c) * 0.002
    v = (ii - c) * 0.002

    lon = np.stack([
        -180.0 + (f * 120.0) + ii * (120.0 / grid_size) for f in range(faces)
    ])
    lat = np.stack([-80.0 + jj * (160.0 / (grid_size - 1)) for _ in range(faces)])

    U = np.broadcast_to(u, (depths, faces, grid_size, grid_size)).copy()
    V = np.broadcast_to(v, (depths, faces, grid_size, grid_size)).copy()
    return OceanDataset(
        grid_shape=(depths, grid_size, grid_size), U=U, V=V, lon=lon, lat=lat
    )


def main():
    """Run example animation."""
    print("Building synthetic dataset...")
    dataset = synthetic_dataset()

    config = TrailConfig(depth=0, particles=6000, seed=1, width=600, height=600, scale=280)
    print("Initializing particle system...")
    system = ParticleSystem(dataset, config)

    anim = TrailAnimation(system, TrailRenderer(system.projection, config))

    def progress(tick, stats):
        print(f"  Tick {tick}: advanced {stats['advanced']}, "
              f"respawned {stats['respawned']}, binned {stats['binned']}")

    print("Running 50 ticks...")
    anim.run_headless(50, progress_callback=progress, log_every=10)

    anim.renderer.save_frame("example_api_output.png")

    print("\nStatistics:")
    for key, value in system.get_statistics().items():
        print(f"  {key}: {value}")

    print("\nDone! Check example_api_output.png")


if __name__ == "__main__":
    main()
