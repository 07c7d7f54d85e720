"""
Command-line interface for the current trail animation.
"""

import argparse
import asyncio
import json
import logging
import sys

import matplotlib

from .animation import TrailAnimation
from .config import ConfigError, SPAWN_MODES, TrailConfig, load_config
from .dataset import DatasetError


def progress_callback(tick: int, stats: dict):
    """Log animation progress."""
    logging.info(
        "Tick %d: advanced=%d respawned=%d binned=%s",
        tick, stats["advanced"], stats["respawned"], stats["binned"]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Animate ocean currents as particle trails on a globe"
    )

    parser.add_argument(
        "dataset",
        help="Ocean current JSON (metadata.gridShape, data.U/V, grid.lon/lat)"
    )
    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Configuration file (JSON)"
    )
    parser.add_argument(
        "--depth",
        type=int,
        help="Depth layer index (default: 10)"
    )
    parser.add_argument(
        "--faces",
        type=int,
        nargs="+",
        help="Grid faces to animate (default: 0 1 2)"
    )
    parser.add_argument(
        "--particles",
        type=int,
        help="Total number of particles (default: 20000)"
    )
    parser.add_argument(
        "--spawn",
        dest="spawn_mode",
        choices=SPAWN_MODES,
        help="Particle spawn layout (default: random)"
    )
    parser.add_argument(
        "--max-magnitude",
        type=float,
        help="Speed that maps to normalized magnitude 1 (default: 0.05)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed"
    )
    parser.add_argument(
        "--dark",
        action="store_true",
        help="Use the dark color scheme"
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=500,
        help="Ticks to run with --save or --headless (default: 500)"
    )
    parser.add_argument(
        "--save",
        type=str,
        help="Write the animation to a file (.gif, .mp4) instead of opening a window"
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run ticks without drawing"
    )
    parser.add_argument(
        "--log",
        dest="loglevel",
        default="INFO",
        help="Logging level (DEBUG/INFO/WARN)"
    )
    return parser


def main(argv=None):
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s"
    )

    try:
        config = load_config(args.config) if args.config else TrailConfig()
        config = config.replace(
            depth=args.depth,
            faces=args.faces,
            particles=args.particles,
            spawn_mode=args.spawn_mode,
            max_magnitude=args.max_magnitude,
            seed=args.seed,
            dark_mode=True if args.dark else None,
        )
        render = not args.headless
        if render and args.save:
            matplotlib.use("Agg")
        anim = asyncio.run(TrailAnimation.from_path(args.dataset, config, render=render))
    except (ConfigError, DatasetError, json.JSONDecodeError, OSError) as e:
        logging.error("%s", e)
        sys.exit(1)

    logging.info(
        "Depth %d, faces %s, %d particles, %s spawn, max magnitude %g",
        config.depth, list(config.faces), len(anim.system.particles),
        config.spawn_mode, config.max_magnitude
    )

    if args.headless:
        anim.run_headless(args.ticks, progress_callback=progress_callback)
        stats = anim.system.get_statistics()
        logging.info("Done: %d ticks, %d particles", stats["ticks"], stats["total_particles"])
    elif args.save:
        anim.save(args.save, args.ticks)
    else:
        anim.show()


if __name__ == "__main__":
    main()
