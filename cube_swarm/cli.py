"""
Command line entry point and frame loop.
"""

import argparse
import logging
import time

from . import config as cfg
from . import terminal
from .cube import spawn_cubes
from .logging_config import setup_logging
from .physics import step
from .pipeline import Camera, view_points
from .raster import render

logger = logging.getLogger(__name__)


def now_ms():
    return time.monotonic() * 1000.0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="cube-swarm", description="Bouncing, spinning ASCII cubes"
    )
    parser.add_argument("--width", type=int, help="Grid width in characters (default: terminal)")
    parser.add_argument("--height", type=int, help="Grid height in characters (default: terminal)")
    parser.add_argument(
        "--projection", "-p", choices=cfg.PROJECTIONS, default="perspective", help="Projection kind"
    )
    parser.add_argument(
        "--bounds",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=cfg.WORLD_BOUNDS,
        help="Bounce planes at +/- X, Y, Z",
    )
    parser.add_argument("--cubes", "-n", type=int, default=cfg.CUBE_COUNT, help="Number of cubes")
    parser.add_argument("--min-side", type=int, default=cfg.MIN_SIDE, help="Smallest cube side")
    parser.add_argument("--max-side", type=int, default=cfg.MAX_SIDE, help="Largest cube side")
    parser.add_argument(
        "--max-speed", type=float, default=cfg.MAX_LINEAR_SPEED, help="Max linear speed (units/ms)"
    )
    parser.add_argument(
        "--max-spin", type=float, default=cfg.MAX_ANGULAR_SPEED, help="Max angular speed (rad/ms)"
    )
    parser.add_argument(
        "--camera-distance", type=float, default=cfg.CAMERA_DIST, help="Camera distance along +Z"
    )
    parser.add_argument("--fov", type=float, default=cfg.FOV, help="Vertical field of view (degrees)")
    parser.add_argument("--no-color", action="store_true", help="Plain glyphs only")
    parser.add_argument(
        "--no-collisions", action="store_true", help="Cubes pass through each other"
    )
    parser.add_argument(
        "--delay", type=int, default=cfg.FRAME_DELAY_MS, help="Delay between frames (ms)"
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--frames", type=int, help="Stop after this many frames")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def config_from_args(args):
    cols, rows = cfg.terminal_size()
    return cfg.Config(
        screen_width=args.width if args.width is not None else cols,
        screen_height=args.height if args.height is not None else rows,
        projection=args.projection,
        world_bounds=tuple(args.bounds),
        cube_count=args.cubes,
        min_side=args.min_side,
        max_side=args.max_side,
        max_linear_speed=args.max_speed,
        max_angular_speed=args.max_spin,
        camera_distance=args.camera_distance,
        color_enabled=not args.no_color,
        collisions=not args.no_collisions,
        fov=args.fov,
        frame_delay_ms=args.delay,
        seed=args.seed,
        frames=args.frames,
    )


def run(config, clock=now_ms, draw=terminal.draw, sleep=time.sleep):
    """
    Render, then advance the simulation, until interrupted or
    ``config.frames`` frames have been drawn. Returns the frame count.
    """
    cubes = spawn_cubes(config, clock())
    camera = Camera.from_distance(config.camera_distance)
    logger.info("Spawned %d cubes", len(cubes))

    frame_count = 0
    while config.frames is None or frame_count < config.frames:
        frame = render(view_points(cubes, camera), config)
        draw(frame, config.color_enabled)
        frame_count += 1

        step(cubes, clock(), config.world_bounds, config.collisions)
        sleep(config.frame_delay_ms / 1000.0)
    return frame_count


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    config = config_from_args(args)
    try:
        config.validate()
    except cfg.ConfigError as e:
        parser.error(str(e))

    terminal.enable_windows_ansi()
    terminal.clear_screen()
    terminal.hide_cursor()

    try:
        run(config)
    except KeyboardInterrupt:
        pass
    finally:
        terminal.reset_style()
        terminal.clear_screen()
        terminal.show_cursor()
        print("Cube Swarm ended.")


if __name__ == "__main__":
    main()
