"""Command-line smoke run: build a grid and sample it."""
import argparse
import logging
from typing import List, Optional

from warpgrid.config import DEFAULT_RESOLUTION
from warpgrid.logging_config import setup_logging
from warpgrid.model.geometry_primitives import Vec2
from warpgrid.model.surface_grid import SurfaceGrid

logger = logging.getLogger("warpgrid")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="warpgrid",
        description="Build an undeformed surface grid and evaluate it.",
    )
    parser.add_argument("--width", type=int, default=100, help="Footprint width in pixels (default: 100)")
    parser.add_argument("--height", type=int, default=100, help="Footprint height in pixels (default: 100)")
    parser.add_argument(
        "--resolution",
        type=int,
        default=DEFAULT_RESOLUTION,
        help=f"Control point spacing in pixels, both axes (default: {DEFAULT_RESOLUTION})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level name, e.g. info or warning (default: WARPGRID_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (overrides --log-level)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.debug else args.log_level)

    grid = SurfaceGrid(Vec2(0.0, 0.0), args.width, args.height, args.resolution, args.resolution)
    logger.info(f"Lattice: {grid.num_control_points_x}x{grid.num_control_points_y} control points")

    point = grid.surface_point(0.5, 0.5)
    logger.info(f"surface_point(0.5, 0.5) = ({point.x}, {point.y})")

    samples = grid.generate_surface_points()
    logger.info(f"Generated {samples.size} values for {grid.pixel_width}x{grid.pixel_height} pixels")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
