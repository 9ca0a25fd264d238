"""
Configuration & Global Constants
================================
Central registry of the limits applied to every surface grid.

Exports:
    MIN_CONTROL_POINTS (int): Lattice dimension floor on each axis.
    MIN_RESOLUTION (int): Smallest control point spacing, in pixels.
    MIN_PIXEL_SIZE (int): Smallest footprint width/height, in pixels.
    DEFAULT_RESOLUTION (int): Spacing used when none is given.
    LOG_LEVEL (str): Default level for ``setup_logging``; WARPGRID_LOG_LEVEL overrides it.
"""
import os

# Lattice limits
MIN_CONTROL_POINTS: int = 3
MIN_RESOLUTION: int = 5
MIN_PIXEL_SIZE: int = 20

# Defaults
DEFAULT_RESOLUTION: int = 10
LOG_LEVEL: str = os.environ.get("WARPGRID_LOG_LEVEL", "INFO")
