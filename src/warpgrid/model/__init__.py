"""
The MODEL layer contains pure data structures and the surface algorithms.
It has NO knowledge of the GUI toolkit (Qt).
"""
from warpgrid.model.curve import Curve
from warpgrid.model.geometry_primitives import Rect, Vec2
from warpgrid.model.surface import ParametricSurface
from warpgrid.model.surface_grid import GridState, SurfaceGrid

__all__ = ["Curve", "GridState", "ParametricSurface", "Rect", "SurfaceGrid", "Vec2"]
