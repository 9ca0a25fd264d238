"""
warpgrid: editable grid-of-splines surfaces for mesh based image warping.
"""
from warpgrid.model import Curve, GridState, ParametricSurface, Rect, SurfaceGrid, Vec2

__version__ = "0.1.0"

__all__ = ["Curve", "GridState", "ParametricSurface", "Rect", "SurfaceGrid", "Vec2"]
