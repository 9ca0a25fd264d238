"""
Qt Value Type Adapters
======================
Converts between PySide6 geometry types and the model's value types.

The model works with ``Vec2`` and ``Rect`` only; Qt hosts (editors, previews)
hand in ``QPointF``/``QRectF`` and get the same types back.
"""
from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF

from warpgrid.config import DEFAULT_RESOLUTION
from warpgrid.model.geometry_primitives import Rect, Vec2
from warpgrid.model.surface import ParametricSurface
from warpgrid.model.surface_grid import SurfaceGrid


def to_vec2(point: QPointF) -> Vec2:
    return Vec2(point.x(), point.y())


def to_qpointf(point: Vec2) -> QPointF:
    return QPointF(point.x, point.y)


def rect_from_qrectf(rect: QRectF) -> Rect:
    """Footprint for a Qt rectangle; the size is rounded to whole pixels."""
    return Rect(Vec2(rect.x(), rect.y()), round(rect.width()), round(rect.height()))


def to_qrectf(rect: Rect) -> QRectF:
    return QRectF(rect.origin.x, rect.origin.y, rect.width, rect.height)


def grid_from_qrectf(
    rect: QRectF,
    resolution_x: int = DEFAULT_RESOLUTION,
    resolution_y: int = DEFAULT_RESOLUTION,
) -> SurfaceGrid:
    footprint = rect_from_qrectf(rect)
    return SurfaceGrid(footprint.origin, footprint.width, footprint.height, resolution_x, resolution_y)


class QtSurface(ParametricSurface):
    """
    Wraps a surface so it can be queried with and answers in ``QPointF``.
    """

    def __init__(self, surface: ParametricSurface) -> None:
        self.surface = surface

    def surface_point(self, u: float, v: float) -> QPointF:
        return to_qpointf(self.surface.surface_point(u, v))

    def surface_point_at(self, point: QPointF) -> QPointF:
        return self.surface_point(point.x(), point.y())
