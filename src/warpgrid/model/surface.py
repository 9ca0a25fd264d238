"""
Parametric Surface Interface
============================
Contract shared by every surface that maps normalized (u, v) parameters to
pixel space. Renderers depend on this interface only.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ParametricSurface(ABC):
    """
    Abstract base class for surfaces evaluated over the unit square.
    """

    @abstractmethod
    def surface_point(self, u: float, v: float) -> Any:
        """Return the surface position for the normalized parameters (u, v)."""
        pass

    def surface_point_at(self, point: Any) -> Any:
        """Same as ``surface_point`` with (u, v) taken from ``point.x`` and ``point.y``."""
        return self.surface_point(point.x, point.y)
