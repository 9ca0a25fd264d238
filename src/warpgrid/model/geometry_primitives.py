"""
Geometric Primitives for the Surface Grid.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, TYPE_CHECKING
import math

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Vec2:
    """
    A point (or displacement) in planar pixel space.
    """
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Vec2:
        x, y = values
        return cls(float(x), float(y))

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        if scalar == 0.0: raise ZeroDivisionError
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vec2) -> float:
        return (self - other).magnitude

    def is_close(self, other: Vec2, abs_tol: float = 1e-9) -> bool:
        return math.isclose(self.x, other.x, abs_tol=abs_tol) and math.isclose(self.y, other.y, abs_tol=abs_tol)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])


@dataclass
class Rect:
    """Axis-aligned pixel rectangle given by its origin and size."""
    origin: Vec2 = Vec2()
    width: int = 0
    height: int = 0

    def set_width(self, width: int) -> None:
        self.width = width

    def set_height(self, height: int) -> None:
        self.height = height

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def move_to(self, origin: Vec2) -> None:
        self.origin = origin

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def contains(self, point: Vec2) -> bool:
        return (self.origin.x <= point.x <= self.origin.x + self.width
                and self.origin.y <= point.y <= self.origin.y + self.height)
