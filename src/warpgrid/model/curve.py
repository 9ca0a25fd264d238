"""
One-dimensional Interpolating Curve
===================================
Interpolant over a strictly increasing sequence of abscissas.

Two modes are supported:
1. Linear: piecewise linear polyline through the samples (``numpy.interp``).
2. Smooth: natural cubic spline through the samples
   (``scipy.interpolate.CubicSpline``).

Single-point edits only update the sample arrays; the cubic fit is rebuilt
lazily on the next evaluation.
"""
from __future__ import annotations

from typing import Optional, Sequence, Union, TYPE_CHECKING

import numpy as np
from scipy.interpolate import CubicSpline

if TYPE_CHECKING:
    import numpy.typing as npt


ArrayLike = Union[float, Sequence[float], "npt.NDArray[np.float64]"]


class Curve:
    """
    Interpolated function y(x) through a set of control samples.

    Args:
        linear: True for a polyline, False for a natural cubic spline.
    """

    def __init__(self, linear: bool = True) -> None:
        self._linear: bool = linear
        self._x: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._y: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)
        self._spline: Optional[CubicSpline] = None

    def __repr__(self) -> str:
        mode = "linear" if self._linear else "cubic"
        return f"Curve({mode}, n={self.point_count()})"

    def __len__(self) -> int:
        return self.point_count()

    def __call__(self, x: ArrayLike) -> Union[float, npt.NDArray[np.float64]]:
        return self.evaluate(x)

    # ---- mode ----

    def is_linear(self) -> bool:
        return self._linear

    def set_linear(self, linear: bool) -> None:
        self._linear = linear
        self._spline = None

    # ---- samples ----

    def set_points(self, x: Sequence[float], y: Sequence[float]) -> None:
        """
        Replace all samples and refit.

        Raises:
            ValueError: If the arrays differ in length, hold fewer than two
                samples or the abscissas are not strictly increasing.
        """
        xs = np.asarray(x, dtype=np.float64).reshape(-1)
        ys = np.asarray(y, dtype=np.float64).reshape(-1)
        if xs.shape != ys.shape:
            raise ValueError(f"Expected matching sample counts, got {xs.size} abscissas and {ys.size} ordinates.")
        if xs.size < 2:
            raise ValueError(f"A curve needs at least 2 samples, got {xs.size}.")
        if np.any(np.diff(xs) <= 0.0):
            raise ValueError("Curve abscissas must be strictly increasing.")

        self._x = xs.copy()
        self._y = ys.copy()
        self._spline = None

    def point_count(self) -> int:
        return int(self._x.size)

    def get_point(self, index: int) -> tuple[float, float]:
        self._check_index(index)
        return float(self._x[index]), float(self._y[index])

    @property
    def x(self) -> npt.NDArray[np.float64]:
        """Read-only view of the abscissas."""
        view = self._x.view()
        view.flags.writeable = False
        return view

    @property
    def y(self) -> npt.NDArray[np.float64]:
        """Read-only view of the ordinates."""
        view = self._y.view()
        view.flags.writeable = False
        return view

    def check_point(self, index: int, x: float) -> None:
        """
        Verify that sample ``index`` may be placed at abscissa ``x``.

        Raises:
            IndexError: If ``index`` does not address a sample.
            ValueError: If ``x`` would break the strict ordering of abscissas.
        """
        self._check_index(index)
        if index > 0 and x <= self._x[index - 1]:
            raise ValueError(
                f"Sample {index} at x={x} would not lie after sample {index - 1} at x={self._x[index - 1]}."
            )
        if index < self._x.size - 1 and x >= self._x[index + 1]:
            raise ValueError(
                f"Sample {index} at x={x} would not lie before sample {index + 1} at x={self._x[index + 1]}."
            )

    def set_point(self, index: int, x: float, y: float) -> None:
        self.check_point(index, x)
        self._x[index] = x
        self._y[index] = y
        self._spline = None

    def move_point(self, index: int, dx: float, dy: float) -> None:
        self._check_index(index)
        self.set_point(index, self._x[index] + dx, self._y[index] + dy)

    # ---- evaluation ----

    def evaluate(self, x: ArrayLike) -> Union[float, npt.NDArray[np.float64]]:
        """
        Interpolated ordinate(s) at ``x``.

        A scalar argument returns a float, an array argument an array of the
        same shape.
        """
        if self._x.size < 2:
            raise ValueError("Curve has no samples; call set_points() first.")

        if self._linear:
            values = np.interp(x, self._x, self._y)
        else:
            values = self._fitted()(x)

        if np.ndim(x) == 0:
            return float(values)
        return np.asarray(values, dtype=np.float64)

    def _fitted(self) -> CubicSpline:
        if self._spline is None:
            self._spline = CubicSpline(self._x, self._y, bc_type="natural")
        return self._spline

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._x.size:
            raise IndexError(f"Sample index {index} out of range for a curve with {self._x.size} samples.")
