"""
Surface Grid (Core Model)
=========================
A parametric surface built from a lattice of editable control points.

The lattice is stored twice:
1. Row curves: one per lattice row, interpolating Y over X.
2. Column curves: one per lattice column, interpolating X over Y.

Both families always hold the same control points. Every edit goes through
``set_control_point_position`` or ``move_control_point``, which update the two
families together.

Inside a lattice cell the surface is a Coons patch: the two bounding column
curves and the two bounding row curves are blended linearly and corrected by
the bilinear interpolation of the four cell corners, so the patch reproduces
its boundary curves and corners exactly.

Classes:
    GridState: Footprint rectangle and the last generated raster map.
    SurfaceGrid: The lattice, its curves and the evaluation/edit operations.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import List, Sequence, Union, TYPE_CHECKING

import numpy as np

from warpgrid.config import MIN_CONTROL_POINTS, MIN_PIXEL_SIZE, MIN_RESOLUTION, DEFAULT_RESOLUTION
from warpgrid.model.curve import Curve
from warpgrid.model.geometry_primitives import Rect, Vec2
from warpgrid.model.surface import ParametricSurface

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass
class GridState:
    rectangle: Rect = field(default_factory=Rect)
    surface_points: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty(0, dtype=np.float64))


# ---- lattice helpers ----

def normalize_size(size: int) -> int:
    return max(MIN_PIXEL_SIZE, int(size))


def normalize_resolution(resolution: int, size: int) -> int:
    """
    Clamp a control point spacing to [MIN_RESOLUTION, size - 1].

    A spacing of ``size`` or more would place the second and third node of the
    minimal lattice both at ``size``.
    """
    return min(max(MIN_RESOLUTION, int(resolution)), size - 1)


def lattice_size(size: int, resolution: int) -> int:
    """Number of control points needed to cover ``size`` pixels."""
    return max(MIN_CONTROL_POINTS, 1 + math.ceil(size / resolution))


def sample_positions(size: int, resolution: int, count: int) -> npt.NDArray[np.float64]:
    """Pixel positions of the lattice nodes along one axis; the last one is clamped to ``size``."""
    return np.minimum(size, np.arange(count) * resolution).astype(np.float64)


def edge_remainder(size: int, resolution: int) -> float:
    """Fraction of a full cell covered by the last lattice cell (0 when ``resolution`` divides ``size``)."""
    return math.modf(size / resolution)[0]


# ---- Coons patch ----

def interpolate_between_u(t: float, y0: float, y1: float, curve0: Curve, curve1: Curve) -> Vec2:
    """Blend points of two column curves, taken at heights ``y0`` and ``y1``."""
    p0 = Vec2(curve0.evaluate(y0), y0)
    p1 = Vec2(curve1.evaluate(y1), y1)
    return p0 * (1 - t) + p1 * t


def interpolate_between_v(t: float, x0: float, x1: float, curve0: Curve, curve1: Curve) -> Vec2:
    """Blend points of two row curves, taken at abscissas ``x0`` and ``x1``."""
    p0 = Vec2(x0, curve0.evaluate(x0))
    p1 = Vec2(x1, curve1.evaluate(x1))
    return p0 * (1 - t) + p1 * t


def coons_patch(
    nu: float,
    nv: float,
    column0: Curve,
    column1: Curve,
    row0: Curve,
    row1: Curve,
    corner00: Vec2,
    corner01: Vec2,
    corner10: Vec2,
    corner11: Vec2,
) -> Vec2:
    """
    Evaluate one Coons patch at the local parameters (nu, nv).

    Corners are named by X side then Y side, 0 being the lower lattice index:
    ``corner01`` has the smaller column and the bigger row.
    """
    bilinear = (corner00 * ((1 - nv) * (1 - nu)) + corner01 * (nv * (1 - nu))
                + corner10 * ((1 - nv) * nu) + corner11 * (nv * nu))

    along_columns = interpolate_between_u(
        nu,
        corner00.y * (1 - nv) + nv * corner01.y,
        corner10.y * (1 - nv) + nv * corner11.y,
        column0, column1,
    )
    along_rows = interpolate_between_v(
        nv,
        corner00.x * (1 - nu) + nu * corner10.x,
        corner01.x * (1 - nu) + nu * corner11.x,
        row0, row1,
    )
    return along_columns + along_rows - bilinear


def _evaluate_grouped(
    curves: Sequence[Curve],
    indices: npt.NDArray[np.int_],
    params: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    """Evaluate ``curves[indices[k]]`` at ``params[k]``, once per distinct curve."""
    values = np.empty_like(params)
    for index in np.unique(indices):
        mask = indices == index
        values[mask] = curves[index].evaluate(params[mask])
    return values


class SurfaceGrid(ParametricSurface):
    """
    Parametric surface defined by a grid of curves with coincident control points.

    Args:
        pixel_origin: Position of the footprint's top-left corner.
        pixel_width: Footprint width, in pixels.
        pixel_height: Footprint height, in pixels.
        resolution_x: Pixel spacing between control points along X.
        resolution_y: Pixel spacing between control points along Y.

    Sizes below ``MIN_PIXEL_SIZE`` are raised to it; spacings are clamped to
    [MIN_RESOLUTION, size - 1] (see ``normalize_resolution``).
    """

    def __init__(
        self,
        pixel_origin: Vec2,
        pixel_width: int,
        pixel_height: int,
        resolution_x: int = DEFAULT_RESOLUTION,
        resolution_y: int = DEFAULT_RESOLUTION,
    ) -> None:
        width = normalize_size(pixel_width)
        height = normalize_size(pixel_height)
        self._state: GridState = GridState(rectangle=Rect(pixel_origin, width, height))
        self._resolution_x: int = normalize_resolution(resolution_x, width)
        self._resolution_y: int = normalize_resolution(resolution_y, height)
        self._num_control_points_x: int = 0
        self._num_control_points_y: int = 0
        self._row_curves: List[Curve] = []
        self._column_curves: List[Curve] = []

        if (width, height, self._resolution_x, self._resolution_y) != (
                pixel_width, pixel_height, resolution_x, resolution_y):
            logger.debug(
                f"Grid input normalized to {width}x{height} px, "
                f"resolution {self._resolution_x}x{self._resolution_y}."
            )

        self.create_grid_data()

    def __repr__(self) -> str:
        return (f"SurfaceGrid(origin={self.pixel_origin}, size={self.pixel_width}x{self.pixel_height}, "
                f"lattice={self._num_control_points_x}x{self._num_control_points_y})")

    # ---- footprint & resolution ----

    @property
    def state(self) -> GridState:
        return self._state

    @property
    def pixel_width(self) -> int:
        return self._state.rectangle.width

    @property
    def pixel_height(self) -> int:
        return self._state.rectangle.height

    @property
    def pixel_origin(self) -> Vec2:
        return self._state.rectangle.origin

    def set_pixel_origin(self, origin: Vec2) -> None:
        """Move the footprint. Control points are footprint-local and stay as they are."""
        self._state.rectangle.move_to(origin)

    def set_pixel_width(self, width: int) -> None:
        self.set_pixel_size(width, self.pixel_height)

    def set_pixel_height(self, height: int) -> None:
        self.set_pixel_size(self.pixel_width, height)

    def set_pixel_size(self, width: int, height: int) -> None:
        """
        Resize the footprint, stretching the current surface onto it.

        Edits survive: the lattice is resampled like in ``rebuild_grid_data``
        and the sampled positions are scaled by new size / old size per axis.
        """
        width, height = normalize_size(width), normalize_size(height)
        self._resample(0, 0, width, height, scale=(width / self.pixel_width, height / self.pixel_height))

    @property
    def resolution_x(self) -> int:
        return self._resolution_x

    @property
    def resolution_y(self) -> int:
        return self._resolution_y

    def set_grid_resolution(self, resolution_x: int, resolution_y: int) -> None:
        self.rebuild_grid_data(max(MIN_RESOLUTION, resolution_x), max(MIN_RESOLUTION, resolution_y))

    def set_grid_resolution_x(self, resolution_x: int) -> None:
        self.set_grid_resolution(resolution_x, self._resolution_y)

    def set_grid_resolution_y(self, resolution_y: int) -> None:
        self.set_grid_resolution(self._resolution_x, resolution_y)

    # ---- lattice ----

    @property
    def num_control_points_x(self) -> int:
        return self._num_control_points_x

    @property
    def num_control_points_y(self) -> int:
        return self._num_control_points_y

    def row_curve(self, row: int) -> Curve:
        return self._row_curves[row]

    def column_curve(self, col: int) -> Curve:
        return self._column_curves[col]

    def create_grid_data(self) -> None:
        """Build a uniformly spaced lattice of linear curves for the current size and resolution."""
        width, height = self.pixel_width, self.pixel_height
        nx = lattice_size(width, self._resolution_x)
        ny = lattice_size(height, self._resolution_y)
        xs = sample_positions(width, self._resolution_x, nx)
        ys = sample_positions(height, self._resolution_y, ny)

        row_curves = []
        for y in ys:
            curve = Curve(linear=True)
            curve.set_points(xs, np.full(nx, y))
            row_curves.append(curve)

        column_curves = []
        for x in xs:
            curve = Curve(linear=True)
            curve.set_points(ys, np.full(ny, x))
            column_curves.append(curve)

        self._install_lattice(nx, ny, row_curves, column_curves)
        logger.debug(f"Created uniform {nx}x{ny} lattice over {width}x{height} px.")

    def rebuild_grid_data(self, resolution_x: int = 0, resolution_y: int = 0, width: int = 0, height: int = 0) -> None:
        """
        Resample the current surface into a lattice for a new resolution and/or size.

        Parameters <= 0 keep their current value. The new control points are
        evaluations of the current (possibly deformed) surface, so edits survive.
        Each new curve keeps the linear/smooth mode of the old curve at the same
        index (or of the last one, when the lattice grows).
        Without a lattice this is a plain ``create_grid_data`` at the new values.

        Raises:
            ValueError: If the deformed surface cannot be resampled into
                strictly increasing curves. The grid is left unchanged.
        """
        self._resample(resolution_x, resolution_y, width, height)

    def _resample(
        self,
        resolution_x: int,
        resolution_y: int,
        width: int,
        height: int,
        scale: tuple[float, float] = (1.0, 1.0),
    ) -> None:
        new_width = normalize_size(width) if width > 0 else self.pixel_width
        new_height = normalize_size(height) if height > 0 else self.pixel_height
        new_res_x = normalize_resolution(resolution_x if resolution_x > 0 else self._resolution_x, new_width)
        new_res_y = normalize_resolution(resolution_y if resolution_y > 0 else self._resolution_y, new_height)

        if not self._row_curves or not self._column_curves:
            self._state.rectangle.resize(new_width, new_height)
            self._resolution_x, self._resolution_y = new_res_x, new_res_y
            self.create_grid_data()
            return

        nx = lattice_size(new_width, new_res_x)
        ny = lattice_size(new_height, new_res_y)
        us = sample_positions(new_width, new_res_x, nx) / new_width
        vs = sample_positions(new_height, new_res_y, ny) / new_height
        uu, vv = np.meshgrid(us, vs)
        points = self.surface_points(uu.ravel(), vv.ravel()).reshape(ny, nx, 2)
        points[..., 0] *= scale[0]
        points[..., 1] *= scale[1]

        row_curves = []
        for j in range(ny):
            curve = Curve(linear=self._row_curves[min(j, len(self._row_curves) - 1)].is_linear())
            curve.set_points(points[j, :, 0], points[j, :, 1])
            row_curves.append(curve)

        column_curves = []
        for i in range(nx):
            curve = Curve(linear=self._column_curves[min(i, len(self._column_curves) - 1)].is_linear())
            curve.set_points(points[:, i, 1], points[:, i, 0])
            column_curves.append(curve)

        self._state.rectangle.resize(new_width, new_height)
        self._resolution_x, self._resolution_y = new_res_x, new_res_y
        self._install_lattice(nx, ny, row_curves, column_curves)
        logger.debug(
            f"Rebuilt lattice as {nx}x{ny} over {new_width}x{new_height} px "
            f"(resolution {new_res_x}x{new_res_y})."
        )

    def reset(self) -> None:
        """Discard all edits and restore the uniform lattice."""
        self.create_grid_data()
        logger.info("Surface grid has been reset.")

    def set_curves_linear(self, linear: bool) -> None:
        """Switch every row and column curve between polyline and cubic spline mode."""
        for curve in self._row_curves + self._column_curves:
            curve.set_linear(linear)

    def _install_lattice(
        self,
        nx: int,
        ny: int,
        row_curves: List[Curve],
        column_curves: List[Curve],
    ) -> None:
        if len(row_curves) != ny or len(column_curves) != nx:
            raise RuntimeError(
                f"Lattice mismatch: {len(row_curves)} row curves for {ny} rows, "
                f"{len(column_curves)} column curves for {nx} columns."
            )
        self._num_control_points_x = nx
        self._num_control_points_y = ny
        self._row_curves = row_curves
        self._column_curves = column_curves

    # ---- control points ----

    def _check_control_point(self, row: int, col: int) -> None:
        if not (0 <= row < self._num_control_points_y and 0 <= col < self._num_control_points_x):
            raise IndexError(
                f"Control point ({row}, {col}) is outside the "
                f"{self._num_control_points_y}x{self._num_control_points_x} lattice."
            )

    def control_point_position(self, row: int, col: int) -> Vec2:
        """Control point in footprint-local pixel coordinates."""
        self._check_control_point(row, col)
        x, y = self._row_curves[row].get_point(col)
        return Vec2(x, y)

    def control_points(self) -> npt.NDArray[np.float64]:
        """Snapshot of the lattice as an array of shape (rows, columns, 2)."""
        return np.stack([np.stack([curve.x, curve.y], axis=-1) for curve in self._row_curves])

    def set_control_point_position(self, row: int, col: int, point: Vec2) -> None:
        """
        Place a control point.

        Raises:
            IndexError: If (row, col) is outside the lattice.
            ValueError: If the point would overtake a neighbour along its row
                (in X) or its column (in Y). Nothing is modified in that case.
        """
        self._check_control_point(row, col)
        row_curve = self._row_curves[row]
        column_curve = self._column_curves[col]

        row_curve.check_point(col, point.x)
        column_curve.check_point(row, point.y)

        row_curve.set_point(col, point.x, point.y)
        column_curve.set_point(row, point.y, point.x)

    def move_control_point(self, row: int, col: int, delta: Vec2) -> None:
        """Displace a control point by ``delta``. Same errors as ``set_control_point_position``."""
        self._check_control_point(row, col)
        row_curve = self._row_curves[row]
        column_curve = self._column_curves[col]

        x, y = row_curve.get_point(col)
        row_curve.check_point(col, x + delta.x)
        column_curve.check_point(row, y + delta.y)

        row_curve.move_point(col, delta.x, delta.y)
        column_curve.move_point(row, delta.y, delta.x)

    # ---- evaluation ----

    @staticmethod
    def _locate(coord: float, size: int, resolution: int, last_index: int) -> tuple[int, int, float]:
        """Cell indices and local parameter for a continuous lattice coordinate."""
        lower = math.floor(coord)
        upper = math.ceil(coord)
        t = coord - lower
        if upper == last_index:
            # The last cell is shorter when resolution does not divide size
            s = edge_remainder(size, resolution)
            if s > 0:
                t /= s
        return lower, upper, t

    @staticmethod
    def _locate_many(
        coords: npt.NDArray[np.float64],
        size: int,
        resolution: int,
        last_index: int,
    ) -> tuple[npt.NDArray[np.int_], npt.NDArray[np.int_], npt.NDArray[np.float64]]:
        lower = np.floor(coords).astype(np.int_)
        upper = np.ceil(coords).astype(np.int_)
        t = coords - lower
        s = edge_remainder(size, resolution)
        if s > 0:
            t = np.where(upper == last_index, t / s, t)
        return lower, upper, t

    @staticmethod
    def _check_parameters(
        u: Union[float, npt.NDArray[np.float64]],
        v: Union[float, npt.NDArray[np.float64]],
    ) -> None:
        for values in (np.asarray(u), np.asarray(v)):
            if np.any((values < 0.0) | (values > 1.0)):
                raise ValueError("Surface parameters (u, v) must lie in [0, 1].")

    def surface_point(self, u: float, v: float) -> Vec2:
        """
        Footprint-local position of the surface at the normalized parameters (u, v).

        Raises:
            ValueError: If u or v is outside [0, 1].
        """
        self._check_parameters(u, v)
        width, height = self.pixel_width, self.pixel_height

        col, col1, nu = self._locate(
            u * width / self._resolution_x, width, self._resolution_x, len(self._column_curves) - 1
        )
        row, row1, nv = self._locate(
            v * height / self._resolution_y, height, self._resolution_y, len(self._row_curves) - 1
        )

        return coons_patch(
            nu, nv,
            self._column_curves[col], self._column_curves[col1],
            self._row_curves[row], self._row_curves[row1],
            self.control_point_position(row, col),
            self.control_point_position(row1, col),
            self.control_point_position(row, col1),
            self.control_point_position(row1, col1),
        )

    def surface_points(self, u: Sequence[float], v: Sequence[float]) -> npt.NDArray[np.float64]:
        """
        Vectorized ``surface_point``.

        Args:
            u: Horizontal parameters, shape (N,).
            v: Vertical parameters, shape (N,).

        Returns:
            (N, 2) array of footprint-local positions.
        """
        us = np.asarray(u, dtype=np.float64).reshape(-1)
        vs = np.asarray(v, dtype=np.float64).reshape(-1)
        if us.shape != vs.shape:
            raise ValueError(f"Expected matching parameter counts, got {us.size} and {vs.size}.")
        self._check_parameters(us, vs)
        width, height = self.pixel_width, self.pixel_height

        col, col1, nu = self._locate_many(
            us * width / self._resolution_x, width, self._resolution_x, len(self._column_curves) - 1
        )
        row, row1, nv = self._locate_many(
            vs * height / self._resolution_y, height, self._resolution_y, len(self._row_curves) - 1
        )

        lattice = self.control_points()
        p00 = lattice[row, col]
        p01 = lattice[row1, col]
        p10 = lattice[row, col1]
        p11 = lattice[row1, col1]

        nu_ = nu[:, np.newaxis]
        nv_ = nv[:, np.newaxis]
        bilinear = (p00 * ((1 - nv_) * (1 - nu_)) + p01 * (nv_ * (1 - nu_))
                    + p10 * ((1 - nv_) * nu_) + p11 * (nv_ * nu_))

        # Column curves give X for a height blended from the cell corners
        y0 = p00[:, 1] * (1 - nv) + nv * p01[:, 1]
        y1 = p10[:, 1] * (1 - nv) + nv * p11[:, 1]
        x_on_col0 = _evaluate_grouped(self._column_curves, col, y0)
        x_on_col1 = _evaluate_grouped(self._column_curves, col1, y1)
        along_columns = (np.column_stack([x_on_col0, y0]) * (1 - nu_)
                         + np.column_stack([x_on_col1, y1]) * nu_)

        # Row curves give Y for an abscissa blended from the cell corners
        x0 = p00[:, 0] * (1 - nu) + nu * p10[:, 0]
        x1 = p01[:, 0] * (1 - nu) + nu * p11[:, 0]
        y_on_row0 = _evaluate_grouped(self._row_curves, row, x0)
        y_on_row1 = _evaluate_grouped(self._row_curves, row1, x1)
        along_rows = (np.column_stack([x0, y_on_row0]) * (1 - nv_)
                      + np.column_stack([x1, y_on_row1]) * nv_)

        return along_columns + along_rows - bilinear

    def generate_surface_points(self) -> npt.NDArray[np.float64]:
        """
        Sample map between the pixel footprint and the surface.

        Returns:
            Flat array of length ``2 * pixel_width * pixel_height`` holding the
            (x, y) surface position of every pixel, rows first, offset by the
            pixel origin. The array is also kept in ``state.surface_points``.
        """
        width, height = self.pixel_width, self.pixel_height
        uu, vv = np.meshgrid(np.arange(width) / width, np.arange(height) / height)
        points = self.surface_points(uu.ravel(), vv.ravel())
        points += self.pixel_origin.to_array()

        self._state.surface_points = points.reshape(-1)
        return self._state.surface_points
