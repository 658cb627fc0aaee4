"""
Scalp Field Interpolation.

Turns scattered electrode values into a regular grid covering the head:
synthetic boundary points are added outside the scalp so the field stays
bounded near the edge, the points are interpolated onto the grid and
everything outside the head circle is masked.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np
from scipy.interpolate import CloughTocher2DInterpolator, RBFInterpolator, griddata

from ..core.config import DEFAULT_REGION

logger = logging.getLogger(__name__)


@dataclass
class InterpolatedField:
    """Scalar field sampled on a regular grid."""
    x: np.ndarray          # (nx,) grid coordinates
    y: np.ndarray          # (ny,) grid coordinates
    grid_x: np.ndarray     # (ny, nx) meshgrid
    grid_y: np.ndarray     # (ny, nx) meshgrid
    z: np.ndarray          # (ny, nx) values, NaN where masked

    @property
    def shape(self) -> Tuple[int, int]:
        return self.z.shape


def append_nearest_values(
    xs: Sequence[float],
    ys: Sequence[float],
    values: Sequence[float],
    n: int = 8,
    radius: float = 1.2,
    k: int = 4,
) -> np.ndarray:
    """
    Append boundary points on a circle outside the electrodes.

    Each of the ``n`` points sits at angle ``2*pi*i/n`` (i = 1..n) on a
    circle of ``radius`` and takes the mean value of its ``k`` nearest
    electrodes. Ties in distance keep the input order.

    See: https://www.mathworks.com/matlabcentral/fileexchange/72729-topographic-eeg-meg-plot

    Args:
        xs: Electrode x positions.
        ys: Electrode y positions.
        values: Electrode values.
        n: Number of boundary points.
        radius: Radius of the boundary circle.
        k: Number of nearest electrodes averaged per boundary point.

    Returns:
        Array of shape (len(xs) + n, 3) with (x, y, value) rows,
        original electrodes first.
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    values = np.asarray(values, dtype=float)

    if not (len(xs) == len(ys) == len(values)):
        raise ValueError(
            f"xs ({len(xs)}), ys ({len(ys)}) and values ({len(values)}) "
            f"must have the same length"
        )
    if len(xs) == 0:
        raise ValueError("At least one electrode is required")
    if n < 1 or k < 1:
        raise ValueError(f"n and k must be positive, got n={n}, k={k}")
    if radius <= 0:
        raise ValueError(f"radius must be positive, got {radius}")

    angles = 2 * np.pi * np.arange(1, n + 1) / n
    extra_x = radius * np.cos(angles)
    extra_y = radius * np.sin(angles)

    n_nearest = min(k, len(values))
    extra_values = np.empty(n)
    for i in range(n):
        distances = np.hypot(extra_x[i] - xs, extra_y[i] - ys)
        nearest = np.argsort(distances, kind="stable")[:n_nearest]
        extra_values[i] = values[nearest].mean()

    original = np.column_stack([xs, ys, values])
    extra = np.column_stack([extra_x, extra_y, extra_values])
    return np.vstack([original, extra])


def make_grid(
    grid_size: int,
    region: Tuple[float, float, float, float] = DEFAULT_REGION,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Create a regular grid with ``grid_size`` samples per axis.

    Returns:
        Tuple of (x, y, grid_x, grid_y).
    """
    if grid_size < 2:
        raise ValueError(f"grid_size must be at least 2, got {grid_size}")
    xmin, xmax, ymin, ymax = region
    x = np.linspace(xmin, xmax, grid_size)
    y = np.linspace(ymin, ymax, grid_size)
    grid_x, grid_y = np.meshgrid(x, y)
    return x, y, grid_x, grid_y


def mask_outside_head(
    grid_x: np.ndarray,
    grid_y: np.ndarray,
    z: np.ndarray,
    radius: float = 1.0,
) -> np.ndarray:
    """Return a copy of ``z`` with samples outside the head circle set to NaN."""
    masked = np.array(z, dtype=float, copy=True)
    masked[np.hypot(grid_x, grid_y) > radius] = np.nan
    return masked


class FieldInterpolator(ABC):
    """Scattered-data interpolation onto a grid."""

    name = ""

    @abstractmethod
    def __call__(
        self,
        points: np.ndarray,
        values: np.ndarray,
        grid_x: np.ndarray,
        grid_y: np.ndarray,
    ) -> np.ndarray:
        """
        Interpolate ``values`` at ``points`` (N, 2) onto the grid.

        Returns:
            Array shaped like ``grid_x``; NaN where the method has no support.
        """


class LinearInterpolator(FieldInterpolator):
    """Linear interpolation on a Delaunay triangulation."""

    name = "linear"

    def __call__(self, points, values, grid_x, grid_y):
        return griddata(points, values, (grid_x, grid_y), method="linear", fill_value=np.nan)


class CubicInterpolator(FieldInterpolator):
    """Piecewise cubic (Clough-Tocher) interpolation on a triangulation."""

    name = "cubic"

    def __call__(self, points, values, grid_x, grid_y):
        interp = CloughTocher2DInterpolator(points, values, fill_value=np.nan)
        return interp(grid_x, grid_y)


class RadialBasisInterpolator(FieldInterpolator):
    """Thin plate spline radial basis function interpolation."""

    name = "rbf"

    def __init__(self, kernel: str = "thin_plate_spline"):
        self.kernel = kernel

    def __call__(self, points, values, grid_x, grid_y):
        interp = RBFInterpolator(points, values, kernel=self.kernel)
        grid_points = np.column_stack([grid_x.ravel(), grid_y.ravel()])
        return interp(grid_points).reshape(grid_x.shape)


INTERPOLATORS = {
    LinearInterpolator.name: LinearInterpolator,
    CubicInterpolator.name: CubicInterpolator,
    RadialBasisInterpolator.name: RadialBasisInterpolator,
}


def get_interpolator(method: str = "linear") -> FieldInterpolator:
    """Create an interpolator by name ('linear', 'cubic' or 'rbf')."""
    try:
        return INTERPOLATORS[method]()
    except KeyError:
        raise ValueError(
            f"Unknown interpolation method: {method!r}, "
            f"expected one of {sorted(INTERPOLATORS)}"
        ) from None


def interpolate_field(
    points: np.ndarray,
    grid_size: int,
    region: Tuple[float, float, float, float] = DEFAULT_REGION,
    interpolator: Optional[FieldInterpolator] = None,
    head_radius: float = 1.0,
) -> InterpolatedField:
    """
    Interpolate (x, y, value) rows onto a grid and mask outside the head.

    Args:
        points: Array of shape (N, 3), e.g. from :func:`append_nearest_values`.
        grid_size: Samples per axis.
        region: (xmin, xmax, ymin, ymax) of the grid.
        interpolator: Interpolation method. Linear if None.
        head_radius: Samples farther than this from the origin are masked.

    Returns:
        InterpolatedField covering ``region``.
    """
    points = np.asarray(points, dtype=float)
    interpolator = interpolator or LinearInterpolator()

    x, y, grid_x, grid_y = make_grid(grid_size, region)
    logger.debug(
        f"Interpolating {len(points)} points onto {grid_size}x{grid_size} grid "
        f"({interpolator.name or type(interpolator).__name__})"
    )
    z = interpolator(points[:, :2], points[:, 2], grid_x, grid_y)
    z = mask_outside_head(grid_x, grid_y, z, radius=head_radius)

    return InterpolatedField(x=x, y=y, grid_x=grid_x, grid_y=grid_y, z=z)
