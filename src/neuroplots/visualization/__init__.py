"""Visualization modules for scalp topographies."""

from .head import ear_points, nose_points
from .interpolation import (
    CubicInterpolator, FieldInterpolator, InterpolatedField,
    LinearInterpolator, RadialBasisInterpolator,
    append_nearest_values, get_interpolator, interpolate_field,
    make_grid, mask_outside_head,
)

# Lazy imports to avoid loading matplotlib when not needed
def __getattr__(name):
    if name in ("TopoMap", "Topography", "plot_topography"):
        from .topomap import TopoMap, Topography, plot_topography
        return locals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "ear_points", "nose_points",
    "CubicInterpolator", "FieldInterpolator", "InterpolatedField",
    "LinearInterpolator", "RadialBasisInterpolator",
    "append_nearest_values", "get_interpolator", "interpolate_field",
    "make_grid", "mask_outside_head",
    "TopoMap", "Topography", "plot_topography",
]
