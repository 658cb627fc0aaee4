"""
Shared settings for topography rendering.

All visual parameters live here so the renderer has one fixed look
that can still be overridden in tests.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

# Samples per axis of the interpolation grid
DEFAULT_GRID_SIZE = 1000

# Interpolated region (xmin, xmax, ymin, ymax)
DEFAULT_REGION: Tuple[float, float, float, float] = (-1.0, 1.0, -1.0, 1.0)

DEFAULT_OUTPUT_PATH = "figure.png"


@dataclass
class TopoPlotSettings:
    """Configuration for a topography plot."""
    output_path: str = DEFAULT_OUTPUT_PATH
    figure_size_px: Tuple[int, int] = (1300, 1200)
    dpi: int = 100

    # Interpolation
    region: Tuple[float, float, float, float] = DEFAULT_REGION
    head_radius: float = 1.0       # Samples beyond this are masked
    n_extra_points: int = 8        # Synthetic boundary points
    extra_radius: float = 1.2      # Circle the boundary points sit on
    k_nearest: int = 4             # Electrodes averaged per boundary point

    # Field
    colormap: str = "viridis"
    contour_levels: int = 10

    # Electrodes
    marker_size: float = 6.0       # Points
    marker_edge_width: float = 2.0
    label_fontsize: float = 10.0

    # Head outline, nose and ears
    line_width: float = 4.0
    line_color: str = "black"
    nose_angle: float = 10.0       # Degrees either side of the vertex
    nose_tip: float = 0.85
    ear_focus: float = 0.75
    ear_width: float = 0.09
    ear_height: float = 0.18
    ear_points: int = 100

    # Colorbar
    colorbar_width: int = 20       # Pixels
    colorbar_ticks: Optional[Sequence[float]] = None

    @property
    def figsize(self) -> Tuple[float, float]:
        """Figure size in inches for matplotlib."""
        width, height = self.figure_size_px
        return width / self.dpi, height / self.dpi
