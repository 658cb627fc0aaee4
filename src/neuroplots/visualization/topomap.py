"""
Brain Topographic Map (Topomap) Visualization.

Creates 2D scalp topography plots from a handful of named electrodes:
positions come from the standard 10-05 table, the values are
interpolated over the scalp and drawn as a filled contour map with the
electrodes, head outline, nose and ears on top.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend, figures are only saved
from matplotlib.figure import Figure
from matplotlib.patches import Circle
from mpl_toolkits.axes_grid1 import make_axes_locatable

from ..core.config import DEFAULT_GRID_SIZE, TopoPlotSettings
from ..core.electrodes import resolve_positions
from ..core.exceptions import ChannelLengthMismatchError, TopographyError
from .head import ear_points, nose_points
from .interpolation import (
    FieldInterpolator,
    InterpolatedField,
    LinearInterpolator,
    append_nearest_values,
    interpolate_field,
)

logger = logging.getLogger(__name__)


@dataclass
class Topography:
    """Everything needed to draw one topography."""
    channels: List[str]
    values: np.ndarray        # (N,)
    positions: np.ndarray     # (N, 2)
    points: np.ndarray        # (N + n_extra, 3) incl. boundary points
    field: InterpolatedField
    head_radius: float        # Radius of the drawn head outline


class TopoMap:
    """
    Renders topographic maps of electrode values.

    Every visual parameter comes from :class:`TopoPlotSettings`; the
    interpolation method can be swapped for any :class:`FieldInterpolator`.
    """

    def __init__(
        self,
        settings: Optional[TopoPlotSettings] = None,
        interpolator: Optional[FieldInterpolator] = None,
    ):
        """
        Initialize the topomap.

        Args:
            settings: Plot configuration. Uses defaults if None.
            interpolator: Scattered-data interpolation. Linear if None.
        """
        self.settings = settings or TopoPlotSettings()
        self.interpolator = interpolator or LinearInterpolator()

    def compute(
        self,
        channels: Sequence[str],
        values: Sequence[float],
        grid_size: int = DEFAULT_GRID_SIZE,
    ) -> Topography:
        """
        Validate the input and interpolate the scalp field.

        Raises:
            ChannelLengthMismatchError: If channels and values differ in length.
            TopographyError: If no channels are given or a value is not finite.
            UnknownElectrodeError: If a channel is not a standard electrode.
        """
        if len(channels) != len(values):
            raise ChannelLengthMismatchError(len(channels), len(values))
        if len(channels) == 0:
            raise TopographyError("At least one channel is required")

        channels = list(channels)
        positions = resolve_positions(channels)
        values = np.asarray(values, dtype=float)

        not_finite = np.flatnonzero(~np.isfinite(values))
        if not_finite.size:
            i = not_finite[0]
            raise TopographyError(f"Value of channel {channels[i]!r} is not finite: {values[i]}")

        # One-sided montages have a negative max x; the outline uses its extent
        max_x = float(np.abs(positions[:, 0]).max())
        max_y = float(np.abs(positions[:, 1]).max())
        logger.debug(f"Electrode extent: max |x|={max_x:.4f}, max |y|={max_y:.4f}")

        s = self.settings
        points = append_nearest_values(
            positions[:, 0], positions[:, 1], values,
            n=s.n_extra_points, radius=s.extra_radius, k=s.k_nearest,
        )
        field = interpolate_field(
            points, grid_size,
            region=s.region,
            interpolator=self.interpolator,
            head_radius=s.head_radius,
        )

        return Topography(
            channels=channels,
            values=values,
            positions=positions,
            points=points,
            field=field,
            head_radius=max_x,
        )

    def create_figure(self, topo: Topography) -> Figure:
        """
        Draw a computed topography.

        Args:
            topo: Result of :meth:`compute`.

        Returns:
            Matplotlib Figure object.
        """
        s = self.settings
        # Not registered with pyplot, so nothing has to be closed
        fig = Figure(figsize=s.figsize, dpi=s.dpi)
        ax = fig.add_subplot(111)
        ax.set_aspect('equal')
        ax.axis('off')

        xmin, xmax, ymin, ymax = s.region
        pad = 0.05 * max(xmax - xmin, ymax - ymin)
        ax.set_xlim(xmin - pad, xmax + pad)
        ax.set_ylim(ymin - pad, ymax + pad)

        # Interpolated field
        contour = ax.contourf(
            topo.field.grid_x, topo.field.grid_y, topo.field.z,
            levels=self._levels(topo.values),
            cmap=s.colormap,
            extend='both',
        )

        # Electrodes
        ax.scatter(
            topo.positions[:, 0],
            topo.positions[:, 1],
            s=s.marker_size ** 2,
            c=s.line_color,
            edgecolors=s.line_color,
            linewidths=s.marker_edge_width,
            zorder=5,
        )
        for name, (x, y) in zip(topo.channels, topo.positions):
            ax.text(x, y, name, fontsize=s.label_fontsize, ha='left', va='bottom', zorder=6)

        self._draw_head(ax, topo.head_radius)

        # Colorbar with a fixed pixel width
        divider = make_axes_locatable(ax)
        cax = divider.append_axes("right", size=s.colorbar_width / s.dpi, pad=0.3)
        cbar = fig.colorbar(contour, cax=cax)
        if s.colorbar_ticks is not None:
            cbar.set_ticks(list(s.colorbar_ticks))

        return fig

    def _levels(self, values: np.ndarray) -> np.ndarray:
        """Contour levels spanning the electrode values."""
        vmin, vmax = float(np.min(values)), float(np.max(values))
        if np.isclose(vmin, vmax):
            vmin, vmax = vmin - 0.5, vmax + 0.5
        return np.linspace(vmin, vmax, self.settings.contour_levels + 1)

    def _draw_head(self, ax, radius: float):
        """Draw the head outline, nose, and ears."""
        s = self.settings
        line_kwargs = dict(color=s.line_color, linewidth=s.line_width, zorder=4)

        head = Circle(
            (0, 0),
            radius,
            fill=False,
            edgecolor=s.line_color,
            linewidth=s.line_width,
            zorder=4,
        )
        ax.add_patch(head)

        for angle in (-s.nose_angle, s.nose_angle):
            nose = nose_points(angle, radius, tip=s.nose_tip)
            ax.plot(nose[:, 0], nose[:, 1], **line_kwargs)

        for focus in (-s.ear_focus, s.ear_focus):
            ear = ear_points(
                focus, radius,
                n_points=s.ear_points, width=s.ear_width, height=s.ear_height,
            )
            ax.plot(ear[:, 0], ear[:, 1], **line_kwargs)

    def save(self, fig: Figure, output_path: Optional[Union[str, Path]] = None) -> Path:
        """Save a figure at the configured pixel size."""
        path = Path(output_path or self.settings.output_path)
        fig.savefig(path, dpi=self.settings.dpi)
        logger.info(f"Saved topography to {path}")
        return path

    def plot(
        self,
        channels: Sequence[str],
        values: Sequence[float],
        grid_size: int = DEFAULT_GRID_SIZE,
        output_path: Optional[Union[str, Path]] = None,
    ) -> Figure:
        """Compute, draw and save a topography; returns the figure."""
        logger.info(
            f"Rendering topography: {len(channels)} channels, "
            f"{grid_size}x{grid_size} grid"
        )
        topo = self.compute(channels, values, grid_size)
        fig = self.create_figure(topo)
        self.save(fig, output_path)
        return fig

    def to_image_bytes(
        self,
        channels: Sequence[str],
        values: Sequence[float],
        grid_size: int = DEFAULT_GRID_SIZE,
        format: str = 'png',
    ) -> bytes:
        """
        Render a topography to image bytes without touching the filesystem.

        Args:
            channels: Electrode labels.
            values: One value per electrode.
            grid_size: Samples per axis.
            format: Image format ('png', 'jpg', 'svg').

        Returns:
            Image as bytes.
        """
        fig = self.create_figure(self.compute(channels, values, grid_size))

        buf = BytesIO()
        fig.savefig(buf, format=format, dpi=self.settings.dpi)

        return buf.getvalue()


def plot_topography(
    channels: Sequence[str],
    values: Sequence[float],
    grid_size: int = DEFAULT_GRID_SIZE,
    settings: Optional[TopoPlotSettings] = None,
    interpolator: Optional[FieldInterpolator] = None,
    output_path: Optional[Union[str, Path]] = None,
) -> Figure:
    """
    Plot a topographical map of the head for the given electrodes.

    The figure is written to ``output_path`` (``figure.png`` in the
    current directory by default) and returned.

    Args:
        channels: Standard electrode labels, e.g. ["Fpz", "Fp1", "Fp2"].
        values: One value per electrode.
        grid_size: Interpolation samples per axis.
        settings: Plot configuration. Uses defaults if None.
        interpolator: Scattered-data interpolation. Linear if None.
        output_path: Where to save the image. Uses ``settings.output_path`` if None.

    Returns:
        Matplotlib Figure object.

    Example:
        >>> from neuroplots import EXAMPLE_CHANNELS, plot_topography
        >>> fig = plot_topography(EXAMPLE_CHANNELS, np.random.rand(len(EXAMPLE_CHANNELS)))
    """
    topomap = TopoMap(settings=settings, interpolator=interpolator)
    return topomap.plot(channels, values, grid_size=grid_size, output_path=output_path)
