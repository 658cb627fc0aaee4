"""
NeuroPlots - Scalp topography plots for EEG.

Draws a 2D topographic map of the head from values at named
electrodes of the 10-05 system.
"""

__version__ = "0.1.0"

from .core import (
    EXAMPLE_CHANNELS,
    ChannelLengthMismatchError,
    TopographyError,
    TopoPlotSettings,
    UnknownElectrodeError,
)


def __getattr__(name):
    if name in ("TopoMap", "plot_topography"):
        from .visualization.topomap import TopoMap, plot_topography
        return locals()[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "EXAMPLE_CHANNELS",
    "ChannelLengthMismatchError", "TopographyError", "UnknownElectrodeError",
    "TopoPlotSettings",
    "TopoMap", "plot_topography",
]
