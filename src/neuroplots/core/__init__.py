"""Core modules for electrode positions, settings and errors."""

from .config import DEFAULT_GRID_SIZE, DEFAULT_OUTPUT_PATH, TopoPlotSettings
from .electrodes import (
    EXAMPLE_CHANNELS, STANDARD_1005_2D,
    STANDARD_ELECTRODES, Electrode, ElectrodeMap,
    get_position, resolve_positions,
)
from .exceptions import (
    ChannelLengthMismatchError, TopographyError, UnknownElectrodeError,
)
from .logging_utils import setup_logging

__all__ = [
    "DEFAULT_GRID_SIZE", "DEFAULT_OUTPUT_PATH", "TopoPlotSettings",
    "EXAMPLE_CHANNELS", "STANDARD_1005_2D",
    "STANDARD_ELECTRODES", "Electrode", "ElectrodeMap",
    "get_position", "resolve_positions",
    "ChannelLengthMismatchError", "TopographyError", "UnknownElectrodeError",
    "setup_logging",
]
