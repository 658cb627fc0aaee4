"""Errors raised for invalid topography requests."""


class TopographyError(ValueError):
    """Base class for invalid topography input."""


class ChannelLengthMismatchError(TopographyError):
    """Channel labels and values differ in length."""

    def __init__(self, n_channels: int, n_values: int):
        self.n_channels = n_channels
        self.n_values = n_values
        super().__init__(
            f"The lengths of channels ({n_channels}) and values ({n_values}) "
            f"should be the same"
        )


class UnknownElectrodeError(TopographyError):
    """Electrode label not found in the standard position table."""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown electrode label: {label!r}")
