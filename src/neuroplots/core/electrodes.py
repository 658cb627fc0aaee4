"""
EEG Electrode Positions - 10-05 International System.

Maps standard electrode labels to their 2D scalp projection and
resolves requested channel lists into plotting coordinates.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .exceptions import UnknownElectrodeError


@dataclass(frozen=True)
class Electrode:
    """Represents a single EEG electrode."""
    name: str                    # Standard name (e.g., "Fp1", "C3")
    x: float                     # 2D projected position, left ear at x=-1
    y: float                     # 2D projected position, nose at y=1


# Standard 10-05 electrode positions, 2D projection of the Nz-T10-Iz-T9
# reference sphere (standard_1005_2D.tsv from the eeg_positions project).
# The head is viewed from above, nose pointing up; Nz/Iz/T9/T10 lie on
# the unit circle.
_STANDARD_1005_2D = {
    "AF1": (-0.1025, 0.5139), "AF10": (0.5878, 0.809), "AF10h": (0.5021, 0.691),
    "AF1h": (-0.0512, 0.5105), "AF2": (0.1025, 0.5139), "AF2h": (0.0512, 0.5105),
    "AF3": (-0.2067, 0.5274), "AF3h": (-0.1543, 0.5194), "AF4": (0.2067, 0.5274),
    "AF4h": (0.1543, 0.5194), "AF5": (-0.3143, 0.5513), "AF5h": (-0.26, 0.5379),
    "AF6": (0.3143, 0.5513), "AF6h": (0.26, 0.5379), "AF7": (-0.427, 0.5879),
    "AF7h": (-0.3699, 0.5678), "AF8": (0.427, 0.5879), "AF8h": (0.3699, 0.5678),
    "AF9": (-0.5878, 0.809), "AF9h": (-0.5021, 0.691), "AFF1": (-0.1207, 0.4195),
    "AFF10": (0.7071, 0.7071), "AFF10h": (0.6039, 0.6039), "AFF1h": (-0.0602, 0.4155),
    "AFF2": (0.1207, 0.4195), "AFF2h": (0.0602, 0.4155), "AFF3": (-0.2444, 0.4361),
    "AFF3h": (-0.182, 0.4263), "AFF4": (0.2444, 0.4361), "AFF4h": (0.182, 0.4263),
    "AFF5": (-0.3743, 0.4661), "AFF5h": (-0.3084, 0.4493), "AFF6": (0.3743, 0.4661),
    "AFF6h": (0.3084, 0.4493), "AFF7": (-0.5138, 0.5138), "AFF7h": (-0.4426, 0.4874),
    "AFF8": (0.5138, 0.5138), "AFF8h": (0.4426, 0.4874), "AFF9": (-0.7071, 0.7071),
    "AFF9h": (-0.6039, 0.6039), "AFFz": (0.0, 0.4142), "AFp1": (-0.0803, 0.6148),
    "AFp10": (0.454, 0.891), "AFp10h": (0.3878, 0.761), "AFp1h": (-0.0401, 0.6133),
    "AFp2": (0.0803, 0.6148), "AFp2h": (0.0401, 0.6133), "AFp3": (-0.1615, 0.621),
    "AFp3h": (-0.1207, 0.6174), "AFp4": (0.1615, 0.621), "AFp4h": (0.1207, 0.6174),
    "AFp5": (-0.2443, 0.6317), "AFp5h": (-0.2027, 0.6258), "AFp6": (0.2443, 0.6317),
    "AFp6h": (0.2027, 0.6258), "AFp7": (-0.3299, 0.6474), "AFp7h": (-0.2867, 0.6388),
    "AFp8": (0.3299, 0.6474), "AFp8h": (0.2867, 0.6388), "AFp9": (-0.454, 0.891),
    "AFp9h": (-0.3878, 0.761), "AFpz": (0.0, 0.6128), "AFz": (0.0, 0.5095),
    "C1": (-0.1584, 0.0), "C1h": (-0.0787, 0.0), "C2": (0.1584, 0.0),
    "C2h": (0.0787, 0.0), "C3": (-0.3249, 0.0), "C3h": (-0.2401, 0.0),
    "C4": (0.3249, 0.0), "C4h": (0.2401, 0.0), "C5": (-0.5095, 0.0),
    "C5h": (-0.4142, 0.0), "C6": (0.5095, 0.0), "C6h": (0.4142, 0.0),
    "CCP1": (-0.157, -0.0804), "CCP1h": (-0.078, -0.0791), "CCP2": (0.157, -0.0804),
    "CCP2h": (0.078, -0.0791), "CCP3": (-0.3219, -0.0857), "CCP3h": (-0.2379, -0.0825),
    "CCP4": (0.3219, -0.0857), "CCP4h": (0.2379, -0.0825), "CCP5": (-0.5042, -0.096),
    "CCP5h": (-0.4102, -0.0901), "CCP6": (0.5042, -0.096), "CCP6h": (0.4102, -0.0901),
    "CCPz": (0.0, -0.0787), "CP1": (-0.1527, -0.1616), "CP1h": (-0.0759, -0.1591),
    "CP2": (0.1527, -0.1616), "CP2h": (0.0759, -0.1591), "CP3": (-0.3126, -0.1718),
    "CP3h": (-0.2313, -0.1657), "CP4": (0.3126, -0.1718), "CP4h": (0.2313, -0.1657),
    "CP5": (-0.4881, -0.1912), "CP5h": (-0.3978, -0.1802), "CP6": (0.4881, -0.1912),
    "CP6h": (0.3978, -0.1802), "CPP1": (-0.1455, -0.2445), "CPP1h": (-0.0724, -0.2412),
    "CPP2": (0.1455, -0.2445), "CPP2h": (0.0724, -0.2412), "CPP3": (-0.2969, -0.2587),
    "CPP3h": (-0.22, -0.2503), "CPP4": (0.2969, -0.2587), "CPP4h": (0.22, -0.2503),
    "CPP5": (-0.4612, -0.2852), "CPP5h": (-0.377, -0.2702), "CPP6": (0.4612, -0.2852),
    "CPP6h": (0.377, -0.2702), "CPPz": (0.0, -0.2401), "CPz": (0.0, -0.1584),
    "Cz": (0.0, 0.0), "F1": (-0.1349, 0.3302), "F10": (0.809, 0.5878),
    "F10h": (0.691, 0.5021), "F1h": (-0.0672, 0.3262), "F2": (0.1349, 0.3302),
    "F2h": (0.0672, 0.3262), "F3": (-0.2744, 0.3467), "F3h": (-0.2038, 0.3369),
    "F4": (0.2744, 0.3467), "F4h": (0.2038, 0.3369), "F5": (-0.4234, 0.3771),
    "F5h": (-0.3474, 0.3599), "F6": (0.4234, 0.3771), "F6h": (0.3474, 0.3599),
    "F7": (-0.5879, 0.427), "F7h": (-0.5032, 0.3992), "F8": (0.5879, 0.427),
    "F8h": (0.5032, 0.3992), "F9": (-0.809, 0.5878), "F9h": (-0.691, 0.5021),
    "FC1": (-0.1527, 0.1616), "FC1h": (-0.0759, 0.1591), "FC2": (0.1527, 0.1616),
    "FC2h": (0.0759, 0.1591), "FC3": (-0.3126, 0.1718), "FC3h": (-0.2313, 0.1657),
    "FC4": (0.3126, 0.1718), "FC4h": (0.2313, 0.1657), "FC5": (-0.4881, 0.1912),
    "FC5h": (-0.3978, 0.1802), "FC6": (0.4881, 0.1912), "FC6h": (0.3978, 0.1802),
    "FCC1": (-0.157, 0.0804), "FCC1h": (-0.078, 0.0791), "FCC2": (0.157, 0.0804),
    "FCC2h": (0.078, 0.0791), "FCC3": (-0.3219, 0.0857), "FCC3h": (-0.2379, 0.0825),
    "FCC4": (0.3219, 0.0857), "FCC4h": (0.2379, 0.0825), "FCC5": (-0.5042, 0.096),
    "FCC5h": (-0.4102, 0.0901), "FCC6": (0.5042, 0.096), "FCC6h": (0.4102, 0.0901),
    "FCCz": (0.0, 0.0787), "FCz": (0.0, 0.1584), "FFC1": (-0.1455, 0.2445),
    "FFC1h": (-0.0724, 0.2412), "FFC2": (0.1455, 0.2445), "FFC2h": (0.0724, 0.2412),
    "FFC3": (-0.2969, 0.2587), "FFC3h": (-0.22, 0.2503), "FFC4": (0.2969, 0.2587),
    "FFC4h": (0.22, 0.2503), "FFC5": (-0.4612, 0.2852), "FFC5h": (-0.377, 0.2702),
    "FFC6": (0.4612, 0.2852), "FFC6h": (0.377, 0.2702), "FFCz": (0.0, 0.2401),
    "FFT10": (0.891, 0.454), "FFT10h": (0.761, 0.3878), "FFT7": (-0.6474, 0.3299),
    "FFT7h": (-0.5509, 0.3048), "FFT8": (0.6474, 0.3299), "FFT8h": (0.5509, 0.3048),
    "FFT9": (-0.891, 0.454), "FFT9h": (-0.761, 0.3878), "FT10": (0.9511, 0.309),
    "FT10h": (0.8123, 0.2639), "FT7": (-0.691, 0.2245), "FT7h": (-0.5852, 0.2057),
    "FT8": (0.691, 0.2245), "FT8h": (0.5852, 0.2057), "FT9": (-0.9511, 0.309),
    "FT9h": (-0.8123, 0.2639), "FTT10": (0.9877, 0.1564), "FTT10h": (0.8436, 0.1336),
    "FTT7": (-0.7176, 0.1137), "FTT7h": (-0.6059, 0.1036), "FTT8": (0.7176, 0.1137),
    "FTT8h": (0.6059, 0.1036), "FTT9": (-0.9877, 0.1564), "FTT9h": (-0.8436, 0.1336),
    "Fp1": (-0.2245, 0.691), "Fp1h": (-0.1137, 0.7176), "Fp2": (0.2245, 0.691),
    "Fp2h": (0.1137, 0.7176), "Fpz": (0.0, 0.7266), "Fz": (0.0, 0.3249),
    "I1": (-0.309, -0.9511), "I1h": (-0.1564, -0.9877), "I2": (0.309, -0.9511),
    "I2h": (0.1564, -0.9877), "Iz": (0.0, -1.0), "LPA": (-1.0, 0.0),
    "N1": (-0.309, 0.9511), "N1h": (-0.1564, 0.9877), "N2": (0.309, 0.9511),
    "N2h": (0.1564, 0.9877), "NAS": (0.0, 1.0), "NFp1": (-0.2639, 0.8123),
    "NFp1h": (-0.1336, 0.8436), "NFp2": (0.2639, 0.8123), "NFp2h": (0.1336, 0.8436),
    "NFpz": (0.0, 0.8541), "Nz": (0.0, 1.0), "O1": (-0.2245, -0.691),
    "O1h": (-0.1137, -0.7176), "O2": (0.2245, -0.691), "O2h": (0.1137, -0.7176),
    "OI1": (-0.2639, -0.8123), "OI1h": (-0.1336, -0.8436), "OI2": (0.2639, -0.8123),
    "OI2h": (0.1336, -0.8436), "OIz": (0.0, -0.8541), "Oz": (0.0, -0.7266),
    "P1": (-0.1349, -0.3302), "P10": (0.809, -0.5878), "P10h": (0.691, -0.5021),
    "P1h": (-0.0672, -0.3262), "P2": (0.1349, -0.3302), "P2h": (0.0672, -0.3262),
    "P3": (-0.2744, -0.3467), "P3h": (-0.2038, -0.3369), "P4": (0.2744, -0.3467),
    "P4h": (0.2038, -0.3369), "P5": (-0.4234, -0.3771), "P5h": (-0.3474, -0.3599),
    "P6": (0.4234, -0.3771), "P6h": (0.3474, -0.3599), "P7": (-0.5879, -0.427),
    "P7h": (-0.5032, -0.3992), "P8": (0.5879, -0.427), "P8h": (0.5032, -0.3992),
    "P9": (-0.809, -0.5878), "P9h": (-0.691, -0.5021), "PO1": (-0.1025, -0.5139),
    "PO10": (0.5878, -0.809), "PO10h": (0.5021, -0.691), "PO1h": (-0.0512, -0.5105),
    "PO2": (0.1025, -0.5139), "PO2h": (0.0512, -0.5105), "PO3": (-0.2067, -0.5274),
    "PO3h": (-0.1543, -0.5194), "PO4": (0.2067, -0.5274), "PO4h": (0.1543, -0.5194),
    "PO5": (-0.3143, -0.5513), "PO5h": (-0.26, -0.5379), "PO6": (0.3143, -0.5513),
    "PO6h": (0.26, -0.5379), "PO7": (-0.427, -0.5879), "PO7h": (-0.3699, -0.5678),
    "PO8": (0.427, -0.5879), "PO8h": (0.3699, -0.5678), "PO9": (-0.5878, -0.809),
    "PO9h": (-0.5021, -0.691), "POO1": (-0.0803, -0.6148), "POO10": (0.454, -0.891),
    "POO10h": (0.3878, -0.761), "POO1h": (-0.0401, -0.6133), "POO2": (0.0803, -0.6148),
    "POO2h": (0.0401, -0.6133), "POO3": (-0.1615, -0.621), "POO3h": (-0.1207, -0.6174),
    "POO4": (0.1615, -0.621), "POO4h": (0.1207, -0.6174), "POO5": (-0.2443, -0.6317),
    "POO5h": (-0.2027, -0.6258), "POO6": (0.2443, -0.6317), "POO6h": (0.2027, -0.6258),
    "POO7": (-0.3299, -0.6474), "POO7h": (-0.2867, -0.6388), "POO8": (0.3299, -0.6474),
    "POO8h": (0.2867, -0.6388), "POO9": (-0.454, -0.891), "POO9h": (-0.3878, -0.761),
    "POOz": (0.0, -0.6128), "POz": (0.0, -0.5095), "PPO1": (-0.1207, -0.4195),
    "PPO10": (0.7071, -0.7071), "PPO10h": (0.6039, -0.6039), "PPO1h": (-0.0602, -0.4155),
    "PPO2": (0.1207, -0.4195), "PPO2h": (0.0602, -0.4155), "PPO3": (-0.2444, -0.4361),
    "PPO3h": (-0.182, -0.4263), "PPO4": (0.2444, -0.4361), "PPO4h": (0.182, -0.4263),
    "PPO5": (-0.3743, -0.4661), "PPO5h": (-0.3084, -0.4493), "PPO6": (0.3743, -0.4661),
    "PPO6h": (0.3084, -0.4493), "PPO7": (-0.5138, -0.5138), "PPO7h": (-0.4426, -0.4874),
    "PPO8": (0.5138, -0.5138), "PPO8h": (0.4426, -0.4874), "PPO9": (-0.7071, -0.7071),
    "PPO9h": (-0.6039, -0.6039), "PPOz": (0.0, -0.4142), "Pz": (0.0, -0.3249),
    "RPA": (1.0, 0.0), "T10": (1.0, 0.0), "T10h": (0.8541, 0.0),
    "T7": (-0.7266, 0.0), "T7h": (-0.6128, 0.0), "T8": (0.7266, 0.0),
    "T8h": (0.6128, 0.0), "T9": (-1.0, 0.0), "T9h": (-0.8541, 0.0),
    "TP10": (0.9511, -0.309), "TP10h": (0.8123, -0.2639), "TP7": (-0.691, -0.2245),
    "TP7h": (-0.5852, -0.2057), "TP8": (0.691, -0.2245), "TP8h": (0.5852, -0.2057),
    "TP9": (-0.9511, -0.309), "TP9h": (-0.8123, -0.2639), "TPP10": (0.891, -0.454),
    "TPP10h": (0.761, -0.3878), "TPP7": (-0.6474, -0.3299), "TPP7h": (-0.5509, -0.3048),
    "TPP8": (0.6474, -0.3299), "TPP8h": (0.5509, -0.3048), "TPP9": (-0.891, -0.454),
    "TPP9h": (-0.761, -0.3878), "TTP10": (0.9877, -0.1564), "TTP10h": (0.8436, -0.1336),
    "TTP7": (-0.7176, -0.1137), "TTP7h": (-0.6059, -0.1036), "TTP8": (0.7176, -0.1137),
    "TTP8h": (0.6059, -0.1036), "TTP9": (-0.9877, -0.1564), "TTP9h": (-0.8436, -0.1336),
}

STANDARD_1005_2D: Mapping[str, Tuple[float, float]] = MappingProxyType(_STANDARD_1005_2D)

# Example montage covering the scalp with 59 of the 10-10 positions
EXAMPLE_CHANNELS: List[str] = [
    "Fpz", "Fp1", "Fp2", "AF3", "AF4", "AF7", "AF8",
    "Fz", "F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8",
    "FCz", "FC1", "FC2", "FC3", "FC4", "FC5", "FC6", "FT7", "FT8",
    "Cz", "C1", "C2", "C3", "C4", "C5", "C6", "T7", "T8",
    "CP1", "CP2", "CP3", "CP4", "CP5", "CP6", "TP7", "TP8",
    "Pz", "P3", "P4", "P5", "P6", "P7", "P8",
    "POz", "PO3", "PO4", "PO5", "PO6", "PO7", "PO8",
    "Oz", "O1", "O2",
]


def get_position(label: str) -> Tuple[float, float]:
    """Get the (x, y) position of a standard electrode label."""
    try:
        return STANDARD_1005_2D[label]
    except KeyError:
        raise UnknownElectrodeError(label) from None


class ElectrodeMap:
    """
    Read-only view of the standard electrode table.

    Can be restricted to a subset of channels, e.g. the montage of a cap.
    """

    def __init__(self, channel_names: Optional[Sequence[str]] = None):
        """
        Initialize electrode map.

        Args:
            channel_names: Channels to include. Uses the full 10-05 table if None.
        """
        names = list(channel_names) if channel_names is not None else list(STANDARD_1005_2D)
        self.electrodes = [Electrode(name, *get_position(name)) for name in names]
        self._by_name = {e.name: e for e in self.electrodes}

    def __len__(self) -> int:
        return len(self.electrodes)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def get_by_name(self, name: str) -> Optional[Electrode]:
        """Get electrode by standard name (e.g., 'Fp1', 'C3')."""
        return self._by_name.get(name)

    def get_position(self, name: str) -> Tuple[float, float]:
        """Get 2D position of a channel, failing if it is not in the map."""
        electrode = self._by_name.get(name)
        if electrode is None:
            raise UnknownElectrodeError(name)
        return electrode.x, electrode.y

    def get_channel_names(self) -> List[str]:
        """Get list of all channel names in order."""
        return [e.name for e in self.electrodes]

    def get_positions_2d(self, channel_names: Optional[Sequence[str]] = None) -> np.ndarray:
        """Get 2D positions for the given channels (all channels if None)."""
        names = channel_names if channel_names is not None else self.get_channel_names()
        return np.array([self.get_position(name) for name in names], dtype=float).reshape(-1, 2)


# Full 10-05 table, shared by every lookup
STANDARD_ELECTRODES = ElectrodeMap()


def resolve_positions(labels: Iterable[str]) -> np.ndarray:
    """
    Resolve electrode labels into an (N, 2) array of positions.

    Raises:
        UnknownElectrodeError: For the first label missing from the table.
    """
    return STANDARD_ELECTRODES.get_positions_2d(list(labels))
