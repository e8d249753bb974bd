from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, Flag, auto
from typing import Optional


class HandleState(str, Enum):
    """Connection state of a SpectrometerHandle."""

    DISCONNECTED = "disconnected"
    READY = "ready"
    ACQUIRING = "acquiring"
    ERROR = "error"


class SpectrometerCapability(Flag):
    """Optional features a driver may advertise beyond the core contract."""

    NONE = 0
    INTEGRATION_TIME_BOUNDS = auto()
    SATURATION_LEVEL = auto()
    WAVELENGTH_BOUNDS = auto()


@dataclass(frozen=True)
class DeviceIdentity:
    """Identification strings read once at connect time."""

    manufacturer: str
    instrument_type: str
    serial_number: str
    firmware_version: str


@dataclass(frozen=True)
class IntegrationTimeBounds:
    """Valid integration time range in seconds (inclusive)."""

    minimum_s: float
    maximum_s: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.minimum_s) and math.isfinite(self.maximum_s)):
            raise ValueError(
                f"integration time bounds must be finite, got "
                f"[{self.minimum_s}, {self.maximum_s}]"
            )
        if self.minimum_s <= 0:
            raise ValueError(f"minimum_s ({self.minimum_s}) must be > 0")
        if self.maximum_s < self.minimum_s:
            raise ValueError(
                f"maximum_s ({self.maximum_s}) must be >= minimum_s ({self.minimum_s})"
            )

    def contains(self, seconds: float) -> bool:
        """Return True if seconds lies within these bounds (inclusive)."""
        return self.minimum_s <= seconds <= self.maximum_s


@dataclass(frozen=True)
class CalibrationTable:
    """Wavelength axis of the detector, one entry per channel.

    Attributes:
        wavelengths: Wavelength of each channel in nm, non-decreasing.
        minimum_wavelength: Lower wavelength bound advertised for the device.
        maximum_wavelength: Upper wavelength bound advertised for the device.
    """

    wavelengths: tuple[float, ...]
    minimum_wavelength: float
    maximum_wavelength: float

    @property
    def num_pixels(self) -> int:
        return len(self.wavelengths)

    def __len__(self) -> int:
        return len(self.wavelengths)

    def __getitem__(self, index: int) -> float:
        return self.wavelengths[index]


@dataclass(frozen=True)
class IntensityFrame:
    """Immutable result of a single acquisition.

    Attributes:
        intensities: Detector counts, index-aligned with the calibration table.
        integration_time_s: Integration time used for this acquisition, in seconds.
        saturation_level: Saturation level in force for this acquisition, if the
            driver reports one.
    """

    intensities: tuple[float, ...]
    integration_time_s: float
    saturation_level: Optional[float] = None

    @property
    def num_pixels(self) -> int:
        return len(self.intensities)

    @property
    def clipped_channels(self) -> tuple[int, ...]:
        """Indices whose value lies outside [0, saturation_level]."""
        if self.saturation_level is None:
            return ()
        return tuple(
            i for i, value in enumerate(self.intensities)
            if value < 0 or value > self.saturation_level
        )

    @property
    def is_clipped(self) -> bool:
        return len(self.clipped_channels) > 0

    def __len__(self) -> int:
        return len(self.intensities)

    def __getitem__(self, index: int) -> float:
        return self.intensities[index]
