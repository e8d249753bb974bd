"""Spectrometer configuration domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from spectro_core.instruments.spectrometer.models import IntegrationTimeBounds


class DriverKind(str, Enum):
    """Driver families a configuration can ask for."""

    SIMULATED = "simulated"


@dataclass(frozen=True)
class SimulatedDriverConfig:
    """Settings passed to SimulatedSpectrometerDriver."""

    wavelengths_nm: tuple[float, ...]
    integration_time_limits: IntegrationTimeBounds
    exposure_step_s: Optional[float]
    adc_full_scale: float
    signal_counts_per_s: float
    dark_counts_per_s: float
    serial_number: str


@dataclass(frozen=True)
class SpectrometerConfig:
    """Loaded spectrometer configuration."""

    name: str
    driver: DriverKind
    default_integration_time_s: Optional[float]
    integration_time_bounds: Optional[IntegrationTimeBounds]
    simulated: SimulatedDriverConfig
