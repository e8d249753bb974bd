"""Strict Pydantic schemas for spectrometer YAML."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IntegrationTimeBoundsYaml(BaseModel):
    """Integration time range in seconds."""

    model_config = ConfigDict(extra="forbid")

    minimum_s: float = Field(gt=0)
    maximum_s: float = Field(gt=0)

    @model_validator(mode="after")
    def _validate_min_not_above_max(self) -> "IntegrationTimeBoundsYaml":
        if self.minimum_s > self.maximum_s:
            raise ValueError(
                f"minimum_s ({self.minimum_s}) must be <= maximum_s ({self.maximum_s})"
            )
        return self


class WavelengthRangeYaml(BaseModel):
    """Evenly spaced wavelength axis."""

    model_config = ConfigDict(extra="forbid")

    start_nm: float
    stop_nm: float
    num_pixels: int = Field(ge=1)

    @model_validator(mode="after")
    def _validate_ascending(self) -> "WavelengthRangeYaml":
        if self.start_nm > self.stop_nm:
            raise ValueError(
                f"start_nm ({self.start_nm}) must be <= stop_nm ({self.stop_nm})"
            )
        return self


class SimulatedDriverYaml(BaseModel):
    """Settings for the simulated driver."""

    model_config = ConfigDict(extra="forbid")

    wavelengths_nm: Optional[List[float]] = None
    wavelength_range: Optional[WavelengthRangeYaml] = None
    integration_time_limits: IntegrationTimeBoundsYaml = IntegrationTimeBoundsYaml(
        minimum_s=0.001, maximum_s=10.0,
    )
    exposure_step_s: Optional[float] = Field(default=None, gt=0)
    adc_full_scale: float = Field(default=65535.0, gt=0)
    signal_counts_per_s: float = Field(default=1000.0, ge=0)
    dark_counts_per_s: float = Field(default=100.0, ge=0)
    serial_number: str = "SIM0001"

    @model_validator(mode="after")
    def _validate_single_wavelength_source(self) -> "SimulatedDriverYaml":
        if self.wavelengths_nm is not None and self.wavelength_range is not None:
            raise ValueError("set either wavelengths_nm or wavelength_range, not both")
        if self.wavelengths_nm is not None and len(self.wavelengths_nm) == 0:
            raise ValueError("wavelengths_nm must contain at least one wavelength")
        return self


class SpectrometerYamlSchema(BaseModel):
    """Root spectrometer YAML schema."""

    model_config = ConfigDict(extra="forbid")

    name: str
    driver: Literal["simulated"] = "simulated"
    default_integration_time_s: Optional[float] = Field(default=None, gt=0)
    integration_time_bounds: Optional[IntegrationTimeBoundsYaml] = None
    simulated: SimulatedDriverYaml = SimulatedDriverYaml()
