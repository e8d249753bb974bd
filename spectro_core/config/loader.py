"""Load spectrometer YAML into a SpectrometerConfig."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from spectro_core.instruments.spectrometer.mock import linear_wavelengths
from spectro_core.instruments.spectrometer.models import IntegrationTimeBounds

from .errors import SpectrometerLoaderError
from .spectrometer_config import DriverKind, SimulatedDriverConfig, SpectrometerConfig
from .yaml_schema import IntegrationTimeBoundsYaml, SpectrometerYamlSchema


def _format_loader_exception(path: Path, error: Exception) -> str:
    """Return a concise, actionable error message."""
    detail = str(error)

    if isinstance(error, ValidationError):
        first = error.errors()[0] if error.errors() else {}
        detail = first.get("msg", detail)
        location = ".".join(str(part) for part in first.get("loc", []))
        error_type = first.get("type", "")

        if "missing" in error_type or "Field required" in detail:
            guidance = "Add the missing required YAML field shown in the error location."
        elif "extra_forbidden" in error_type or "Extra inputs are not permitted" in detail:
            guidance = (
                "Remove unknown YAML fields; only 'name', 'driver', "
                "'default_integration_time_s', 'integration_time_bounds', and "
                "'simulated' are allowed at root."
            )
        elif "literal_error" in error_type:
            guidance = "Use a supported driver: 'simulated'."
        else:
            guidance = "Review the YAML values against the spectrometer schema."

        prefix = f" at `{location}`" if location else ""
        return f"Spectrometer YAML error{prefix}: {detail}\nHow to fix: {guidance}"

    if isinstance(error, yaml.YAMLError):
        return (
            f"Spectrometer YAML parse error in `{path}`.\n"
            "How to fix: Check YAML indentation, colons, and structure."
        )

    if isinstance(error, FileNotFoundError):
        return (
            f"Spectrometer config file not found: `{path}`.\n"
            "How to fix: Verify the file path exists."
        )

    return (
        f"Spectrometer loader error in `{path}`: {detail}\n"
        "How to fix: Verify the file path and spectrometer YAML contents."
    )


def _to_bounds(entry: IntegrationTimeBoundsYaml) -> IntegrationTimeBounds:
    return IntegrationTimeBounds(minimum_s=entry.minimum_s, maximum_s=entry.maximum_s)


def load_spectrometer_from_yaml(path: str | Path) -> SpectrometerConfig:
    """Load a spectrometer YAML file and return a SpectrometerConfig.

    Raises:
        FileNotFoundError: If the YAML file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValidationError: If the YAML does not match the schema.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raw = {}

    schema = SpectrometerYamlSchema.model_validate(raw)
    sim = schema.simulated
    if sim.wavelengths_nm is not None:
        wavelengths = tuple(sim.wavelengths_nm)
    elif sim.wavelength_range is not None:
        wavelengths = linear_wavelengths(
            start_nm=sim.wavelength_range.start_nm,
            stop_nm=sim.wavelength_range.stop_nm,
            n_pixels=sim.wavelength_range.num_pixels,
        )
    else:
        wavelengths = linear_wavelengths()

    return SpectrometerConfig(
        name=schema.name,
        driver=DriverKind(schema.driver),
        default_integration_time_s=schema.default_integration_time_s,
        integration_time_bounds=(
            _to_bounds(schema.integration_time_bounds)
            if schema.integration_time_bounds is not None
            else None
        ),
        simulated=SimulatedDriverConfig(
            wavelengths_nm=wavelengths,
            integration_time_limits=_to_bounds(sim.integration_time_limits),
            exposure_step_s=sim.exposure_step_s,
            adc_full_scale=sim.adc_full_scale,
            signal_counts_per_s=sim.signal_counts_per_s,
            dark_counts_per_s=sim.dark_counts_per_s,
            serial_number=sim.serial_number,
        ),
    )


def load_spectrometer_from_yaml_safe(path: str | Path) -> SpectrometerConfig:
    """Load spectrometer YAML with user-friendly exception formatting.

    Raises:
        SpectrometerLoaderError: Concise, actionable message intended for CLI output.
    """
    resolved = Path(path)
    try:
        return load_spectrometer_from_yaml(resolved)
    except Exception as exc:
        raise SpectrometerLoaderError(_format_loader_exception(resolved, exc)) from exc
