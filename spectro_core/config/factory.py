"""Build SpectrometerHandle instances from a loaded configuration."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional

from spectro_core.instruments.spectrometer.driver import SpectrometerDriver
from spectro_core.instruments.spectrometer.handle import SpectrometerHandle
from spectro_core.instruments.spectrometer.mock import SimulatedSpectrometerDriver

from .spectrometer_config import DriverKind, SpectrometerConfig

DriverFactory = Callable[[SpectrometerConfig], SpectrometerDriver]


def _build_simulated_driver(config: SpectrometerConfig) -> SpectrometerDriver:
    sim = config.simulated
    return SimulatedSpectrometerDriver(
        wavelengths=sim.wavelengths_nm,
        integration_time_limits=(
            sim.integration_time_limits.minimum_s,
            sim.integration_time_limits.maximum_s,
        ),
        exposure_step_s=sim.exposure_step_s,
        adc_full_scale=sim.adc_full_scale,
        signal_counts_per_s=sim.signal_counts_per_s,
        dark_counts_per_s=sim.dark_counts_per_s,
        identity=("Simulated", "ArraySpectrometer", sim.serial_number, "1.0.0"),
    )


def default_driver_factories() -> Dict[DriverKind, DriverFactory]:
    """Return a fresh mapping of the driver factories shipped with spectro_core."""
    return {DriverKind.SIMULATED: _build_simulated_driver}


def build_handle(
    config: SpectrometerConfig,
    driver_factories: Optional[Mapping[DriverKind, DriverFactory]] = None,
) -> SpectrometerHandle:
    """Create an unconnected handle for ``config``.

    Args:
        config: Loaded spectrometer configuration.
        driver_factories: Driver constructors keyed by kind. Callers with their
            own hardware drivers pass them here; defaults to
            ``default_driver_factories()``.

    Raises:
        KeyError: If no factory is available for ``config.driver``.
    """
    factories = driver_factories if driver_factories is not None else default_driver_factories()
    if config.driver not in factories:
        raise KeyError(
            f"No driver factory for '{config.driver.value}'. "
            f"Available: {sorted(kind.value for kind in factories)}"
        )
    driver = factories[config.driver](config)
    return SpectrometerHandle(
        driver=driver,
        name=config.name,
        default_integration_time_s=config.default_integration_time_s,
        integration_time_bounds=config.integration_time_bounds,
    )
