"""Spectrometer configuration module."""

from .errors import SpectrometerLoaderError
from .factory import build_handle, default_driver_factories
from .loader import load_spectrometer_from_yaml, load_spectrometer_from_yaml_safe
from .spectrometer_config import DriverKind, SimulatedDriverConfig, SpectrometerConfig
from .yaml_schema import SpectrometerYamlSchema

__all__ = [
    "DriverKind",
    "SimulatedDriverConfig",
    "SpectrometerConfig",
    "SpectrometerLoaderError",
    "SpectrometerYamlSchema",
    "build_handle",
    "default_driver_factories",
    "load_spectrometer_from_yaml",
    "load_spectrometer_from_yaml_safe",
]
