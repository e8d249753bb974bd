from spectro_core.instruments.spectrometer.driver import SpectrometerDriver
from spectro_core.instruments.spectrometer.handle import SpectrometerHandle
from spectro_core.instruments.spectrometer.mock import (
    SimulatedFault,
    SimulatedSpectrometerDriver,
)
from spectro_core.instruments.spectrometer.models import (
    CalibrationTable,
    DeviceIdentity,
    HandleState,
    IntegrationTimeBounds,
    IntensityFrame,
    SpectrometerCapability,
)
from spectro_core.instruments.spectrometer.results import (
    ErrorKind,
    Result,
    SpectrometerFailure,
)
from spectro_core.instruments.spectrometer.exceptions import (
    CapabilityNotSupportedError,
    DeviceFaultError,
    IntegrationTimeOutOfRangeError,
    NotReadyError,
    SpectrometerConnectionError,
    SpectrometerError,
)

__all__ = [
    "CalibrationTable",
    "CapabilityNotSupportedError",
    "DeviceFaultError",
    "DeviceIdentity",
    "ErrorKind",
    "HandleState",
    "IntegrationTimeBounds",
    "IntegrationTimeOutOfRangeError",
    "IntensityFrame",
    "NotReadyError",
    "Result",
    "SimulatedFault",
    "SimulatedSpectrometerDriver",
    "SpectrometerCapability",
    "SpectrometerConnectionError",
    "SpectrometerDriver",
    "SpectrometerError",
    "SpectrometerFailure",
    "SpectrometerHandle",
]
