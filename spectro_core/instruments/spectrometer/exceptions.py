from __future__ import annotations

from spectro_core.instruments.base_instrument import InstrumentError


class SpectrometerError(InstrumentError):
    """Base exception for array spectrometer errors."""


class SpectrometerConnectionError(SpectrometerError):
    """Raised when the device driver cannot be opened."""


class NotReadyError(SpectrometerError):
    """Raised when the handle is disconnected or in the error state."""


class IntegrationTimeOutOfRangeError(SpectrometerError):
    """Requested integration time is not a finite value inside the device bounds."""

    def __init__(
        self,
        message: str,
        requested_s: float | None = None,
        minimum_s: float | None = None,
        maximum_s: float | None = None,
    ) -> None:
        self.requested_s = requested_s
        self.minimum_s = minimum_s
        self.maximum_s = maximum_s
        super().__init__(message)


class DeviceFaultError(SpectrometerError):
    """Raised when the driver returns data that violates the contract or reports a hardware error."""


class CapabilityNotSupportedError(SpectrometerError):
    """Raised when an optional capability is requested from a driver that lacks it."""
