from abc import ABC, abstractmethod
from typing import Optional, Sequence

from spectro_core.instruments.spectrometer.models import SpectrometerCapability


class SpectrometerDriver(ABC):
    """Raw device access beneath a SpectrometerHandle.

    Concrete drivers wrap a vendor SDK or transport. They return raw values
    and may raise any exception on transport failure; the handle validates and
    normalizes everything they return before it reaches callers.

    Optional features are advertised through ``capabilities``. The matching
    ``read_*`` methods are only called when the flag is set.
    """

    capabilities: SpectrometerCapability = SpectrometerCapability.NONE

    # ── Lifecycle ─────────────────────────────────────────────────────────

    @abstractmethod
    def connect(self) -> None:
        pass

    @abstractmethod
    def disconnect(self) -> None:
        pass

    @abstractmethod
    def is_alive(self) -> bool:
        """Liveness signal: False once the device has reported an error."""
        pass

    # ── Core contract ─────────────────────────────────────────────────────

    @abstractmethod
    def read_identity(self) -> Sequence[str]:
        """Return [manufacturer, instrument type, serial number, firmware version]."""
        pass

    @abstractmethod
    def read_wavelengths(self) -> Optional[Sequence[float]]:
        pass

    @abstractmethod
    def read_intensities(self) -> Optional[Sequence[float]]:
        """Run one exposure and return the raw counts. Blocks until done."""
        pass

    @abstractmethod
    def set_exposure(self, seconds: float) -> None:
        pass

    @abstractmethod
    def get_exposure(self) -> float:
        """Return the exposure the device is actually using, in seconds."""
        pass

    # ── Optional capabilities ─────────────────────────────────────────────

    def read_integration_time_limits(self) -> tuple[float, float]:
        raise NotImplementedError(
            f"{type(self).__name__} does not report integration time limits"
        )

    def read_saturation_level(self) -> float:
        raise NotImplementedError(
            f"{type(self).__name__} does not report a saturation level"
        )

    def read_wavelength_limits(self) -> tuple[float, float]:
        raise NotImplementedError(
            f"{type(self).__name__} does not report wavelength limits"
        )
