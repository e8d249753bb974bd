from enum import Enum
from typing import Optional, Sequence

from spectro_core.instruments.spectrometer.driver import SpectrometerDriver
from spectro_core.instruments.spectrometer.models import SpectrometerCapability

DEFAULT_NUM_PIXELS = 3648


def linear_wavelengths(
    start_nm: float = 200.0,
    stop_nm: float = 800.0,
    n_pixels: int = DEFAULT_NUM_PIXELS,
) -> tuple[float, ...]:
    """Evenly spaced wavelength axis from start_nm to stop_nm inclusive."""
    if n_pixels == 1:
        return (float(start_nm),)
    step = (stop_nm - start_nm) / (n_pixels - 1)
    return tuple(start_nm + i * step for i in range(n_pixels))


class SimulatedFault(str, Enum):
    """Faults that SimulatedSpectrometerDriver can inject into the next acquisition."""

    TRANSPORT_ERROR = "transport_error"
    SHORT_FRAME = "short_frame"
    NULL_FRAME = "null_frame"
    DEAD = "dead"


class SimulatedSpectrometerDriver(SpectrometerDriver):
    """In-memory array spectrometer for testing.

    Exposure requests are rounded to ``exposure_step_s`` and clamped to the
    integration time limits, so the applied value can differ from the request.
    The saturation level shrinks with exposure as dark signal eats into the
    ADC range: ``adc_full_scale - dark_counts_per_s * exposure``.
    """

    def __init__(
        self,
        wavelengths: Optional[Sequence[float]] = None,
        integration_time_limits: tuple[float, float] = (0.001, 10.0),
        exposure_s: float = 0.1,
        exposure_step_s: Optional[float] = None,
        adc_full_scale: float = 65535.0,
        signal_counts_per_s: float = 1000.0,
        dark_counts_per_s: float = 100.0,
        identity: Sequence[str] = ("Simulated", "ArraySpectrometer", "SIM0001", "1.0.0"),
        capabilities: SpectrometerCapability = (
            SpectrometerCapability.INTEGRATION_TIME_BOUNDS
            | SpectrometerCapability.SATURATION_LEVEL
        ),
    ):
        self._wavelengths = tuple(wavelengths) if wavelengths is not None else linear_wavelengths()
        self._limits = integration_time_limits
        self._exposure_s = exposure_s
        self._exposure_step_s = exposure_step_s
        self._adc_full_scale = adc_full_scale
        self._signal_counts_per_s = signal_counts_per_s
        self._dark_counts_per_s = dark_counts_per_s
        self._identity = list(identity)
        self.capabilities = capabilities

        self._connected = False
        self._alive = True
        self._pending_fault: Optional[SimulatedFault] = None
        self.command_history: list[str] = []

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def connect(self) -> None:
        self._connected = True
        self._alive = True
        self._pending_fault = None
        self.command_history.append("connect")

    def disconnect(self) -> None:
        self._connected = False
        self.command_history.append("disconnect")

    def is_alive(self) -> bool:
        return self._connected and self._alive

    # ── Fault injection ───────────────────────────────────────────────────

    def inject_fault(self, fault: SimulatedFault) -> None:
        """Make the next read_intensities() call misbehave."""
        self._pending_fault = fault

    # ── Core contract ─────────────────────────────────────────────────────

    def read_identity(self) -> list[str]:
        self.command_history.append("read_identity")
        return list(self._identity)

    def read_wavelengths(self) -> tuple[float, ...]:
        self.command_history.append("read_wavelengths")
        return self._wavelengths

    def read_intensities(self) -> Optional[list[float]]:
        self.command_history.append("read_intensities")
        fault, self._pending_fault = self._pending_fault, None
        if fault is SimulatedFault.TRANSPORT_ERROR:
            self._alive = False
            raise OSError("simulated transport failure")
        if fault is SimulatedFault.NULL_FRAME:
            return None
        if fault is SimulatedFault.DEAD:
            self._alive = False

        counts = (self._signal_counts_per_s + self._dark_counts_per_s) * self._exposure_s
        n_pixels = len(self._wavelengths)
        if fault is SimulatedFault.SHORT_FRAME:
            n_pixels -= 1
        return [counts] * n_pixels

    def set_exposure(self, seconds: float) -> None:
        self.command_history.append(f"set_exposure {seconds}")
        if self._exposure_step_s:
            seconds = round(seconds / self._exposure_step_s) * self._exposure_step_s
        lo, hi = self._limits
        self._exposure_s = min(max(seconds, lo), hi)

    def get_exposure(self) -> float:
        self.command_history.append("get_exposure")
        return self._exposure_s

    # ── Optional capabilities ─────────────────────────────────────────────

    def read_integration_time_limits(self) -> tuple[float, float]:
        self.command_history.append("read_integration_time_limits")
        return self._limits

    def read_saturation_level(self) -> float:
        self.command_history.append("read_saturation_level")
        return self._adc_full_scale - self._dark_counts_per_s * self._exposure_s

    def read_wavelength_limits(self) -> tuple[float, float]:
        self.command_history.append("read_wavelength_limits")
        return self._wavelengths[0], self._wavelengths[-1]
