import math
import threading
from typing import Any, Optional, Sequence

from spectro_core.instruments.base_instrument import BaseInstrument
from spectro_core.instruments.spectrometer.driver import SpectrometerDriver
from spectro_core.instruments.spectrometer.exceptions import (
    DeviceFaultError,
    NotReadyError,
    SpectrometerConnectionError,
)
from spectro_core.instruments.spectrometer.models import (
    CalibrationTable,
    DeviceIdentity,
    HandleState,
    IntegrationTimeBounds,
    IntensityFrame,
    SpectrometerCapability,
)
from spectro_core.instruments.spectrometer.results import ErrorKind, Result
from spectro_core.validation import (
    CalibrationValidationError,
    check_integration_time,
    validate_calibration,
)


class SpectrometerHandle(BaseInstrument):
    """Validated view over one array spectrometer.

    The handle owns the calibration table, the effective integration time and
    the connection state. Raw device access is delegated to the injected
    driver. Contract operations return a ``Result`` instead of raising, so
    NOT_READY, OUT_OF_RANGE and DEVICE_FAULT can be told apart by ``kind``.

    Any DEVICE_FAULT moves the handle to ERROR. From there acquire and
    set_integration_time fail with NOT_READY until ``reconnect()``. Data read
    at connect time (identity, calibration, bounds) stays readable in ERROR.

    A handle is not meant to be shared between threads; the internal lock only
    keeps each check-then-act step atomic.
    """

    def __init__(
        self,
        driver: SpectrometerDriver,
        name: Optional[str] = None,
        default_integration_time_s: Optional[float] = None,
        integration_time_bounds: Optional[IntegrationTimeBounds] = None,
    ):
        super().__init__(name=name)
        self._driver = driver
        self._default_integration_time_s = default_integration_time_s
        self._fallback_bounds = integration_time_bounds
        self._lock = threading.RLock()

        self._state = HandleState.DISCONNECTED
        self._identity: Optional[DeviceIdentity] = None
        self._calibration: Optional[CalibrationTable] = None
        self._bounds: Optional[IntegrationTimeBounds] = None
        self._integration_time_s: Optional[float] = None

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def capabilities(self) -> SpectrometerCapability:
        return self._driver.capabilities

    # ── BaseInstrument interface ──────────────────────────────────────────

    def connect(self) -> None:
        with self._lock:
            if self._state is HandleState.READY:
                return
            if self._state is HandleState.ERROR:
                raise NotReadyError(
                    f"{self.name} is in the error state; call reconnect()"
                )
            try:
                self._driver.connect()
            except Exception as exc:
                self._state = HandleState.DISCONNECTED
                raise SpectrometerConnectionError(
                    f"Failed to open driver for {self.name}: {exc}"
                ) from exc

            # Held in ERROR until every connect-time read has validated.
            self._state = HandleState.ERROR
            try:
                self._identity = self._load_identity()
                self._calibration = self._load_calibration()
                self._bounds = self._load_bounds()
                self._integration_time_s = self._load_effective_exposure()
            except DeviceFaultError as exc:
                self.logger.error("Device fault during connect: %s", exc)
                raise
            except Exception as exc:
                self.logger.error("Device fault during connect: %s", exc)
                raise DeviceFaultError(
                    f"Driver failed while connecting {self.name}: {exc}"
                ) from exc

            self._state = HandleState.READY
            if self._default_integration_time_s is not None:
                applied = self.set_integration_time(self._default_integration_time_s)
                if not applied.ok:
                    self._state = HandleState.ERROR
                    self.logger.error(
                        "Default integration time rejected: %s", applied.failure.message,
                    )
                    applied.unwrap()

            self.logger.info(
                "Connected to %s %s (serial=%s, %d channels, %.6g-%.6g nm)",
                self._identity.manufacturer,
                self._identity.instrument_type,
                self._identity.serial_number,
                self._calibration.num_pixels,
                self._calibration.wavelengths[0],
                self._calibration.wavelengths[-1],
            )

    def disconnect(self) -> None:
        with self._lock:
            if self._state is HandleState.DISCONNECTED:
                return
            try:
                self._driver.disconnect()
            except Exception as exc:
                self.logger.warning("Error while closing driver: %s", exc)
            finally:
                self._state = HandleState.DISCONNECTED
                self._identity = None
                self._calibration = None
                self._bounds = None
                self._integration_time_s = None
                self.logger.info("Disconnected from spectrometer")

    def reconnect(self) -> None:
        """Close and reopen the driver. The only way out of the ERROR state."""
        with self._lock:
            self.disconnect()
            self.connect()

    def health_check(self) -> bool:
        if self._state is not HandleState.READY:
            return False
        try:
            return bool(self._driver.is_alive())
        except Exception as exc:
            self.logger.warning("Liveness check failed: %s", exc)
            return False

    # ── Connect-time data ─────────────────────────────────────────────────

    def get_identity(self) -> Result[DeviceIdentity]:
        if self._identity is None:
            return self._not_ready("get_identity")
        return Result.success(self._identity)

    def get_calibration(self) -> Result[CalibrationTable]:
        if self._calibration is None:
            return self._not_ready("get_calibration")
        return Result.success(self._calibration)

    def get_integration_time_bounds(self) -> Result[IntegrationTimeBounds]:
        if self._bounds is None:
            return self._not_ready("get_integration_time_bounds")
        return Result.success(self._bounds)

    # ── Device state ──────────────────────────────────────────────────────

    def set_integration_time(self, seconds: Any) -> Result[float]:
        """Apply a new integration time, effective from the next acquisition.

        Returns the value the device actually applied, which may differ from
        the request if the device rounds or clamps.
        """
        with self._lock:
            if self._state is not HandleState.READY:
                return self._not_ready("set_integration_time")

            reason = check_integration_time(seconds, self._bounds)
            if reason is not None:
                return Result.fail(
                    ErrorKind.OUT_OF_RANGE,
                    reason,
                    requested_s=seconds,
                    minimum_s=self._bounds.minimum_s,
                    maximum_s=self._bounds.maximum_s,
                )

            try:
                self._driver.set_exposure(float(seconds))
                effective = float(self._driver.get_exposure())
            except Exception as exc:
                return self._fault(f"driver failed to apply integration time {seconds} s: {exc}")

            if not (math.isfinite(effective) and self._bounds.contains(effective)):
                return self._fault(
                    f"device reports integration time {effective} s outside "
                    f"[{self._bounds.minimum_s}, {self._bounds.maximum_s}] s"
                )

            if effective != seconds:
                self.logger.info(
                    "Requested integration time %s s, device applied %s s", seconds, effective,
                )
            self._integration_time_s = effective
            return Result.success(effective)

    def get_integration_time(self) -> Result[float]:
        with self._lock:
            if self._state is not HandleState.READY:
                return self._not_ready("get_integration_time")
            return Result.success(self._integration_time_s)

    def get_saturation_level(self) -> Result[float]:
        """Saturation level for the current configuration, read fresh from the driver."""
        with self._lock:
            if self._state is not HandleState.READY:
                return self._not_ready("get_saturation_level")
            if SpectrometerCapability.SATURATION_LEVEL not in self.capabilities:
                return Result.fail(
                    ErrorKind.UNSUPPORTED,
                    f"{self.name} does not report a saturation level",
                )
            return self._read_saturation_level()

    def acquire(self) -> Result[IntensityFrame]:
        """Run one exposure at the current integration time and return the frame.

        Blocks until the exposure has elapsed.
        """
        with self._lock:
            if self._state is not HandleState.READY:
                return self._not_ready("acquire")

            self._state = HandleState.ACQUIRING
            try:
                result = self._read_frame()
            finally:
                # ACQUIRING never outlives the call.
                if self._state is HandleState.ACQUIRING:
                    self._state = HandleState.ERROR
            if not result.ok:
                return result
            frame = result.value

            clipped = frame.clipped_channels
            if clipped:
                self.logger.warning(
                    "%d of %d channels outside [0, %s]; reduce integration time",
                    len(clipped), frame.num_pixels, frame.saturation_level,
                )
            return Result.success(frame)

    # ── Private helpers ───────────────────────────────────────────────────

    def _not_ready(self, operation: str) -> Result:
        return Result.fail(
            ErrorKind.NOT_READY,
            f"{operation} rejected: {self.name} is {self._state.value}",
        )

    def _fault(self, message: str) -> Result:
        """Move to ERROR and report a DEVICE_FAULT. Callers must hold the lock."""
        self._state = HandleState.ERROR
        self.logger.error("Device fault: %s", message)
        return Result.fail(ErrorKind.DEVICE_FAULT, message)

    def _read_frame(self) -> Result[IntensityFrame]:
        """Read and validate one frame. Sets READY on success, ERROR on a fault."""
        try:
            raw = self._driver.read_intensities()
            alive = self._driver.is_alive()
        except Exception as exc:
            return self._fault(f"acquisition failed: {exc}")

        if not alive:
            return self._fault("driver reported an error during acquisition")
        if raw is None:
            return self._fault("driver returned no intensity data")

        try:
            intensities = tuple(float(v) for v in raw)
        except (TypeError, ValueError, OverflowError) as exc:
            return self._fault(f"driver returned malformed intensity data: {exc}")

        expected = self._calibration.num_pixels
        if len(intensities) != expected:
            return self._fault(
                f"driver returned {len(intensities)} intensities, expected {expected}"
            )

        saturation_level: Optional[float] = None
        if SpectrometerCapability.SATURATION_LEVEL in self.capabilities:
            saturation = self._read_saturation_level()
            if not saturation.ok:
                return saturation
            saturation_level = saturation.value

        frame = IntensityFrame(
            intensities=intensities,
            integration_time_s=self._integration_time_s,
            saturation_level=saturation_level,
        )
        self._state = HandleState.READY
        return Result.success(frame)

    def _read_saturation_level(self) -> Result[float]:
        try:
            level = float(self._driver.read_saturation_level())
        except Exception as exc:
            return self._fault(f"failed to read saturation level: {exc}")
        if not math.isfinite(level) or level <= 0:
            return self._fault(f"device reports invalid saturation level {level}")
        return Result.success(level)

    def _load_identity(self) -> DeviceIdentity:
        fields = self._driver.read_identity()
        if fields is None or len(fields) != 4:
            raise DeviceFaultError(
                f"driver returned malformed identity {fields!r}; expected 4 strings"
            )
        manufacturer, instrument_type, serial_number, firmware_version = (
            str(f) for f in fields
        )
        return DeviceIdentity(
            manufacturer=manufacturer,
            instrument_type=instrument_type,
            serial_number=serial_number,
            firmware_version=firmware_version,
        )

    def _load_calibration(self) -> CalibrationTable:
        raw: Optional[Sequence[float]] = self._driver.read_wavelengths()
        if raw is None:
            raise DeviceFaultError("driver returned no calibration table")
        wavelengths = tuple(float(w) for w in raw)

        minimum: Optional[float] = None
        maximum: Optional[float] = None
        if SpectrometerCapability.WAVELENGTH_BOUNDS in self.capabilities:
            minimum, maximum = (float(v) for v in self._driver.read_wavelength_limits())

        violations = validate_calibration(wavelengths, minimum, maximum)
        if violations:
            raise DeviceFaultError(
                str(CalibrationValidationError(violations))
            )
        return CalibrationTable(
            wavelengths=wavelengths,
            minimum_wavelength=wavelengths[0] if minimum is None else minimum,
            maximum_wavelength=wavelengths[-1] if maximum is None else maximum,
        )

    def _load_bounds(self) -> IntegrationTimeBounds:
        if SpectrometerCapability.INTEGRATION_TIME_BOUNDS in self.capabilities:
            minimum_s, maximum_s = self._driver.read_integration_time_limits()
            try:
                return IntegrationTimeBounds(float(minimum_s), float(maximum_s))
            except ValueError as exc:
                raise DeviceFaultError(
                    f"driver reports invalid integration time limits: {exc}"
                ) from exc
        if self._fallback_bounds is None:
            raise DeviceFaultError(
                f"{self.name}: driver does not report integration time limits "
                "and none were configured"
            )
        return self._fallback_bounds

    def _load_effective_exposure(self) -> Optional[float]:
        effective = float(self._driver.get_exposure())
        if math.isfinite(effective) and self._bounds.contains(effective):
            return effective
        if self._default_integration_time_s is not None:
            # Overwritten by the default applied right after connect.
            return None
        raise DeviceFaultError(
            f"device exposure {effective} s is outside "
            f"[{self._bounds.minimum_s}, {self._bounds.maximum_s}] s "
            "and no default integration time is configured"
        )
