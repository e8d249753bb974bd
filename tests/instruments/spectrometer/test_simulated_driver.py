import pytest

from spectro_core.instruments.spectrometer.driver import SpectrometerDriver
from spectro_core.instruments.spectrometer.mock import (
    DEFAULT_NUM_PIXELS,
    SimulatedFault,
    SimulatedSpectrometerDriver,
    linear_wavelengths,
)
from spectro_core.instruments.spectrometer.models import SpectrometerCapability


# ─── Wavelength helper ──────────────────────────────────────────────────────


class TestLinearWavelengths:

    def test_default_axis(self):
        wl = linear_wavelengths()
        assert len(wl) == DEFAULT_NUM_PIXELS
        assert wl[0] == pytest.approx(200.0)
        assert wl[-1] == pytest.approx(800.0)

    def test_custom_pixel_count(self):
        wl = linear_wavelengths(400.0, 600.0, 3)
        assert wl == pytest.approx((400.0, 500.0, 600.0))

    def test_single_pixel(self):
        assert linear_wavelengths(500.0, 500.0, 1) == (500.0,)


# ─── SimulatedSpectrometerDriver ────────────────────────────────────────────


class TestSimulatedSpectrometerDriver:

    def test_is_spectrometer_driver(self):
        assert isinstance(SimulatedSpectrometerDriver(), SpectrometerDriver)

    def test_connect_disconnect_cycle(self):
        driver = SimulatedSpectrometerDriver()
        assert driver.is_alive() is False
        driver.connect()
        assert driver.is_alive() is True
        driver.disconnect()
        assert driver.is_alive() is False

    def test_default_capabilities(self):
        driver = SimulatedSpectrometerDriver()
        assert SpectrometerCapability.INTEGRATION_TIME_BOUNDS in driver.capabilities
        assert SpectrometerCapability.SATURATION_LEVEL in driver.capabilities
        assert SpectrometerCapability.WAVELENGTH_BOUNDS not in driver.capabilities

    def test_frame_matches_wavelength_count(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0, 500.0, 600.0])
        driver.connect()
        assert len(driver.read_intensities()) == 3

    def test_intensity_scales_with_exposure(self):
        driver = SimulatedSpectrometerDriver(
            wavelengths=[500.0], signal_counts_per_s=1000.0, dark_counts_per_s=0.0,
        )
        driver.connect()
        driver.set_exposure(0.5)
        assert driver.read_intensities() == [pytest.approx(500.0)]

    def test_exposure_is_clamped_to_limits(self):
        driver = SimulatedSpectrometerDriver(integration_time_limits=(0.01, 1.0))
        driver.set_exposure(5.0)
        assert driver.get_exposure() == 1.0
        driver.set_exposure(0.0001)
        assert driver.get_exposure() == 0.01

    def test_exposure_is_rounded_to_step(self):
        driver = SimulatedSpectrometerDriver(exposure_step_s=0.01)
        driver.set_exposure(0.123)
        assert driver.get_exposure() == pytest.approx(0.12)

    def test_saturation_level_depends_on_exposure(self):
        driver = SimulatedSpectrometerDriver(adc_full_scale=1000.0, dark_counts_per_s=100.0)
        driver.set_exposure(1.0)
        assert driver.read_saturation_level() == pytest.approx(900.0)
        driver.set_exposure(2.0)
        assert driver.read_saturation_level() == pytest.approx(800.0)

    def test_read_wavelength_limits(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0, 500.0, 600.0])
        assert driver.read_wavelength_limits() == (400.0, 600.0)

    def test_transport_error_fault(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0, 500.0])
        driver.connect()
        driver.inject_fault(SimulatedFault.TRANSPORT_ERROR)
        with pytest.raises(OSError, match="simulated transport failure"):
            driver.read_intensities()
        assert driver.is_alive() is False

    def test_short_frame_fault(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0, 500.0, 600.0])
        driver.connect()
        driver.inject_fault(SimulatedFault.SHORT_FRAME)
        assert len(driver.read_intensities()) == 2

    def test_null_frame_fault(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0])
        driver.connect()
        driver.inject_fault(SimulatedFault.NULL_FRAME)
        assert driver.read_intensities() is None

    def test_dead_fault_clears_liveness(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0])
        driver.connect()
        driver.inject_fault(SimulatedFault.DEAD)
        driver.read_intensities()
        assert driver.is_alive() is False

    def test_fault_applies_once(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0, 500.0])
        driver.connect()
        driver.inject_fault(SimulatedFault.NULL_FRAME)
        assert driver.read_intensities() is None
        assert len(driver.read_intensities()) == 2

    def test_reconnect_clears_fault_state(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0])
        driver.connect()
        driver.inject_fault(SimulatedFault.DEAD)
        driver.read_intensities()
        driver.disconnect()
        driver.connect()
        assert driver.is_alive() is True

    def test_command_history_tracking(self):
        driver = SimulatedSpectrometerDriver(wavelengths=[400.0])
        driver.connect()
        driver.set_exposure(0.5)
        driver.get_exposure()
        driver.read_intensities()
        driver.read_identity()

        assert driver.command_history == [
            "connect",
            "set_exposure 0.5",
            "get_exposure",
            "read_intensities",
            "read_identity",
        ]

    def test_base_driver_optional_methods_raise(self):
        class MinimalDriver(SpectrometerDriver):
            def connect(self): pass
            def disconnect(self): pass
            def is_alive(self): return True
            def read_identity(self): return ["a", "b", "c", "d"]
            def read_wavelengths(self): return [500.0]
            def read_intensities(self): return [1.0]
            def set_exposure(self, seconds): pass
            def get_exposure(self): return 0.1

        driver = MinimalDriver()
        assert driver.capabilities == SpectrometerCapability.NONE
        with pytest.raises(NotImplementedError):
            driver.read_saturation_level()
        with pytest.raises(NotImplementedError):
            driver.read_integration_time_limits()
        with pytest.raises(NotImplementedError):
            driver.read_wavelength_limits()
