"""End-to-end walk through a handle's life: configure, acquire, fault, recover."""

import pytest

from spectro_core.instruments.spectrometer import (
    ErrorKind,
    HandleState,
    SimulatedFault,
    SimulatedSpectrometerDriver,
    SpectrometerHandle,
)


@pytest.fixture
def bench():
    driver = SimulatedSpectrometerDriver(
        wavelengths=[400.0, 500.0, 600.0],
        integration_time_limits=(0.001, 10.0),
    )
    handle = SpectrometerHandle(driver, name="bench")
    handle.connect()
    return handle, driver


def test_three_channel_bench_session(bench):
    handle, driver = bench

    assert handle.set_integration_time(0.1).ok is True
    assert handle.get_integration_time().value == 0.1

    frame = handle.acquire().value
    assert len(frame) == 3

    rejected = handle.set_integration_time(20.0)
    assert rejected.kind is ErrorKind.OUT_OF_RANGE
    assert handle.get_integration_time().value == 0.1

    driver.inject_fault(SimulatedFault.TRANSPORT_ERROR)
    assert handle.acquire().kind is ErrorKind.DEVICE_FAULT
    assert handle.state is HandleState.ERROR

    assert handle.set_integration_time(0.1).kind is ErrorKind.NOT_READY
    assert handle.acquire().kind is ErrorKind.NOT_READY


def test_recovery_after_reconnect(bench):
    handle, driver = bench
    driver.inject_fault(SimulatedFault.TRANSPORT_ERROR)
    handle.acquire()

    handle.reconnect()

    assert handle.set_integration_time(0.1).ok is True
    assert len(handle.acquire().value) == 3


def test_every_acquisition_matches_calibration_length(bench):
    handle, _ = bench
    n = len(handle.get_calibration().value)
    for seconds in (0.001, 0.01, 0.5, 2.0, 10.0):
        handle.set_integration_time(seconds)
        assert len(handle.acquire().value) == n
