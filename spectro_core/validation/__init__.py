"""Validation module for spectrometer calibration and exposure requests."""

from .calibration import validate_calibration
from .errors import CalibrationValidationError, CalibrationViolation
from .exposure import check_integration_time

__all__ = [
    "CalibrationValidationError",
    "CalibrationViolation",
    "check_integration_time",
    "validate_calibration",
]
