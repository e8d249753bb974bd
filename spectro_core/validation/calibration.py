"""Calibration validation: wavelength axis ordering, finiteness and bounds."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .errors import CalibrationViolation


def validate_calibration(
    wavelengths: Sequence[float],
    minimum_wavelength: Optional[float] = None,
    maximum_wavelength: Optional[float] = None,
) -> List[CalibrationViolation]:
    """Check a wavelength table against the calibration contract.

    The table must be non-empty, finite and non-decreasing. When bounds are
    given, every entry must lie within them (inclusive).

    Returns a list of violations (empty if all pass).
    """
    if len(wavelengths) == 0:
        return [CalibrationViolation(rule="empty", index=None, value=None)]

    violations: List[CalibrationViolation] = []
    previous: Optional[float] = None
    for i, value in enumerate(wavelengths):
        if not math.isfinite(value):
            violations.append(CalibrationViolation(rule="non_finite", index=i, value=value))
            previous = None
            continue
        if previous is not None and value < previous:
            violations.append(CalibrationViolation(
                rule="descending", index=i, value=value, bound_value=previous,
            ))
        if minimum_wavelength is not None and value < minimum_wavelength:
            violations.append(CalibrationViolation(
                rule="below_minimum", index=i, value=value, bound_value=minimum_wavelength,
            ))
        if maximum_wavelength is not None and value > maximum_wavelength:
            violations.append(CalibrationViolation(
                rule="above_maximum", index=i, value=value, bound_value=maximum_wavelength,
            ))
        previous = value
    return violations
