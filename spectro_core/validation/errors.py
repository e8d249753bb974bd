"""Validation error types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class CalibrationViolation:
    """One calibration entry (or the table as a whole) that breaks the contract."""

    rule: Literal["empty", "non_finite", "descending", "below_minimum", "above_maximum"]
    index: Optional[int]
    value: Optional[float]
    bound_value: Optional[float] = None

    def describe(self) -> str:
        if self.rule == "empty":
            return "calibration table is empty"
        if self.rule == "non_finite":
            return f"wavelength[{self.index}]={self.value} is not finite"
        if self.rule == "descending":
            return (
                f"wavelength[{self.index}]={self.value} is smaller than "
                f"wavelength[{self.index - 1}]={self.bound_value}"
            )
        if self.rule == "below_minimum":
            return (
                f"wavelength[{self.index}]={self.value} is below "
                f"minimum_wavelength={self.bound_value}"
            )
        return (
            f"wavelength[{self.index}]={self.value} is above "
            f"maximum_wavelength={self.bound_value}"
        )


class CalibrationValidationError(Exception):
    """Raised when a calibration table fails validation."""

    def __init__(self, violations: list[CalibrationViolation]) -> None:
        self.violations: tuple[CalibrationViolation, ...] = tuple(violations)
        super().__init__(
            f"Calibration validation failed with {len(self.violations)} violation(s):\n"
            + "\n".join(f"  {v.describe()}" for v in self.violations)
        )
