"""Integration time request validation."""

from __future__ import annotations

import math
import numbers
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from spectro_core.instruments.spectrometer.models import IntegrationTimeBounds


def check_integration_time(seconds: Any, bounds: IntegrationTimeBounds) -> Optional[str]:
    """Return the reason ``seconds`` cannot be applied, or None if it is valid."""
    if isinstance(seconds, bool) or not isinstance(seconds, numbers.Real):
        return f"integration time must be a number, got {type(seconds).__name__}"
    try:
        value = float(seconds)
    except OverflowError:
        return (
            "integration time is too large to represent and is outside valid range "
            f"[{bounds.minimum_s}, {bounds.maximum_s}] s"
        )
    if not math.isfinite(value):
        return f"integration time {value} s is not finite"
    if value <= 0:
        return f"integration time {value} s must be > 0"
    if not bounds.contains(value):
        return (
            f"integration time {value} s is outside valid range "
            f"[{bounds.minimum_s}, {bounds.maximum_s}] s"
        )
    return None
