"""Typed failure values returned by SpectrometerHandle operations.

Each contract operation returns a ``Result`` holding either a value or a
``SpectrometerFailure``. Callers branch on ``result.ok`` and
``result.failure.kind``; ``unwrap()`` converts a failure into the matching
exception for code that prefers raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from spectro_core.instruments.spectrometer.exceptions import (
    CapabilityNotSupportedError,
    DeviceFaultError,
    IntegrationTimeOutOfRangeError,
    NotReadyError,
    SpectrometerError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why a handle operation was rejected."""

    NOT_READY = "not_ready"
    OUT_OF_RANGE = "out_of_range"
    DEVICE_FAULT = "device_fault"
    UNSUPPORTED = "unsupported"


_EXCEPTION_FOR_KIND: dict[ErrorKind, type[SpectrometerError]] = {
    ErrorKind.NOT_READY: NotReadyError,
    ErrorKind.OUT_OF_RANGE: IntegrationTimeOutOfRangeError,
    ErrorKind.DEVICE_FAULT: DeviceFaultError,
    ErrorKind.UNSUPPORTED: CapabilityNotSupportedError,
}


@dataclass(frozen=True)
class SpectrometerFailure:
    """A rejected operation: its kind, a human-readable reason and optional details.

    ``details`` are passed as keyword arguments to the matching exception, so an
    OUT_OF_RANGE failure carries ``requested_s``, ``minimum_s`` and ``maximum_s``.
    """

    kind: ErrorKind
    message: str
    details: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_exception(self) -> SpectrometerError:
        return _EXCEPTION_FOR_KIND[self.kind](self.message, **self.details)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a handle operation: a value or a failure, never both."""

    value: Optional[T] = None
    failure: Optional[SpectrometerFailure] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str, **details: Any) -> "Result[T]":
        return cls(failure=SpectrometerFailure(kind=kind, message=message, details=details))

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.failure is None else self.failure.kind

    def unwrap(self) -> T:
        """Return the value, or raise the exception matching the failure kind."""
        if self.failure is not None:
            raise self.failure.to_exception()
        return self.value
