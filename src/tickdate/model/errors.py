from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    OVERFLOW = "overflow"
    INVALID_CALENDAR_VALUE = "invalid-calendar-value"
    AMBIGUOUS_LOCAL_TIME = "ambiguous-local-time"
    INVALID_LOCAL_TIME = "invalid-local-time"
    MALFORMED_INPUT = "malformed-input"


@dataclass(frozen=True)
class DateError:
    """Failure value returned (not raised) by operations that can fail."""

    kind: ErrorKind
    message: str
    operation: str

    def __str__(self) -> str:
        return f"{self.operation}: {self.message} ({self.kind.value})"


class DateValueError(ValueError):
    """Raised by unwrap() so exception-style callers keep the error value."""

    def __init__(self, error: DateError):
        super().__init__(str(error))
        self.error = error


def overflow(operation: str, message: str) -> DateError:
    return DateError(ErrorKind.OVERFLOW, message, operation)


def invalid_calendar(operation: str, message: str) -> DateError:
    return DateError(ErrorKind.INVALID_CALENDAR_VALUE, message, operation)


def malformed(operation: str, message: str) -> DateError:
    return DateError(ErrorKind.MALFORMED_INPUT, message, operation)


def is_error(value: Any) -> bool:
    return isinstance(value, DateError)


def unwrap(value: T | DateError) -> T:
    """Return value, or raise DateValueError if it is a DateError."""
    if isinstance(value, DateError):
        raise DateValueError(value)
    return value
