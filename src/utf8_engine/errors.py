"""Error taxonomy shared by every engine operation."""

from __future__ import annotations

from enum import Enum


class ErrorReason(str, Enum):
    """Out-of-band reason code attached to every engine failure."""

    INVALID_ARGUMENT = "invalid_argument"
    OUT_OF_MEMORY = "out_of_memory"
    RANGE_ERROR = "range_error"


class Utf8EngineError(RuntimeError):
    """Base class for failures raised by utf8_engine operations."""

    reason: ErrorReason = ErrorReason.INVALID_ARGUMENT

    def __init__(self, message: str, *, reason: ErrorReason | None = None) -> None:
        super().__init__(message)
        if reason is not None:
            self.reason = reason


class InvalidArgumentError(Utf8EngineError):
    """Raised when a required buffer is missing or an argument is unusable."""

    reason = ErrorReason.INVALID_ARGUMENT


class MalformedSequenceError(InvalidArgumentError):
    """Raised when a lead byte matches none of the recognised UTF-8 patterns."""

    def __init__(self, message: str, *, offset: int) -> None:
        super().__init__(f"{message} at byte {offset}")
        self.offset = offset


class ConsumedBufferError(InvalidArgumentError):
    """Raised when a handle is used after it was released or moved."""


class OutOfMemoryError(Utf8EngineError, MemoryError):
    """Raised when the active allocator cannot satisfy a request."""

    reason = ErrorReason.OUT_OF_MEMORY

    def __init__(self, requested: int, *, limit: int | None = None) -> None:
        message = f"Cannot allocate {requested} bytes"
        if limit is not None:
            message += f" (limit {limit})"
        super().__init__(message)
        self.requested = requested
        self.limit = limit


class UnitRangeError(Utf8EngineError, IndexError):
    """Raised when a unit offset lies beyond the units available."""

    reason = ErrorReason.RANGE_ERROR

    def __init__(self, offset: int, *, available: int) -> None:
        super().__init__(
            f"Unit offset {offset} exceeds the {available} units available"
        )
        self.offset = offset
        self.available = available


__all__ = [
    "ErrorReason",
    "Utf8EngineError",
    "InvalidArgumentError",
    "MalformedSequenceError",
    "ConsumedBufferError",
    "OutOfMemoryError",
    "UnitRangeError",
]
