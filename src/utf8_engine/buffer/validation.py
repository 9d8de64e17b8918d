"""Argument coercion shared by borrowing, consuming and mutating operations."""

from __future__ import annotations

from typing import Union

from utf8_engine.errors import ConsumedBufferError, InvalidArgumentError

from .text_buffer import TextBuffer

Readable = Union[TextBuffer, bytes, bytearray, memoryview, str]


def as_bytes(value: Readable, *, name: str = "buffer") -> bytes:
    """Borrow ``value`` as an immutable byte string."""

    if value is None:
        raise InvalidArgumentError(f"{name} is required")
    if isinstance(value, TextBuffer):
        return value.view()
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise InvalidArgumentError(
        f"{name} must be a TextBuffer, bytes-like or str, got {type(value).__name__}"
    )


def ensure_owned(value: TextBuffer, *, name: str = "buffer") -> TextBuffer:
    """Require a live handle the caller holds exclusively."""

    if value is None:
        raise InvalidArgumentError(f"{name} is required")
    if not isinstance(value, TextBuffer):
        raise InvalidArgumentError(
            f"{name} must be an owned TextBuffer, got {type(value).__name__}"
        )
    if not value.live:
        raise ConsumedBufferError(f"{name} was released or consumed")
    return value
