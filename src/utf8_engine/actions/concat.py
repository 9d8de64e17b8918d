"""Concatenation in two ownership flavours.

``copy``, ``concat`` and ``concat_all`` borrow their inputs and return a new
buffer. ``concat_consuming`` and ``concat_all_consuming`` take ownership of
every input handle: the first handle's storage is grown in place and the rest
are released once appended. If anything goes wrong every input that is still
live is released before the error propagates, so callers never have to clean
up after a consuming call.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from utf8_engine.buffer import Readable, TextBuffer, as_bytes
from utf8_engine.errors import (
    ConsumedBufferError,
    InvalidArgumentError,
    Utf8EngineError,
)
from utf8_engine.runtime.telemetry import span


def copy(value: Readable) -> TextBuffer:
    """Owned duplicate of ``value``."""

    source = as_bytes(value)
    with span("utf8::copy", component="concat", metadata={"octets": len(source)}):
        return TextBuffer(source)


def concat(a: Readable, b: Readable) -> TextBuffer:
    left = as_bytes(a, name="a")
    right = as_bytes(b, name="b")
    with span(
        "utf8::concat",
        component="concat",
        metadata={"octets": len(left) + len(right)},
    ):
        return TextBuffer(left + right)


def concat_all(values: Sequence[Readable]) -> TextBuffer:
    if not values:
        raise InvalidArgumentError("concat_all requires at least one value")
    parts = [as_bytes(value, name=f"values[{i}]") for i, value in enumerate(values)]
    with span(
        "utf8::concat_all",
        component="concat",
        metadata={"inputs": len(parts), "octets": sum(map(len, parts))},
    ):
        return TextBuffer(b"".join(parts))


def _release_live(values: Iterable[object]) -> int:
    released = 0
    seen: set[int] = set()
    for value in values:
        if not isinstance(value, TextBuffer) or id(value) in seen:
            continue
        seen.add(id(value))
        if value.live:
            value.release()
            released += 1
    return released


def _check_handles(values: Sequence[object]) -> List[TextBuffer]:
    handles: List[TextBuffer] = []
    seen: set[int] = set()
    for index, value in enumerate(values):
        name = f"values[{index}]"
        if value is None:
            raise InvalidArgumentError(f"{name} is required")
        if not isinstance(value, TextBuffer):
            raise InvalidArgumentError(
                f"{name} must be an owned TextBuffer, got {type(value).__name__}"
            )
        if not value.live:
            raise ConsumedBufferError(f"{name} was released or consumed")
        if id(value) in seen:
            raise InvalidArgumentError(f"{name} is passed more than once")
        seen.add(id(value))
        handles.append(value)
    return handles


def _consume_into_first(values: Sequence[TextBuffer], operation: str) -> TextBuffer:
    with span(
        f"utf8::{operation}", component="concat", metadata={"inputs": len(values)}
    ) as handle:
        try:
            handles = _check_handles(values)
            head = handles[0]
            total = sum(len(item) for item in handles)
            head.allocator.grow(head._token, total)
        except Utf8EngineError as exc:
            released = _release_live(values)
            handle.cleanup(released, exc.reason.value)
            raise

        storage, token, allocator = head._detach()
        for item in handles[1:]:
            storage.extend(item._storage())
            item.release()
        handle.add_metadata("octets", total)
        return TextBuffer._adopt(storage, token, allocator)


def concat_consuming(a: TextBuffer, b: TextBuffer) -> TextBuffer:
    """Consume ``a`` and ``b`` and return ``a ++ b`` in ``a``'s grown storage."""

    return _consume_into_first((a, b), "concat_consuming")


def concat_all_consuming(values: Sequence[TextBuffer]) -> TextBuffer:
    """Consume every handle in ``values`` and return them joined in order.

    A ``None`` anywhere in the sequence fails the call after releasing all of
    the other handles.
    """

    if not values:
        raise InvalidArgumentError("concat_all_consuming requires at least one value")
    return _consume_into_first(list(values), "concat_all_consuming")


__all__ = [
    "concat",
    "concat_all",
    "concat_all_consuming",
    "concat_consuming",
    "copy",
]
