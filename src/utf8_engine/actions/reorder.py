"""In-place unit reversal."""

from __future__ import annotations

from utf8_engine.buffer import TextBuffer, ensure_owned
from utf8_engine.runtime.telemetry import span
from utf8_engine.units import bounds, next_unit


def reverse(buffer: TextBuffer) -> TextBuffer:
    """Reverse the unit order of ``buffer`` in place and return it.

    Runs in two passes over the same storage. The first flips the bytes of
    every multi-byte unit; the second flips the whole buffer, which puts the
    units in reverse order and restores each unit's byte order.
    """

    buffer = ensure_owned(buffer)
    storage = buffer._storage()
    if len(storage) <= 1:
        return buffer

    with span(
        "utf8::reverse", component="reorder", metadata={"octets": len(storage)}
    ) as handle:
        # boundaries are collected up front so malformed input fails untouched
        multibyte = []
        begin, end = bounds(bytes(storage))
        current = begin
        following = next_unit(current, end)
        while following is not None:
            if following.offset - current.offset > 1:
                multibyte.append(slice(current.offset, following.offset))
            current = following
            following = next_unit(current, end)

        for unit in multibyte:
            storage[unit] = storage[unit][::-1]
        storage.reverse()
        handle.add_metadata("multibyte_units", len(multibyte))
        return buffer


__all__ = ["reverse"]
