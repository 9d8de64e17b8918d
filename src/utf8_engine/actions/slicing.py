"""Unit-addressed slicing."""

from __future__ import annotations

from typing import Optional

from utf8_engine.buffer import Readable, TextBuffer, as_bytes
from utf8_engine.errors import InvalidArgumentError, UnitRangeError
from utf8_engine.runtime.telemetry import span
from utf8_engine.units import advance, bounds, distance

NPOS: Optional[int] = None


def substring(value: Readable, offset: int, count: Optional[int] = NPOS) -> TextBuffer:
    """Copy ``count`` units starting ``offset`` units into ``value``.

    A start beyond the available units raises ``UnitRangeError``; a ``count``
    running past the end is clamped to the remainder. ``count=NPOS`` takes
    everything from ``offset`` on.
    """

    if offset < 0:
        raise InvalidArgumentError("offset cannot be negative")
    if count is not None and count < 0:
        raise InvalidArgumentError("count cannot be negative")

    with span(
        "utf8::substring",
        component="slicing",
        metadata={"offset": offset, "count": "npos" if count is None else count},
    ) as handle:
        begin, end = bounds(as_bytes(value))
        start = advance(begin, offset, end)
        if start is None:
            available = distance(begin, end)
            handle.add_metadata("available", available)
            raise UnitRangeError(offset, available=available)

        if count is None:
            stop = end
        else:
            stop = advance(start, count, end) or end

        return TextBuffer(begin.source[start.offset : stop.offset])


__all__ = ["NPOS", "substring"]
