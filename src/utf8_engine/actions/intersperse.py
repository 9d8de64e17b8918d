"""Joining units with a separator and whole-buffer repetition."""

from __future__ import annotations

from utf8_engine.buffer import Readable, TextBuffer, as_bytes
from utf8_engine.errors import InvalidArgumentError
from utf8_engine.runtime.telemetry import span
from utf8_engine.units import iter_units


def join(value: Readable, joiner: Readable) -> TextBuffer:
    """Insert ``joiner`` between every pair of adjacent units of ``value``.

    Values with fewer than two units, or an empty joiner, come back as an
    unchanged copy.
    """

    source = as_bytes(value)
    separator = as_bytes(joiner, name="joiner")

    with span(
        "utf8::join",
        component="intersperse",
        metadata={"octets": len(source), "joiner_octets": len(separator)},
    ) as handle:
        if len(source) < 2 or not separator:
            return TextBuffer(source)
        units = list(iter_units(source))
        handle.add_metadata("units", len(units))
        return TextBuffer(separator.join(units))


def repeat(value: Readable, n: int) -> TextBuffer:
    if n < 0:
        raise InvalidArgumentError("repeat count cannot be negative")
    source = as_bytes(value)
    with span(
        "utf8::repeat",
        component="intersperse",
        metadata={"octets": len(source), "times": n},
    ):
        return TextBuffer(source * n)


__all__ = ["join", "repeat"]
