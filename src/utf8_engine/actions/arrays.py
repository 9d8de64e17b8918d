"""Decomposing buffers into unit arrays and back."""

from __future__ import annotations

from typing import List, Optional

from utf8_engine.buffer import Readable, TextBuffer, UnitArray, as_bytes
from utf8_engine.errors import InvalidArgumentError, Utf8EngineError
from utf8_engine.runtime.telemetry import span
from utf8_engine.units import iter_units


def to_unit_array(value: Readable) -> UnitArray:
    """Split ``value`` into one owned buffer per unit.

    If a unit cannot be allocated, or the source is malformed, the units built
    so far are released before the error propagates.
    """

    source = as_bytes(value)
    with span(
        "utf8::to_unit_array", component="arrays", metadata={"octets": len(source)}
    ) as handle:
        units: List[TextBuffer] = []
        try:
            for unit in iter_units(source):
                units.append(TextBuffer(unit))
        except Utf8EngineError as exc:
            for built in units:
                built.release()
            handle.cleanup(len(units), exc.reason.value)
            raise
        handle.add_metadata("units", len(units))
        return UnitArray(units)


def to_buffer(array: UnitArray) -> TextBuffer:
    """Concatenate the units of ``array`` back into one owned buffer."""

    if array is None:
        raise InvalidArgumentError("array is required")
    with span("utf8::to_buffer", component="arrays", metadata={"units": len(array)}):
        return TextBuffer(b"".join(unit.view() for unit in array))


def free_array(array: Optional[UnitArray]) -> None:
    """Release ``array`` and every unit it owns; ``None`` is ignored."""

    if array is None:
        return
    array.release()


__all__ = ["free_array", "to_buffer", "to_unit_array"]
