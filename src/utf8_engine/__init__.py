"""Byte-oriented UTF-8 unit engine."""

from .actions import (
    NPOS,
    concat,
    concat_all,
    concat_all_consuming,
    concat_consuming,
    copy,
    free_array,
    join,
    repeat,
    reverse,
    substring,
    to_buffer,
    to_unit_array,
)
from .buffer import END_MARKER, TextBuffer, UnitArray
from .errors import (
    ConsumedBufferError,
    ErrorReason,
    InvalidArgumentError,
    MalformedSequenceError,
    OutOfMemoryError,
    UnitRangeError,
    Utf8EngineError,
)
from .units import (
    Cursor,
    advance,
    bounds,
    distance,
    iter_units,
    iter_units_reversed,
    next_unit,
    prior_unit,
)

__all__ = [
    "NPOS",
    "END_MARKER",
    "TextBuffer",
    "UnitArray",
    "Cursor",
    "advance",
    "bounds",
    "distance",
    "iter_units",
    "iter_units_reversed",
    "next_unit",
    "prior_unit",
    "substring",
    "reverse",
    "join",
    "repeat",
    "copy",
    "concat",
    "concat_all",
    "concat_consuming",
    "concat_all_consuming",
    "to_unit_array",
    "to_buffer",
    "free_array",
    "ErrorReason",
    "Utf8EngineError",
    "InvalidArgumentError",
    "MalformedSequenceError",
    "ConsumedBufferError",
    "OutOfMemoryError",
    "UnitRangeError",
]

__version__ = "0.1.0"
