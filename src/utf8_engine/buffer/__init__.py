"""Owned buffer handles and argument validation."""

from .text_buffer import TextBuffer
from .unit_array import END_MARKER, UnitArray
from .validation import Readable, as_bytes, ensure_owned

__all__ = [
    "TextBuffer",
    "UnitArray",
    "END_MARKER",
    "Readable",
    "as_bytes",
    "ensure_owned",
]
