"""Leading-byte classification, the only decoding the engine performs."""

from __future__ import annotations

from enum import Enum
from typing import Optional

CONTINUATION_MASK = 0xC0
CONTINUATION_TAG = 0x80


class LeadClass(Enum):
    """What a single byte says about the unit it belongs to."""

    SINGLE = 1
    DOUBLE = 2
    TRIPLE = 3
    QUADRUPLE = 4
    CONTINUATION = 0
    INVALID = -1

    @property
    def width(self) -> Optional[int]:
        """Unit width in bytes, or ``None`` for non-leading bytes."""

        return self.value if self.value > 0 else None


# (mask, expected, class) in match order
_LEAD_PATTERNS = (
    (0x80, 0x00, LeadClass.SINGLE),
    (0xE0, 0xC0, LeadClass.DOUBLE),
    (0xF0, 0xE0, LeadClass.TRIPLE),
    (0xF8, 0xF0, LeadClass.QUADRUPLE),
    (CONTINUATION_MASK, CONTINUATION_TAG, LeadClass.CONTINUATION),
)


def classify(byte: int) -> LeadClass:
    for mask, expected, lead in _LEAD_PATTERNS:
        if byte & mask == expected:
            return lead
    return LeadClass.INVALID


def is_continuation(byte: int) -> bool:
    return byte & CONTINUATION_MASK == CONTINUATION_TAG


def unit_width(byte: int) -> Optional[int]:
    """Width of the unit that ``byte`` starts, ``None`` if it starts none."""

    return classify(byte).width


__all__ = [
    "CONTINUATION_MASK",
    "CONTINUATION_TAG",
    "LeadClass",
    "classify",
    "is_continuation",
    "unit_width",
]
