"""Unit-boundary cursors and the navigation primitives built on them."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Callable, Iterator, Optional, Tuple

from utf8_engine.buffer.validation import Readable, as_bytes
from utf8_engine.config import get_config
from utf8_engine.errors import InvalidArgumentError, MalformedSequenceError

from .classify import is_continuation, unit_width


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class Cursor:
    """Byte offset into an immutable source that sits on a unit boundary.

    Offset ``0`` and ``len(source)`` are always boundaries; any other offset
    must not land on a continuation byte.
    """

    source: bytes
    offset: int

    def __post_init__(self) -> None:
        if not isinstance(self.source, bytes):
            object.__setattr__(self, "source", as_bytes(self.source))
        size = len(self.source)
        if self.offset < 0 or self.offset > size:
            raise InvalidArgumentError(
                f"Cursor offset {self.offset} outside [0, {size}]"
            )
        if 0 < self.offset < size and is_continuation(self.source[self.offset]):
            raise InvalidArgumentError(
                f"Cursor offset {self.offset} points inside a multi-byte unit"
            )

    @classmethod
    def at(cls, value: Readable, offset: int) -> "Cursor":
        return cls(as_bytes(value), offset)

    @property
    def at_end(self) -> bool:
        return self.offset == len(self.source)

    def _same_source(self, other: "Cursor") -> None:
        if self.source is not other.source and self.source != other.source:
            raise InvalidArgumentError("Cursors belong to different sources")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        self._same_source(other)
        return self.offset == other.offset

    def __lt__(self, other: "Cursor") -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        self._same_source(other)
        return self.offset < other.offset

    def __hash__(self) -> int:
        return hash((len(self.source), self.offset))

    def __repr__(self) -> str:
        return f"Cursor(offset={self.offset}, size={len(self.source)})"


def _forward_offset(source: bytes, offset: int) -> int:
    size = len(source)
    width = unit_width(source[offset])
    strict = get_config().strict

    if width is None:
        if strict:
            raise MalformedSequenceError("Unrecognised lead byte", offset=offset)
        target = offset + 1
        while target < size and is_continuation(source[target]):
            target += 1
        return target

    target = offset + width
    if target > size:
        if strict:
            raise MalformedSequenceError("Truncated sequence", offset=offset)
        return size
    if strict and target < size and is_continuation(source[target]):
        raise MalformedSequenceError("Unexpected continuation byte", offset=target)
    if not strict:
        while target < size and is_continuation(source[target]):
            target += 1
    return target


def next_unit(cursor: Cursor, limit: Cursor) -> Optional[Cursor]:
    """Boundary of the unit after ``cursor``; ``None`` once ``limit`` is hit."""

    if cursor == limit or cursor.at_end:
        return None
    return Cursor(cursor.source, _forward_offset(cursor.source, cursor.offset))


def prior_unit(cursor: Cursor, limit: Cursor) -> Optional[Cursor]:
    """Boundary of the unit before ``cursor``; never steps below ``limit``."""

    if cursor == limit or cursor.offset == 0:
        return None
    source = cursor.source
    floor = limit.offset if limit.offset < cursor.offset else 0
    position = cursor.offset - 1
    while position > floor and is_continuation(source[position]):
        position -= 1
    if is_continuation(source[position]) and get_config().strict:
        raise MalformedSequenceError("Orphan continuation bytes", offset=position)
    return Cursor(source, position)


Step = Callable[[Cursor, Cursor], Optional[Cursor]]


def _stepper(cursor: Cursor, limit: Cursor) -> Step:
    return next_unit if cursor < limit else prior_unit


def advance(cursor: Cursor, n: int, limit: Cursor) -> Optional[Cursor]:
    """Move ``n`` units toward ``limit``; ``None`` if fewer than ``n`` remain."""

    if n < 0:
        raise InvalidArgumentError("advance count cannot be negative")
    step = _stepper(cursor, limit)
    current: Optional[Cursor] = cursor
    for _ in range(n):
        current = step(current, limit)
        if current is None:
            return None
    return current


def distance(begin: Cursor, end: Cursor) -> int:
    """Number of units between two cursors, in either direction."""

    step = _stepper(begin, end)
    count = 0
    current = step(begin, end)
    while current is not None:
        count += 1
        current = step(current, end)
    return count


def bounds(value: Readable) -> Tuple[Cursor, Cursor]:
    """``(begin, end)`` cursors sharing one snapshot of ``value``."""

    source = as_bytes(value)
    return Cursor(source, 0), Cursor(source, len(source))


def iter_units(value: Readable) -> Iterator[bytes]:
    begin, end = bounds(value)
    current = begin
    following = next_unit(current, end)
    while following is not None:
        yield current.source[current.offset : following.offset]
        current = following
        following = next_unit(current, end)


def iter_units_reversed(value: Readable) -> Iterator[bytes]:
    begin, end = bounds(value)
    current = end
    preceding = prior_unit(current, begin)
    while preceding is not None:
        yield current.source[preceding.offset : current.offset]
        current = preceding
        preceding = prior_unit(current, begin)


__all__ = [
    "Cursor",
    "advance",
    "bounds",
    "distance",
    "iter_units",
    "iter_units_reversed",
    "next_unit",
    "prior_unit",
]
