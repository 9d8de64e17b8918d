"""Owned sequence of single-unit buffers."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Iterator, List, Optional, Sequence, Tuple

from utf8_engine.errors import ConsumedBufferError

from .text_buffer import TextBuffer

END_MARKER = None


class UnitArray(AbstractContextManager["UnitArray"]):
    """Units of one source buffer, in order, followed by ``END_MARKER``.

    The array owns every element. ``len()`` counts units only; the marker is
    exposed through ``with_end_marker()``.
    """

    def __init__(self, units: Sequence[TextBuffer] = ()) -> None:
        self._elements: Optional[List[Optional[TextBuffer]]] = [*units, END_MARKER]

    @property
    def live(self) -> bool:
        return self._elements is not None

    def _slots(self) -> List[Optional[TextBuffer]]:
        if self._elements is None:
            raise ConsumedBufferError("Unit array was already freed")
        return self._elements

    def with_end_marker(self) -> Tuple[Optional[TextBuffer], ...]:
        return tuple(self._slots())

    def __len__(self) -> int:
        return len(self._slots()) - 1

    def __iter__(self) -> Iterator[TextBuffer]:
        for element in self._slots():
            if element is END_MARKER:
                return
            yield element

    def __getitem__(self, index: int) -> TextBuffer:
        units = self._slots()[:-1]
        return units[index]

    def texts(self) -> List[str]:
        return [unit.text for unit in self]

    def release(self) -> None:
        units = list(self)
        self._elements = None
        for unit in units:
            if unit.live:
                unit.release()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._elements is not None:
            self.release()
        return False

    def __repr__(self) -> str:
        if self._elements is None:
            return "UnitArray(<freed>)"
        return f"UnitArray({self.texts()!r})"


__all__ = ["END_MARKER", "UnitArray"]
