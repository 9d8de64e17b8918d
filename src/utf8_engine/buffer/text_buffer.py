"""Owned, move-only byte buffer handle."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Optional, Tuple

from utf8_engine.errors import ConsumedBufferError, InvalidArgumentError
from utf8_engine.runtime.allocator import BufferAllocator, get_allocator


class TextBuffer(AbstractContextManager["TextBuffer"]):
    """Single-owner UTF-8 storage registered with a ``BufferAllocator``.

    Borrowing operations only read through ``view()``. Consuming operations
    detach the storage, after which this handle refuses every access. Using
    the handle as a context manager releases it on exit unless it was
    consumed inside the block.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self, data: bytes = b"", *, allocator: Optional[BufferAllocator] = None
    ) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidArgumentError(
                f"TextBuffer expects bytes, got {type(data).__name__}"
            )
        self._allocator = allocator or get_allocator()
        self._token: Optional[int] = self._allocator.allocate(len(data))
        self._data = bytearray(data)

    @classmethod
    def from_text(
        cls, text: str, *, allocator: Optional[BufferAllocator] = None
    ) -> "TextBuffer":
        return cls(text.encode("utf-8"), allocator=allocator)

    @classmethod
    def _adopt(
        cls, data: bytearray, token: int, allocator: BufferAllocator
    ) -> "TextBuffer":
        handle = cls.__new__(cls)
        handle._allocator = allocator
        handle._token = token
        handle._data = data
        return handle

    @property
    def live(self) -> bool:
        return self._token is not None

    @property
    def allocator(self) -> BufferAllocator:
        return self._allocator

    def _storage(self) -> bytearray:
        if self._token is None:
            raise ConsumedBufferError("Buffer was released or consumed")
        return self._data

    def view(self) -> bytes:
        """Read-only snapshot of the current contents."""

        return bytes(self._storage())

    @property
    def text(self) -> str:
        return self._storage().decode("utf-8")

    def _grow(self, extra: bytes) -> None:
        storage = self._storage()
        self._allocator.grow(self._token, len(storage) + len(extra))
        storage.extend(extra)

    def _detach(self) -> Tuple[bytearray, int, BufferAllocator]:
        """Move the storage out; the allocation stays live for the new owner."""

        storage = self._storage()
        token = self._token
        self._token = None
        self._data = bytearray()
        return storage, token, self._allocator

    def release(self) -> None:
        if self._token is None:
            raise ConsumedBufferError("Buffer was already released or consumed")
        token = self._token
        self._token = None
        self._data = bytearray()
        self._allocator.release(token)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._token is not None:
            self.release()
        return False

    def __len__(self) -> int:
        return len(self._storage())

    def __bytes__(self) -> bytes:
        return self.view()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextBuffer):
            return self._storage() == other._storage()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._storage() == bytes(other)
        if isinstance(other, str):
            return self._storage() == other.encode("utf-8")
        return NotImplemented

    def __repr__(self) -> str:
        if self._token is None:
            return "TextBuffer(<consumed>)"
        return f"TextBuffer({self.text!r})"
