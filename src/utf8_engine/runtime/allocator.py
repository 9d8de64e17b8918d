"""Bookkeeping heap for owned text buffers.

Every ``TextBuffer`` registers its storage here when it is created, reports
growth, and deregisters exactly once when it is released or consumed. The
allocator can enforce a byte budget, which is how out-of-memory paths are
reached deterministically, and its stats expose leaks and double frees.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from itertools import count
from typing import Dict, Iterator, Optional

from utf8_engine.config import get_config
from utf8_engine.errors import ConsumedBufferError, OutOfMemoryError
from utf8_engine.runtime import telemetry


@dataclass(slots=True)
class AllocatorStats:
    """Lightweight snapshot describing allocator state."""

    allocations: int
    releases: int
    live_count: int
    live_bytes: int
    peak_bytes: int


class BufferAllocator:
    """Tracks live buffer storage by token."""

    def __init__(
        self, *, limit_bytes: Optional[int] = None, logger_name: str | None = None
    ) -> None:
        if limit_bytes is not None and limit_bytes < 0:
            raise ValueError("limit_bytes cannot be negative")
        self.limit_bytes = limit_bytes
        self._live: Dict[int, int] = {}
        self._live_bytes = 0
        self._tokens = count(1)
        self._allocations = 0
        self._releases = 0
        self._peak = 0
        self._logger_name = logger_name

    @property
    def live_bytes(self) -> int:
        return self._live_bytes

    def _check_budget(self, additional: int) -> None:
        if self.limit_bytes is None:
            return
        requested = self._live_bytes + additional
        if requested > self.limit_bytes:
            telemetry.record_event(
                "allocator.exhausted",
                level="warning",
                data={"requested": additional, "limit": self.limit_bytes},
                logger_name=self._logger_name,
            )
            raise OutOfMemoryError(additional, limit=self.limit_bytes)

    def allocate(self, size: int) -> int:
        """Reserve ``size`` bytes and return the token identifying them."""

        if size < 0:
            raise ValueError("size cannot be negative")
        self._check_budget(size)
        token = next(self._tokens)
        self._live[token] = size
        self._live_bytes += size
        self._allocations += 1
        self._peak = max(self._peak, self._live_bytes)
        return token

    def grow(self, token: int, size: int) -> None:
        """Resize the reservation behind ``token`` to ``size`` bytes."""

        current = self._live.get(token)
        if current is None:
            raise ConsumedBufferError(f"Allocation {token} is not live")
        if size > current:
            self._check_budget(size - current)
        self._live[token] = size
        self._live_bytes += size - current
        self._peak = max(self._peak, self._live_bytes)

    def release(self, token: int) -> None:
        size = self._live.pop(token, None)
        if size is None:
            telemetry.record_event(
                "allocator.double_release",
                level="error",
                data={"token": token},
                logger_name=self._logger_name,
            )
            raise ConsumedBufferError(f"Allocation {token} was already released")
        self._live_bytes -= size
        self._releases += 1

    def stats(self) -> AllocatorStats:
        return AllocatorStats(
            allocations=self._allocations,
            releases=self._releases,
            live_count=len(self._live),
            live_bytes=self.live_bytes,
            peak_bytes=self._peak,
        )


_ACTIVE_ALLOCATOR: Optional[BufferAllocator] = None


def get_allocator() -> BufferAllocator:
    global _ACTIVE_ALLOCATOR
    if _ACTIVE_ALLOCATOR is None:
        _ACTIVE_ALLOCATOR = BufferAllocator(
            limit_bytes=get_config().memory_limit,
            logger_name="utf8_engine.allocator",
        )
    return _ACTIVE_ALLOCATOR


@contextmanager
def use_allocator(allocator: BufferAllocator) -> Iterator[BufferAllocator]:
    """Make ``allocator`` the active one for the duration of the block."""

    global _ACTIVE_ALLOCATOR
    previous = _ACTIVE_ALLOCATOR
    _ACTIVE_ALLOCATOR = allocator
    try:
        yield allocator
    finally:
        _ACTIVE_ALLOCATOR = previous


__all__ = [
    "AllocatorStats",
    "BufferAllocator",
    "get_allocator",
    "use_allocator",
]
