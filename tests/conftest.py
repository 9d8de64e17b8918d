from __future__ import annotations

from typing import Iterator

import pytest

from utf8_engine.config import EngineConfig, set_config
from utf8_engine.runtime.allocator import BufferAllocator, use_allocator


@pytest.fixture(autouse=True)
def engine_config() -> Iterator[EngineConfig]:
    config = EngineConfig()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture(autouse=True)
def allocator(engine_config: EngineConfig) -> Iterator[BufferAllocator]:
    with use_allocator(BufferAllocator()) as active:
        yield active
