"""Engine configuration sourced from ``UTF8_ENGINE_*`` environment variables."""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterator, Optional

ENV_PREFIX = "UTF8_ENGINE_"


class MalformedPolicy(str, Enum):
    """How boundary navigation treats a lead byte it does not recognise."""

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    malformed: MalformedPolicy = MalformedPolicy.STRICT
    memory_limit: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "malformed", MalformedPolicy(self.malformed))
        if self.memory_limit is not None and self.memory_limit < 0:
            raise ValueError("memory_limit cannot be negative")

    @property
    def strict(self) -> bool:
        return self.malformed is MalformedPolicy.STRICT


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_int(name: str) -> Optional[int]:
    raw = _env(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got '{raw}'") from exc


def load_config() -> EngineConfig:
    """Build a config from the current environment."""

    policy = (_env("MALFORMED") or MalformedPolicy.STRICT.value).strip().lower()
    try:
        malformed = MalformedPolicy(policy)
    except ValueError as exc:
        raise ValueError(f"Unknown malformed policy '{policy}'.") from exc
    return EngineConfig(malformed=malformed, memory_limit=_env_int("MEMORY_LIMIT"))


_ACTIVE_CONFIG: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = load_config()
    return _ACTIVE_CONFIG


def set_config(config: Optional[EngineConfig]) -> None:
    """Adopt ``config``; ``None`` re-reads the environment on next access."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = config


@contextmanager
def override_config(**changes: Any) -> Iterator[EngineConfig]:
    """Temporarily replace fields of the active config."""

    previous = get_config()
    updated = replace(previous, **changes)
    set_config(updated)
    try:
        yield updated
    finally:
        set_config(previous)


__all__ = [
    "ENV_PREFIX",
    "EngineConfig",
    "MalformedPolicy",
    "get_config",
    "load_config",
    "override_config",
    "set_config",
]
