"""Telemetry for buffer operations, built directly on telelog.

Every engine operation runs inside ``span("utf8::<operation>", ...)``, which
profiles the call, tracks it under its component (``slicing``, ``concat``,
``arrays`` ...) and logs a failure line if it raises. Operations that have to
release inputs before failing report it through ``SpanHandle.cleanup`` so the
ownership trail ends up in the same log stream as the failure itself.

Configuration comes from ``UTF8_ENGINE_LOG_*`` variables unless a telelog
``Config`` is passed to ``configure``.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from utf8_engine.config import ENV_PREFIX

tl = cast(Any, telelog)

ENGINE_LOGGER = "utf8_engine"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env_flag(name: str) -> bool:
    raw = os.getenv(f"{ENV_PREFIX}{name}", "")
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    # raw unit bytes read better as hex than as b'\xd0\xbb' reprs
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex(" ")
    return str(value)


def _config_from_env() -> Any:
    config = tl.Config()
    config.with_min_level(os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper())
    config.with_console_output(not _env_flag("LOG_QUIET"))
    config.with_json_format(_env_flag("LOG_JSON"))
    log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    config.with_profiling(True)
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (a ``telelog.Config``), or rebuild from the environment."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = config if config is not None else _config_from_env()
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    logger_name = name or ENGINE_LOGGER
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = _config_from_env()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _emit(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    pairs = [(str(key), _stringify(value)) for key, value in payload.items()]
    structured = getattr(log, f"{level}_with", None)
    if structured is not None:
        structured(message, pairs)
        return
    plain = getattr(log, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(pairs)}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level.lower(), f"event::{name}", dict(data or {}))


@dataclass
class SpanHandle:
    """Yielded by ``span``; collects metadata reported with the operation."""

    logger: Any
    operation: str
    component: str
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, **extra: Any) -> Dict[str, Any]:
        return {"span": self.operation, "component": self.component,
                **self.metadata, **extra}

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload(reason=reason))

    def cleanup(self, released: int, reason: str) -> None:
        """Report that ``released`` owned inputs were freed on a failure path."""

        self.add_metadata("released", released)
        _emit(
            self.logger,
            "warning",
            "span::cleanup",
            self._payload(reason=reason),
        )


@contextmanager
def span(
    operation: str,
    *,
    component: str,
    metadata: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> Iterator[SpanHandle]:
    """Profile ``operation`` and track it under ``component``.

    ``metadata`` is attached as logger context for the duration of the block
    and copied onto the yielded handle.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(logger=log, operation=operation, component=component)
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)

    with ExitStack() as stack:
        stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(operation))
        for key, value in handle.metadata.items():
            log.add_context(key, value)
        stack.callback(_drop_context, log, list(handle.metadata))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


def _drop_context(log: Any, keys: list[str]) -> None:
    for key in keys:
        log.remove_context(key)


__all__ = [
    "ENGINE_LOGGER",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
