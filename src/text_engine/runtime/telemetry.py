"""Logging and profiling for the text engine, built on telelog.

``configure(...)`` -- adopt a config, a named preset or the environment
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TEXT_ENGINE_"
_TRUTHY = {"1", "true", "yes", "on"}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """Logging options, normally read from ``TEXT_ENGINE_*`` variables."""

    logger_name: str = "text_engine"
    level: str = "INFO"
    log_file: str = ""
    console: bool = True
    color: bool = True
    json: bool = False
    buffered: bool = False
    buffer_size: int = 2048

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def flag(name: str, default: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{name}")
            return default if raw is None else raw.lower() in _TRUTHY

        raw_size = env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE") or "2048"
        try:
            buffer_size = int(raw_size)
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}LOG_BUFFER_SIZE must be an integer, got {raw_size!r}"
            ) from exc

        return cls(
            logger_name=env.get(f"{ENV_PREFIX}LOGGER") or "text_engine",
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE") or "",
            console=not flag("DISABLE_CONSOLE", False),
            color=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            buffered=flag("LOG_BUFFERED", False),
            buffer_size=buffer_size,
        )


SETTINGS = TelemetrySettings.from_env()


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _with_profiling(config: Any) -> Any:
    config.with_profiling(True)
    return config


def build_config(settings: TelemetrySettings) -> Any:
    """Translate settings into a ``telelog.Config``."""

    config = tl.Config()
    config.with_min_level(settings.level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.color)
    if settings.json:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    return _with_profiling(config)


def build_preset(preset: str, settings: TelemetrySettings = SETTINGS) -> Any:
    key = preset.lower()
    config = tl.Config()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
        config.with_json_format(False)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(settings.log_file or "text_engine.log")
        config.with_buffering(True)
    elif key in {"performance", "performance_analysis"}:
        config.with_min_level("DEBUG")
        config.with_console_output(False)
        config.with_json_format(True)
        config.with_file_output(settings.log_file or "text_engine-performance.log")
        config.with_buffering(True)
    else:
        raise ValueError(f"Unknown preset '{preset}'.")

    return _with_profiling(config)


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``config`` is an explicit ``telelog.Config``; ``preset`` names one of
    ``"development"``, ``"production"`` or ``"performance"``. Without either
    the environment settings are used. Cached loggers are dropped.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = build_preset(preset)
    elif config is None:
        config = build_config(SETTINGS)

    _ACTIVE_CONFIG = _with_profiling(config)
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = build_config(SETTINGS)
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` using the active configuration."""

    logger_name = name or SETTINGS.logger_name
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    """Return the logging callable for ``level`` and whether it takes pairs."""

    name = str(level).lower()
    with_pairs = getattr(logger, f"{name}_with", None)
    if with_pairs is not None:
        return with_pairs, True
    method = getattr(logger, name, None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return method, False


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    method, with_pairs = _level_method(logger, level)
    if with_pairs:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` as key/value pairs."""

    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Handle yielded by ``span`` for metadata updates and failure reports."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _report(
        self, level: str, message: str, extra: Optional[Dict[str, Any]] = None
    ) -> None:
        payload = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        _emit(self.logger, level, message, payload)

    def fail(self, reason: str) -> None:
        self._report("error", "span::fail", {"reason": reason})

    def cancel(self, reason: str | None = None) -> None:
        self._report("warning", "span::cancel", {"reason": reason} if reason else None)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracking it as a telelog component.

    ``component=True`` reuses ``name`` as the component id. ``metadata`` is
    pushed as logger context for the duration of the block. An exception
    escaping the block is reported through ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None

    context: Dict[str, str] = {}
    for key, value in (metadata or {}).items():
        context[key] = _stringify(value)
        log.add_context(key, context[key])

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=cast(Optional[str], component_name),
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in context:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "ENV_PREFIX",
    "SETTINGS",
    "SpanHandle",
    "TelemetrySettings",
    "build_config",
    "build_preset",
    "configure",
    "get_logger",
    "logger",
    "record_event",
    "span",
]
