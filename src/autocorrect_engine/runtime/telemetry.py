"""Logging for the engine and its hosts, backed by telelog.

Loggers come from :func:`get_logger`; structured records go through
:func:`record_event` and timed sections through :func:`span`. Settings are
read from ``AUTOCORRECT_ENGINE_*`` variables unless a named preset is chosen
with :func:`configure`.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "AUTOCORRECT_ENGINE_"
PRESETS = ("development", "production", "quiet")

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _pairs(data: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), value if isinstance(value, str) else repr(value))
            for key, value in data.items()]


def _preset_config(preset: str) -> Any:
    if preset not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'.")
    config = tl.Config()
    log_file = env("LOG_FILE")
    if preset == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif preset == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(log_file or "autocorrect.log")
        config.with_buffering(True)
    else:
        # The Textual app owns the terminal, so nothing goes to the console.
        config.with_min_level("WARNING")
        config.with_console_output(False)
        if log_file:
            config.with_file_output(log_file)
    config.with_profiling(True)
    return config


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "INFO").upper())
    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    config.with_profiling(True)
    return config


def configure(preset: Optional[str] = None) -> None:
    """Adopt a named preset (or the environment settings) for new loggers."""

    global _config
    _config = _preset_config(preset.lower()) if preset else _env_config()
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or env("LOGGER", "autocorrect_engine")
    logger = _loggers.get(logger_name)
    if logger is None:
        if _config is None:
            configure()
        logger = tl.Logger.with_config(logger_name, _config)
        _loggers[logger_name] = logger
    return logger


def _log(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    method = getattr(logger, f"{level.lower()}_with", None)
    if method is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    method(message, _pairs(data))


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log ``event::<name>`` with ``data`` attached as key/value pairs."""

    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[None]:
    """Profile the block under ``name``, tracked as ``component`` if given.

    ``metadata`` is logger context for the duration of the block. A block that
    raises is logged as ``span::fail`` before the exception propagates.
    """

    logger = get_logger(logger_name)
    context = {key: str(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        logger.add_context(key, value)
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(logger.track_component(component))
            stack.enter_context(logger.profile(name))
            yield
    except Exception as exc:
        _log(logger, "error", "span::fail", {"span": name, "reason": str(exc), **context})
        raise
    finally:
        for key in context:
            logger.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "PRESETS",
    "configure",
    "env",
    "env_flag",
    "get_logger",
    "record_event",
    "span",
]
