"""Logging helpers for newtonstep.

Every module obtains its logger through :func:`get_logger`. Loggers live under
the ``newtonstep`` namespace, write to stderr and do not propagate to the root
logger, so the library stays quiet (WARNING and above) unless the application
opts in with :func:`set_log_level` or :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT_NAME = "newtonstep"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_level: int = logging.WARNING
_format: str = _DEFAULT_FORMAT
_stream: Optional[IO[str]] = None

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown logging level: {level!r}")
        return value
    return int(level)


def _make_handler() -> logging.Handler:
    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(_format))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for ``name`` inside the newtonstep namespace.

    Args:
        name: Usually ``__name__`` of the calling module. Names outside the
            ``newtonstep`` namespace are nested under it; ``None`` gives the
            package logger.

    Returns:
        A configured, non-propagating logger.

    Example:
        >>> from newtonstep.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("starting Newton iteration")
    """
    if name is None or name == _ROOT_NAME:
        logger_name = _ROOT_NAME
    elif name.startswith(_ROOT_NAME + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT_NAME}.{name}"

    cached = _loggers.get(logger_name)
    if cached is not None:
        return cached

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_level)
        logger.addHandler(_make_handler())
        logger.propagate = False
    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every newtonstep logger, existing and future.

    Args:
        level: A ``logging`` level constant or its name (``"DEBUG"`` etc.).

    Raises:
        ValueError: If a level name is not recognised.
    """
    global _level
    _level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Reconfigure level, format and output stream of all newtonstep loggers.

    Intended to be called once at application start-up; existing handlers
    are replaced.

    Args:
        level: Logging level (default WARNING).
        format_string: Record format; defaults to ``[LEVEL] name: message``.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _level, _format, _stream
    _level = _coerce_level(level)
    _format = format_string or _DEFAULT_FORMAT
    _stream = stream
    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler())


__all__ = ["configure_logging", "get_logger", "set_log_level"]
