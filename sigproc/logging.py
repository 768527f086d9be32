"""Logging utilities for sigproc.

Loggers live under the ``sigproc.`` namespace and write to stderr. The level
comes from ``settings.log_level`` (``SIGPROC_LOG_LEVEL`` in the environment).
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from sigproc.config import settings

_loggers: dict[str, logging.Logger] = {}


def _level() -> int:
    level = logging.getLevelName(str(settings.log_level).upper())
    return level if isinstance(level, int) else logging.WARNING


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Args:
        name: Logger name, typically ``__name__``. ``None`` gives the package
            logger.
    Returns:
        Configured logger instance (cached per name).
    """
    if name is None:
        name = "sigproc"
    logger_name = name if name == "sigproc" or name.startswith("sigproc.") else f"sigproc.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_level())
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_level(level: int | str) -> None:
    """Change the level of every logger created so far."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    for logger in _loggers.values():
        logger.setLevel(level)
