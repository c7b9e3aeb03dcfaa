"""Rotating file logging for the TUI.

The interface owns the terminal, so diagnostics go to a size-capped log
file under the user log directory instead of stderr.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_LEVEL_ENV = "LAZYNAV_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FILENAME = f"{APP_NAME}.log"
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_TAG_ATTR = "_lazynav_handler"

LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def resolve_level(level: str | None = None) -> int:
    """Resolve an explicit level, else the environment, else ``WARNING``."""
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).strip().upper()
    if name == "WARN":
        name = "WARNING"
    if name not in LEVEL_NAMES:
        name = DEFAULT_LOG_LEVEL
    return getattr(logging, name)


def configure_logging(level: str | None = None, log_path: Path | None = None) -> logging.Logger:
    """Attach one rotating file handler to the ``lazynav`` logger.

    Repeated calls only adjust the level. Returns the package logger.
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(resolve_level(level))
    logger.propagate = False
    if any(getattr(handler, _HANDLER_TAG_ATTR, False) for handler in logger.handlers):
        return logger

    path = log_path or default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            path,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        # Logging must never keep the navigator from starting.
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    setattr(handler, _HANDLER_TAG_ATTR, True)
    logger.addHandler(handler)
    return logger


__all__ = [
    "LEVEL_NAMES",
    "LOG_LEVEL_ENV",
    "configure_logging",
    "default_log_path",
    "resolve_level",
]
