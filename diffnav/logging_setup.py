"""File-only logging configuration.

The TUI owns stdout/stderr while running, so log records only ever go to a
rotating file when one is configured. Without a file, a ``NullHandler`` keeps
library loggers quiet.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_ENV = "DIFFNAV_LOG_FILE"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUP_COUNT = 2

_HANDLER_TAG_ATTR = "_diffnav_handler"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.INFO
    return _LEVELS.get(level.strip().upper(), logging.INFO)


def configure_logging(log_file: str | None = None, level: str | None = None) -> logging.Logger:
    """Attach diffnav's handler to the package logger and return that logger.

    ``log_file`` falls back to ``$DIFFNAV_LOG_FILE``. Calling again replaces
    the handler installed by a previous call.
    """
    package_logger = logging.getLogger("diffnav")
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_TAG_ATTR, False):
            package_logger.removeHandler(handler)
            handler.close()

    target = log_file or os.environ.get(LOG_FILE_ENV) or None
    handler: logging.Handler
    if target:
        path = Path(target).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                path,
                maxBytes=LOG_MAX_BYTES,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except OSError:
            handler = logging.NullHandler()
        else:
            handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATEFMT))
    else:
        handler = logging.NullHandler()

    setattr(handler, _HANDLER_TAG_ATTR, True)
    package_logger.addHandler(handler)
    package_logger.setLevel(_parse_level(level))
    package_logger.propagate = False
    return package_logger
