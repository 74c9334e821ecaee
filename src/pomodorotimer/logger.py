"""File logging for the timer.

The live countdown owns the terminal, so phase changes, transitions,
interrupts and display write failures are recorded in a rotating file under
the user's log directory instead. Modules log through
``logging.getLogger(__name__)``; :func:`setup_logging` attaches the file
handler to the package logger they all share.
"""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "pomodorotimer"
LOG_FILE_NAME = "pomodorotimer.log"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUPS = 2


def log_path() -> Path:
    return Path(user_log_dir(APP_NAME)) / LOG_FILE_NAME


def setup_logging(verbose: bool = False) -> Path:
    """Send package log records to the log file and return its path.

    ``verbose`` also records every phase start and end and each transition.
    Calling it again only changes the level.
    """
    package_logger = logging.getLogger(APP_NAME)
    path = log_path()
    if not any(isinstance(handler, RotatingFileHandler) for handler in package_logger.handlers):
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    # keep records off the terminal while the countdown is drawing
    package_logger.propagate = False
    return path
