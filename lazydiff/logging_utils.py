"""
Logging configuration helpers for lazydiff.

The dashboard owns the terminal while it runs, so log records never go to
stderr. They are written to a file, and only when asked for.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazydiff"
LOG_FILENAME = "lazydiff.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    """Return the per-user log file location."""
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def verbosity_to_level(verbosity: int) -> int:
    """
    Map a ``-v`` count onto a logging level.

    verbosity == 0 -> WARNING
    verbosity == 1 -> INFO
    verbosity >= 2 -> DEBUG
    """
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int, log_file: Path | None = None) -> Path | None:
    """
    Configure the ``lazydiff`` logger and return the file it writes to.

    Without ``-v`` and without an explicit ``log_file`` nothing is attached and
    records are dropped by a ``NullHandler``.
    """
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if verbosity <= 0 and log_file is None:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.WARNING)
        return None

    target = log_file if log_file is not None else default_log_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(verbosity_to_level(verbosity))
    return target
