# === FILE: micrawl/logger.py ===
"""Logging setup for Micrawl.

Everything logs through the ``"Micrawl"`` logger: progress lines go to stdout,
and ``--log-file`` adds a size-rotated copy on disk.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

LOGGER_NAME: Final[str] = "Micrawl"
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(message)s"

#: rotate the logfile at 5 MiB, keep three old copies
MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
LOG_BACKUPS: Final[int] = 3


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Reset the Micrawl logger's handlers and return it."""
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
            )
        )

    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    for old in lg.handlers:
        old.close()
    lg.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["LOGGER_NAME", "init_logging", "logger"]
