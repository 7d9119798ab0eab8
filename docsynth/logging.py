"""Logging setup for docsynth runs.

Every component logs below the ``docsynth`` logger. Progress of a run
(files found, stage n of m written) is reported at INFO; filter decisions
and discovery counters only show up with ``--verbose``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

LOGGER_NAME = "docsynth"

CONSOLE_FORMAT = "[docsynth] %(levelname)s %(message)s"
VERBOSE_CONSOLE_FORMAT = "[docsynth:%(module)s] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``docsynth.<name>``, or the package logger when ``name`` is empty."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


def reset_logging() -> None:
    """Detach and close handlers installed by :func:`configure_logging`."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route docsynth logs to ``stream`` (stderr by default) and optionally a file.

    Calling this again replaces the previous handlers.
    """
    reset_logging()
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    console = logging.StreamHandler(stream)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(VERBOSE_CONSOLE_FORMAT if verbose else CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # The file always gets the full trace, whatever the console level.
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger", "reset_logging"]
