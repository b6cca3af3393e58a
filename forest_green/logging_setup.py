"""Logging configuration helpers for the frame synthesizer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

DEFAULT_LOGGER_NAME = "forest_green"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def parse_level(value: Optional[str], default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(
    logger_name: Optional[str] = None,
    *,
    level: int = logging.INFO,
    log_file: Union[str, Path, None] = None,
) -> logging.Logger:
    """Log to stderr and, when ``log_file`` is given, to that file as well.

    A log file that cannot be opened is reported as a warning; the run then
    continues with stderr logging only.
    """
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(Path(log_file), encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    for handler in handlers:
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)

    logger = logging.getLogger(logger_name or DEFAULT_LOGGER_NAME)
    logger.setLevel(level)
    if file_error is not None:
        logger.warning("Cannot open log file '%s', logging to stderr only: %s", log_file, file_error)
    return logger


__all__ = ["configure_logging", "parse_level"]
