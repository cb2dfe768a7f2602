"""Process-wide logging configuration."""

from __future__ import annotations

import atexit
import logging
from typing import List

from .config import get_log_file, get_log_level

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_HANDLERS: List[logging.Handler] = []


def configure_logging(logger_name: str | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers once per process.

    Later calls return the already configured logger unchanged.
    """

    logger = logging.getLogger(logger_name)
    if _HANDLERS:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    _HANDLERS.append(console_handler)

    log_file = get_log_file()
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        _HANDLERS.append(file_handler)

    for handler in _HANDLERS:
        logger.addHandler(handler)
    logger.setLevel(get_log_level())

    atexit.register(shutdown_logging, logger_name)
    return logger


def shutdown_logging(logger_name: str | None = None) -> None:
    """Flush, close and detach the handlers installed by configure_logging."""

    logger = logging.getLogger(logger_name)
    while _HANDLERS:
        handler = _HANDLERS.pop()
        logger.removeHandler(handler)
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            # The underlying stream may already be closed at interpreter exit.
            pass


__all__ = ["LOG_FORMAT", "configure_logging", "shutdown_logging"]
