"""Centralized logging configuration."""

import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} - {message}"


def _stderr_sink(message) -> None:
    sys.stderr.write(message)


def configure_logging(level: Optional[str] = None, sink=None) -> None:
    """Configure Loguru with a single sink and the standard format.

    Safe to call repeatedly; each call replaces the previous sink.

    Args:
        level: Minimum level name (defaults to WARNING)
        sink: Destination (defaults to whatever sys.stderr is at write time)
    """
    logger.remove()
    logger.add(
        sink if sink is not None else _stderr_sink,
        level=(level or "WARNING").upper(),
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
