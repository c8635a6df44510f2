"""
Logging helpers.

Library modules get their loggers with logging.getLogger(__name__), all
children of the "tickcore" logger, and never install handlers themselves.
Demos and host runners call setup_default_logging() once at startup to
get the core's warnings (clock regressions, failing callbacks) on stderr.
"""

from __future__ import annotations
from typing import TextIO

import logging

PACKAGE_LOGGER = "tickcore"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_default_logging(
    level: int | str = "INFO", stream: TextIO | None = None
) -> logging.Logger:
    """
    Attach a stream handler to the "tickcore" logger.

    Idempotent: if the package logger already has a handler, only its level
    is updated. The root logger is left alone so host applications keep
    their own configuration.

    Returns:
        The package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)
    if not pkg_logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        pkg_logger.addHandler(handler)
    return pkg_logger


__all__ = ["setup_default_logging", "PACKAGE_LOGGER"]
