"""Logging utilities for nightfall modules."""

import logging
from typing import Iterable

NIGHTFALL_LOGGERS = (
    'nightfall',
    'nightfall.client',
    'nightfall.api',
    'nightfall.scan',
    'nightfall.upload',
    'nightfall.upload.chunk',
    'nightfall.upload.file',
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers

    Args:
        name: Logger name (typically 'nightfall.<area>')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    # Only set default level if root logger has no handlers
    # (i.e., basicConfig hasn't been called yet)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def set_level(level: int, names: Iterable[str] = NIGHTFALL_LOGGERS) -> None:
    """Set the level on every nightfall logger and keep propagation on."""
    for logger_name in names:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True
