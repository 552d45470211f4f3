"""Logging utilities for the superface agent."""

import logging
import sys

_LOGGER_NAME = "superface_agent"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance for the package.

    Args:
        name: Optional sub-logger name. If None, returns the root package logger.

    Returns:
        The requested logger.
    """
    if name:
        if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
            return logging.getLogger(name)
        return logging.getLogger(f"{_LOGGER_NAME}.{name}")
    return logging.getLogger(_LOGGER_NAME)


def setup_logging(
    level: int = logging.INFO, format_str: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
) -> None:
    """Setup default logging configuration for the package.

    This adds a StreamHandler to the package's root logger.
    Should be called by the application (the CLI does), not by library code.

    Args:
        level: Logging level.
        format_str: Log format string.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    # Avoid adding multiple handlers if called multiple times
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(format_str)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


# Set default NullHandler to avoid "No handler found" warnings
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
