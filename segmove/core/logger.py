"""
Centralized logger configuration for segmove.

By default, uses Python's standard logging under the 'segmove' namespace.
A custom logger (structlog, loguru, ...) can be injected for every component.

Usage:
    from segmove.core.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Message")

    from segmove.core.logger import set_logger
    import structlog
    set_logger(structlog.get_logger())
"""

import logging
from typing import Any

_custom_logger: Any = None


def set_logger(logger: Any) -> None:
    """
    Set a custom logger for all segmove components.

    Args:
        logger: A logger instance supporting debug/info/warning/error/exception.
                Pass None to go back to standard logging.
    """
    global _custom_logger
    _custom_logger = logger


def get_logger(name: str = "segmove") -> Any:
    """
    Get a logger instance.

    Returns the custom logger if one was set via set_logger(), otherwise a
    standard logger with the given name.
    """
    if _custom_logger is not None:
        return _custom_logger

    logger = logging.getLogger(name)

    # Avoid "No handler found" warnings for library users
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger

