# libs/cart_shared/logging.py
"""
Standardized logging configuration for the active order service.
"""

import logging
import sys
from typing import Optional

_ROOT_NAMESPACE = "active_order"


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name, typically __name__ from the calling module

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "message": "%(message)s"}'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_logging(level: Optional[str] = None, names: Optional[list] = None) -> None:
    """
    Apply a log level to the service loggers.

    Args:
        level: Level name such as "DEBUG" or "INFO" (defaults to INFO)
        names: Logger names to configure, defaults to the service namespace
    """
    resolved = logging.getLevelName((level or "INFO").upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    for name in names or [_ROOT_NAMESPACE, "libs.cart_shared"]:
        logging.getLogger(name).setLevel(resolved)
