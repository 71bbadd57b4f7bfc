"""Minimal logging utilities for nickel_pretty.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from nickel_pretty.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Translating term")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "nickel_pretty." prefix.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'nickel_pretty.mymodule'
    """
    if not (name == "nickel_pretty" or name.startswith("nickel_pretty.")):
        name = f"nickel_pretty.{name}"
    return logging.getLogger(name)
