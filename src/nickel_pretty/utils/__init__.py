"""Utility modules for nickel_pretty.

Provides:
- logger: get_logger for logging
"""

from nickel_pretty.utils.logger import get_logger

__all__ = [
    "get_logger",
]
