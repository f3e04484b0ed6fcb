"""Utility modules for Pincel.

Provides:
- logger: get_logger for logging
"""

from pincel.utils.logger import get_logger

__all__ = [
    "get_logger",
]
