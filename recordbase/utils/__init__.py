"""
Utilities package for recordbase.

Exports shared logging helpers. Keep this package free of mapping logic.
"""

from recordbase.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
