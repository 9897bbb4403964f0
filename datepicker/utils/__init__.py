"""Utility helpers package."""

from .logging import get_log_level, setup_logging

__all__ = [
    "get_log_level",
    "setup_logging",
]
