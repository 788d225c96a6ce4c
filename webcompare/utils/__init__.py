"""Utility functions and classes."""

from .logger import CompareLogger, compare_logger, console

__all__ = [
    "CompareLogger",
    "compare_logger",
    "console",
]
