"""Concurrent maze exploration."""

__version__ = "1.0.0"
