"""Tarot oracle service guarded against prompt injection."""

__version__ = "0.1.0"
