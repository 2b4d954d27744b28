"""Structuring, scheduling and checking of courses written as Markdown books."""

__version__ = "0.1.0"