"""Tabs vs Spaces: a two-option vote service backed by a single SQL table."""

__version__ = "0.1.0"
