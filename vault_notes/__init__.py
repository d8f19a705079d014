"""Create vault notes and covers from public metadata APIs."""

__version__ = "0.1.0"
