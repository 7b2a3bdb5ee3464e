"""dlspace - disk space helpers for download management."""

__version__ = "0.1.0"
