"""Bookmark, history and back/forward navigation core for a small web browser."""

__version__ = "0.1.0"
