"""Errors raised when building model values."""


class InvalidRecordError(ValueError):
    """A required field of a URL, record or bookmark is missing or invalid."""
