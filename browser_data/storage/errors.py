"""Errors raised by persisted record stores."""

from __future__ import annotations

from pathlib import Path


class StoreError(Exception):
    """Base class for failures reading or writing a store's backing file."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        message = super().__str__()
        return f"{message} ({self.path})" if self.path else message


class DecodeError(StoreError):
    """The backing file exists but is unreadable, truncated or malformed."""


class PersistError(StoreError):
    """Writing the backing file failed. In-memory state was already changed."""
