"""Durable, newest-first collections of URL records."""

from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from pathlib import Path
from typing import Generic, MutableSequence, TypeVar

from browser_data.models import UrlRecord
from .atomic import write_text_atomic
from .codec import decode_records, encode_records
from .errors import DecodeError, PersistError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=UrlRecord)


class ContainerStrategy(Enum):
    """Container used to hold a store's records in memory.

    ARRAY keeps records in a ``list``: constant-time indexed reads, suited to
    collections that are read often and changed rarely (bookmarks).
    LINKED keeps records in a ``deque``: constant-time appends, suited to
    collections that grow constantly and are rarely indexed (history).
    """
    ARRAY = "array"
    LINKED = "linked"

    def new_container(self, items=()) -> MutableSequence:
        if self is ContainerStrategy.LINKED:
            return deque(items)
        return list(items)


class PersistedRecordStore(Generic[T]):
    """Sorted collection of records mirrored to a single file.

    Opening the store loads the file if there is one. Every mutating call
    rewrites the whole file. One store instance is expected to own its file;
    nothing guards against two instances or processes writing the same path.

    Args:
        path: Backing file
        record_type: Record class stored in the file
        strategy: In-memory container choice

    Raises:
        DecodeError: If the backing file exists but cannot be decoded
    """

    def __init__(
        self,
        path: Path | str,
        record_type: type[T],
        strategy: ContainerStrategy = ContainerStrategy.ARRAY,
    ):
        self._path = Path(path)
        self._record_type = record_type
        self._strategy = strategy
        self._items: MutableSequence[T] = strategy.new_container()
        self._load()

    # ------------------------------------------------------------------ Properties
    @property
    def path(self) -> Path:
        return self._path

    @property
    def record_type(self) -> type[T]:
        return self._record_type

    @property
    def strategy(self) -> ContainerStrategy:
        return self._strategy

    def __len__(self) -> int:
        return len(self._items)

    # ------------------------------------------------------------------ Public API
    def list_items(self) -> list[T]:
        """Return copies of all records, newest first."""
        self._sort()
        return [item.clone() for item in self._items]

    def add(self, item: T) -> None:
        """Add a record and persist the collection.

        Raises:
            PersistError: If the file could not be written. The record stays
                in memory.
        """
        if not isinstance(item, self._record_type):
            raise TypeError(
                f"Expected {self._record_type.__name__}, got {type(item).__name__}"
            )
        self._items.append(item)
        self._sort()
        self._save()

    def remove(self, item: T) -> bool:
        """Remove the first record equal to ``item``.

        Nothing is written when no record matches.

        Returns:
            True if a record was removed

        Raises:
            PersistError: If the file could not be written after removal
        """
        try:
            self._items.remove(item)
        except ValueError:
            logger.debug("No matching record to remove from %s", self._path)
            return False
        self._save()
        return True

    def clear(self) -> None:
        """Remove every record and persist the empty collection."""
        self._items.clear()
        self._save()

    # ------------------------------------------------------------------ Internals
    def _sort(self) -> None:
        # Stable, so records sharing a timestamp keep insertion order.
        ordered = sorted(self._items)
        self._items.clear()
        self._items.extend(ordered)

    def _load(self) -> None:
        if not self._path.is_file():
            if self._path.exists():
                logger.warning("Store path %s is not a regular file; starting empty", self._path)
            return
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DecodeError(f"Stored records cannot be read: {exc}", self._path) from exc

        records = decode_records(text, self._record_type, source=str(self._path))
        self._items = self._strategy.new_container(records)
        self._sort()
        logger.debug("Loaded %d records from %s", len(self._items), self._path)

    def _save(self) -> None:
        blob = encode_records(self._items, self._record_type)
        try:
            self._write_atomic(blob)
        except OSError as exc:
            logger.error("Failed to write %s: %s", self._path, exc)
            raise PersistError(f"Records could not be saved: {exc}", self._path) from exc
        logger.debug("Saved %d records to %s", len(self._items), self._path)

    def _write_atomic(self, blob: str) -> None:
        write_text_atomic(self._path, blob)
