"""Bookmark and history stores.

Each kind of record gets its own backing file and container strategy.
Bookmarks change rarely and are browsed by position, so they live in a list.
History is appended to on every page visit, so it lives in a deque.
"""

from __future__ import annotations

from pathlib import Path

from browser_data.models import BookmarkItem, HistoryItem
from .record_store import ContainerStrategy, PersistedRecordStore

BOOKMARKS_FILE_NAME = "bookmarks.yaml"
HISTORY_FILE_NAME = "history.yaml"

BookmarkStore = PersistedRecordStore[BookmarkItem]
HistoryStore = PersistedRecordStore[HistoryItem]


def open_bookmark_store(
    data_dir: Path | str,
    file_name: str = BOOKMARKS_FILE_NAME,
) -> BookmarkStore:
    """Open the bookmark store under ``data_dir``.

    Raises:
        DecodeError: If an existing bookmark file cannot be read
    """
    return PersistedRecordStore(Path(data_dir) / file_name, BookmarkItem, ContainerStrategy.ARRAY)


def open_history_store(
    data_dir: Path | str,
    file_name: str = HISTORY_FILE_NAME,
) -> HistoryStore:
    """Open the history store under ``data_dir``.

    Raises:
        DecodeError: If an existing history file cannot be read
    """
    return PersistedRecordStore(Path(data_dir) / file_name, HistoryItem, ContainerStrategy.LINKED)
