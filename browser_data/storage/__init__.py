"""Persistence for bookmark and history records."""

from .errors import StoreError, DecodeError, PersistError
from .atomic import write_text_atomic
from .codec import encode_records, decode_records
from .record_store import ContainerStrategy, PersistedRecordStore
from .stores import (
    BOOKMARKS_FILE_NAME,
    HISTORY_FILE_NAME,
    BookmarkStore,
    HistoryStore,
    open_bookmark_store,
    open_history_store,
)

__all__ = [
    "StoreError",
    "DecodeError",
    "PersistError",
    "write_text_atomic",
    "encode_records",
    "decode_records",
    "ContainerStrategy",
    "PersistedRecordStore",
    "BOOKMARKS_FILE_NAME",
    "HISTORY_FILE_NAME",
    "BookmarkStore",
    "HistoryStore",
    "open_bookmark_store",
    "open_history_store",
]
