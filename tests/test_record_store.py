"""Tests for PersistedRecordStore and the YAML record codec."""

from __future__ import annotations

import os
import stat
from collections import deque
from datetime import timedelta

import pytest
import yaml

from browser_data.models import BookmarkItem, HistoryItem
from browser_data.storage import (
    ContainerStrategy,
    DecodeError,
    PersistError,
    PersistedRecordStore,
    decode_records,
    encode_records,
)


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "records" / "bookmarks.yaml"


@pytest.fixture
def bookmark_store(store_path):
    return PersistedRecordStore(store_path, BookmarkItem, ContainerStrategy.ARRAY)


class TestOpen:

    def test_missing_file_starts_empty(self, bookmark_store, store_path):
        assert bookmark_store.list_items() == []
        assert len(bookmark_store) == 0
        assert not store_path.exists()

    def test_directory_path_starts_empty(self, tmp_path):
        store = PersistedRecordStore(tmp_path, BookmarkItem)
        assert store.list_items() == []

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "format_version: 1\nrecord_type: bookmark\ncount: 2\nrecords:\n  - url: http://a.example\n",
            "records: [unclosed",
            "- just\n- a\n- list\n",
            "format_version: 99\nrecord_type: bookmark\ncount: 0\nrecords: []\n",
            "format_version: 1\nrecord_type: bookmark\ncount: 0\n",
            "format_version: 1\nrecord_type: bookmark\ncount: 1\nrecords:\n  - url: http://a.example\n    title: A\n",
            "format_version: 1\nrecord_type: bookmark\ncount: 1\nrecords:\n  - created_at: 2024-01-01 10:00:00\n    title: A\n",
            "format_version: 1\nrecord_type: bookmark\ncount: 1\nrecords:\n  - not a mapping\n",
        ],
        ids=[
            "empty",
            "truncated",
            "invalid-yaml",
            "not-mapping",
            "unknown-version",
            "no-records",
            "no-timestamp",
            "no-url",
            "record-not-mapping",
        ],
    )
    def test_damaged_file_raises_decode_error(self, store_path, content):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(content, encoding="utf-8")

        with pytest.raises(DecodeError):
            PersistedRecordStore(store_path, BookmarkItem)

    def test_cut_short_file_raises_decode_error(self, bookmark_store, store_path, sample_bookmarks):
        for bookmark in sample_bookmarks:
            bookmark_store.add(bookmark)
        text = store_path.read_text(encoding="utf-8")
        store_path.write_text(text[: len(text) // 2], encoding="utf-8")

        with pytest.raises(DecodeError):
            PersistedRecordStore(store_path, BookmarkItem)

    def test_wrong_record_type_raises_decode_error(self, tmp_path, sample_history):
        path = tmp_path / "history.yaml"
        history = PersistedRecordStore(path, HistoryItem, ContainerStrategy.LINKED)
        history.add(sample_history[0])

        with pytest.raises(DecodeError):
            PersistedRecordStore(path, BookmarkItem)

    def test_decode_error_carries_path(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("", encoding="utf-8")

        with pytest.raises(DecodeError) as excinfo:
            PersistedRecordStore(store_path, BookmarkItem)
        assert excinfo.value.path == store_path

    def test_offset_and_local_timestamps_load_together(self, tmp_path):
        path = tmp_path / "history.yaml"
        path.write_text(
            "format_version: 1\nrecord_type: history\ncount: 2\nrecords:\n"
            "  - url: http://a.example\n    created_at: 2024-01-01 10:00:00+00:00\n"
            "  - url: http://b.example\n    created_at: 2024-01-02 10:00:00\n",
            encoding="utf-8",
        )

        store = PersistedRecordStore(path, HistoryItem, ContainerStrategy.LINKED)
        items = store.list_items()

        assert [str(item.url) for item in items] == ["http://b.example", "http://a.example"]
        assert all(item.created_at.tzinfo is None for item in items)

    def test_add_to_store_loaded_with_offset_timestamps(self, tmp_path):
        path = tmp_path / "history.yaml"
        path.write_text(
            "format_version: 1\nrecord_type: history\ncount: 1\nrecords:\n"
            "  - url: http://a.example\n    created_at: 2024-01-01 10:00:00+00:00\n",
            encoding="utf-8",
        )
        store = PersistedRecordStore(path, HistoryItem, ContainerStrategy.LINKED)

        store.add(HistoryItem("http://b.example"))

        reopened = PersistedRecordStore(path, HistoryItem, ContainerStrategy.LINKED)
        assert [str(item.url) for item in reopened.list_items()] == ["http://b.example", "http://a.example"]


class TestAddAndList:

    def test_add_to_empty_store(self, bookmark_store):
        bookmark = BookmarkItem("http://example.com", "Example")
        bookmark_store.add(bookmark)

        assert bookmark_store.list_items() == [bookmark]
        assert len(bookmark_store) == 1

    def test_list_is_newest_first(self, bookmark_store, sample_bookmarks):
        for bookmark in sample_bookmarks:
            bookmark_store.add(bookmark)

        items = bookmark_store.list_items()

        assert [item.title for item in items] == ["C", "B", "A"]
        for earlier, later in zip(items, items[1:]):
            assert earlier.created_at >= later.created_at

    def test_list_returns_copies(self, bookmark_store, sample_bookmarks):
        bookmark_store.add(sample_bookmarks[0])

        first = bookmark_store.list_items()
        first.clear()
        second = bookmark_store.list_items()

        assert second == [sample_bookmarks[0]]
        assert second[0] is not sample_bookmarks[0]

    def test_add_rejects_other_record_types(self, bookmark_store):
        with pytest.raises(TypeError):
            bookmark_store.add(HistoryItem("http://example.com"))

    def test_round_trip_through_file(self, bookmark_store, store_path, base_time):
        bookmark = BookmarkItem("http://example.com", "Example", created_at=base_time)
        bookmark_store.add(bookmark)

        reopened = PersistedRecordStore(store_path, BookmarkItem)
        items = reopened.list_items()

        assert items == [bookmark]
        assert items[0].title == "Example"
        assert items[0].created_at.microsecond == 123456

    def test_add_creates_parent_directory(self, bookmark_store, store_path):
        bookmark_store.add(BookmarkItem("http://example.com", "Example"))
        assert store_path.is_file()

    def test_add_leaves_no_temporary_files(self, bookmark_store, store_path):
        bookmark_store.add(BookmarkItem("http://example.com", "Example"))
        assert [p.name for p in store_path.parent.iterdir()] == ["bookmarks.yaml"]


class TestRemove:

    def test_remove_matching_item(self, bookmark_store, store_path, sample_bookmarks):
        for bookmark in sample_bookmarks:
            bookmark_store.add(bookmark)

        assert bookmark_store.remove(sample_bookmarks[1]) is True
        assert [item.title for item in bookmark_store.list_items()] == ["C", "A"]
        reopened = PersistedRecordStore(store_path, BookmarkItem)
        assert len(reopened) == 2

    def test_remove_absent_item_is_noop_without_io(self, bookmark_store, store_path, sample_bookmarks, monkeypatch):
        bookmark_store.add(sample_bookmarks[0])
        writes = []
        monkeypatch.setattr(bookmark_store, "_write_atomic", lambda blob: writes.append(blob))

        assert bookmark_store.remove(sample_bookmarks[1]) is False
        assert bookmark_store.list_items() == [sample_bookmarks[0]]
        assert writes == []

    def test_remove_on_fresh_store_writes_nothing(self, bookmark_store, store_path):
        bookmark_store.remove(BookmarkItem("http://example.com", "Example"))
        assert not store_path.exists()

    def test_remove_matches_regardless_of_title(self, bookmark_store, base_time):
        stored = BookmarkItem("http://example.com", "Stored", created_at=base_time)
        bookmark_store.add(stored)

        bookmark_store.remove(BookmarkItem("http://example.com", "Other title", created_at=base_time))

        assert bookmark_store.list_items() == []

    def test_remove_takes_only_first_match(self, bookmark_store, base_time):
        first = BookmarkItem("http://example.com", "First", created_at=base_time)
        second = BookmarkItem("http://example.com", "Second", created_at=base_time)
        bookmark_store.add(first)
        bookmark_store.add(second)

        bookmark_store.remove(first)

        assert [item.title for item in bookmark_store.list_items()] == ["Second"]


class TestClear:

    def test_clear_empties_and_persists(self, bookmark_store, store_path):
        bookmark_store.add(BookmarkItem("http://example.com", "Test"))

        bookmark_store.clear()

        assert bookmark_store.list_items() == []
        assert PersistedRecordStore(store_path, BookmarkItem).list_items() == []

    def test_clear_empty_store_still_writes(self, bookmark_store, store_path):
        bookmark_store.clear()
        bookmark_store.clear()

        assert store_path.is_file()
        assert bookmark_store.list_items() == []


class TestPersistFailure:

    def test_failed_write_keeps_item_in_memory(self, bookmark_store, monkeypatch):
        def fail(*args, **kwargs):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", fail)
        bookmark = BookmarkItem("http://example.com", "Example")

        with pytest.raises(PersistError):
            bookmark_store.add(bookmark)

        assert bookmark_store.list_items() == [bookmark]

    def test_failed_write_keeps_previous_file(self, bookmark_store, store_path, sample_bookmarks, monkeypatch):
        bookmark_store.add(sample_bookmarks[0])
        before = store_path.read_text(encoding="utf-8")

        def fail(*args, **kwargs):
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", fail)
        with pytest.raises(PersistError):
            bookmark_store.add(sample_bookmarks[1])

        assert store_path.read_text(encoding="utf-8") == before
        assert [p.name for p in store_path.parent.iterdir()] == ["bookmarks.yaml"]

    def test_store_usable_after_failure(self, bookmark_store, store_path, sample_bookmarks, monkeypatch):
        def fail(*args, **kwargs):
            raise OSError(13, "Permission denied")

        with monkeypatch.context() as m:
            m.setattr(os, "replace", fail)
            with pytest.raises(PersistError):
                bookmark_store.add(sample_bookmarks[0])

        bookmark_store.add(sample_bookmarks[1])

        assert len(PersistedRecordStore(store_path, BookmarkItem)) == 2

    def test_unwritable_target_raises_persist_error(self, tmp_path):
        target = tmp_path / "occupied"
        target.mkdir()
        (target / "child").write_text("x", encoding="utf-8")
        store = PersistedRecordStore(target, BookmarkItem)

        with pytest.raises(PersistError):
            store.clear()


@pytest.fixture
def umask_022():
    previous = os.umask(0o022)
    yield
    os.umask(previous)


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
class TestFilePermissions:

    def test_new_file_follows_umask(self, bookmark_store, store_path, umask_022):
        bookmark_store.add(BookmarkItem("http://example.com", "Example"))
        assert stat.S_IMODE(store_path.stat().st_mode) == 0o644

    def test_rewrite_keeps_existing_mode(self, bookmark_store, store_path, sample_bookmarks, umask_022):
        bookmark_store.add(sample_bookmarks[0])
        os.chmod(store_path, 0o640)

        bookmark_store.add(sample_bookmarks[1])

        assert stat.S_IMODE(store_path.stat().st_mode) == 0o640


class TestContainerStrategy:

    def test_array_uses_list(self):
        assert isinstance(ContainerStrategy.ARRAY.new_container(), list)

    def test_linked_uses_deque(self):
        assert isinstance(ContainerStrategy.LINKED.new_container([1, 2]), deque)

    def test_linked_store_sorts_and_persists(self, tmp_path, sample_history):
        path = tmp_path / "history.yaml"
        store = PersistedRecordStore(path, HistoryItem, ContainerStrategy.LINKED)
        for item in sample_history:
            store.add(item)

        assert store.strategy is ContainerStrategy.LINKED
        assert store.list_items() == list(reversed(sample_history))
        reopened = PersistedRecordStore(path, HistoryItem, ContainerStrategy.LINKED)
        assert reopened.list_items() == list(reversed(sample_history))


class TestCodec:

    def test_encoded_document_shape(self, sample_bookmarks):
        document = yaml.safe_load(encode_records(sample_bookmarks, BookmarkItem))

        assert document["format_version"] == 1
        assert document["record_type"] == "bookmark"
        assert document["count"] == 3
        assert document["records"][0] == {
            "url": "http://example.com/a",
            "created_at": sample_bookmarks[0].created_at,
            "title": "A",
        }

    def test_decode_preserves_file_order(self, sample_history):
        text = encode_records(sample_history, HistoryItem)
        assert decode_records(text, HistoryItem) == sample_history

    def test_decode_keeps_sub_second_timestamps(self, base_time):
        item = HistoryItem("http://example.com", created_at=base_time + timedelta(microseconds=7))
        restored = decode_records(encode_records([item], HistoryItem), HistoryItem)

        assert restored[0].created_at == item.created_at
