"""Per-window browsing session tying stores, navigation and preferences together."""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from browser_data.config import BrowserConfig
from browser_data.models import BookmarkItem, HistoryItem, PageUrl
from browser_data.preferences import UserPreferences
from browser_data.storage import (
    BookmarkStore,
    HistoryStore,
    PersistError,
    open_bookmark_store,
    open_history_store,
)
from .session_navigator import SessionNavigator

logger = logging.getLogger(__name__)


class BrowserSession(QObject):
    """Coordinates the current page, back/forward state and persisted records.

    A view layer calls into the session when the user navigates or edits
    bookmarks and listens to the signals to refresh itself. Opening a session
    opens both stores, so a damaged bookmark or history file raises
    DecodeError from the constructor.
    """

    page_changed = Signal(str)  # New current URL
    reload_requested = Signal(str)  # Current URL was visited again
    bookmarks_changed = Signal()
    history_changed = Signal()
    navigation_changed = Signal(bool, bool)  # has_back, has_forward
    store_error = Signal(str)  # Human readable persistence failure

    def __init__(
        self,
        bookmarks: BookmarkStore,
        history: HistoryStore,
        preferences: UserPreferences,
        parent=None,
    ):
        super().__init__(parent)
        self._bookmarks = bookmarks
        self._history = history
        self._preferences = preferences
        self._navigator = SessionNavigator(self)
        self._navigator.state_changed.connect(self.navigation_changed)
        self._current_url: Optional[PageUrl] = None

    @classmethod
    def from_config(cls, config: BrowserConfig, parent=None) -> BrowserSession:
        """Open the stores and preferences named by ``config``."""
        return cls(
            open_bookmark_store(config.data_dir, config.bookmarks_file),
            open_history_store(config.data_dir, config.history_file),
            UserPreferences(config.preferences_path),
            parent,
        )

    # ------------------------------------------------------------------ Properties
    @property
    def current_url(self) -> Optional[PageUrl]:
        return self._current_url

    @property
    def navigator(self) -> SessionNavigator:
        return self._navigator

    @property
    def preferences(self) -> UserPreferences:
        return self._preferences

    def bookmarks(self) -> list[BookmarkItem]:
        """Bookmarks, newest first."""
        return self._bookmarks.list_items()

    def history(self) -> list[HistoryItem]:
        """Visited pages, newest first."""
        return self._history.list_items()

    # ------------------------------------------------------------------ Navigation
    def visit(self, url: PageUrl | str) -> PageUrl:
        """Navigate to ``url`` via a link, the address bar or a saved record.

        Visiting the current page again only requests a reload. A failed
        history write is reported through ``store_error`` and does not stop
        the navigation.
        """
        new_url = PageUrl.parse(url)
        self._navigator.clear_forward()

        if new_url == self._current_url:
            self.reload_requested.emit(str(new_url))
            return new_url

        self._navigator.push_back(self._current_url)
        try:
            self._history.add(HistoryItem(new_url))
        except PersistError as exc:
            self._report(exc)
        self.history_changed.emit()

        self._set_current(new_url)
        return new_url

    def go_back(self) -> Optional[PageUrl]:
        """Return to the previous page, or None if there is none."""
        back_url = self._navigator.step_back(self._current_url)
        if back_url is not None:
            self._set_current(back_url)
        return back_url

    def go_forward(self) -> Optional[PageUrl]:
        """Redo a step back, or None if there is nothing to redo."""
        forward_url = self._navigator.step_forward(self._current_url)
        if forward_url is not None:
            self._set_current(forward_url)
        return forward_url

    def go_home(self) -> PageUrl:
        return self.visit(self._preferences.homepage_url())

    # ------------------------------------------------------------------ Records
    def add_bookmark(self, title: str) -> BookmarkItem:
        """Bookmark the current page.

        Raises:
            RuntimeError: If no page has been visited yet
            PersistError: If the bookmark file could not be written
        """
        if self._current_url is None:
            raise RuntimeError("No page is loaded to bookmark")
        bookmark = BookmarkItem(self._current_url, title)
        try:
            self._bookmarks.add(bookmark)
        except PersistError as exc:
            self._report(exc)
            raise
        finally:
            self.bookmarks_changed.emit()
        return bookmark

    def remove_bookmark(self, item: BookmarkItem) -> bool:
        return self._remove(self._bookmarks, item, self.bookmarks_changed)

    def remove_history_item(self, item: HistoryItem) -> bool:
        return self._remove(self._history, item, self.history_changed)

    def clear_history(self) -> bool:
        """Wipe stored history and the session's back/forward stacks.

        Returns:
            True if both are empty afterwards

        Raises:
            PersistError: If the history file could not be written. The
                back/forward stacks are left untouched in that case.
        """
        try:
            self._history.clear()
        except PersistError as exc:
            self._report(exc)
            raise
        finally:
            self.history_changed.emit()
        self._navigator.clear_all()
        return len(self._history) == 0 and not self._navigator.has_back()

    # ------------------------------------------------------------------ Internals
    def _remove(self, store, item, changed) -> bool:
        # The record is already gone from memory when the write fails.
        try:
            removed = store.remove(item)
        except PersistError as exc:
            self._report(exc)
            changed.emit()
            raise
        if removed:
            changed.emit()
        return removed

    def _set_current(self, url: PageUrl):
        self._current_url = url
        self.page_changed.emit(str(url))

    def _report(self, exc: PersistError):
        logger.warning("Persistence failure: %s", exc)
        self.store_error.emit(str(exc))
