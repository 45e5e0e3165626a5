"""Back/forward navigation state for one browsing session."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, Signal

from browser_data.models import PageUrl


class SessionNavigator(QObject):
    """Two stacks of addresses backing the back and forward buttons.

    ``back`` holds pages visited before the current one, most recent on top.
    ``forward`` holds pages left by stepping back. Only step_back puts
    addresses on ``forward``, and any deliberate navigation should call
    clear_forward. Pushing an address onto one stack removes it from the
    other, so no address is ever on both. Nothing here is persisted.

    Signals:
        state_changed: Emitted with (has_back, has_forward) after any change
            to either stack
    """

    state_changed = Signal(bool, bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._back: list[PageUrl] = []
        self._forward: list[PageUrl] = []

    # ------------------------------------------------------------------ Queries
    def has_back(self) -> bool:
        return bool(self._back)

    def has_forward(self) -> bool:
        return bool(self._forward)

    def back_urls(self) -> list[PageUrl]:
        """Snapshot of the back stack, oldest first."""
        return list(self._back)

    def forward_urls(self) -> list[PageUrl]:
        """Snapshot of the forward stack, bottom first."""
        return list(self._forward)

    # ------------------------------------------------------------------ Transitions
    def push_back(self, url: PageUrl | str | None) -> None:
        """Remember ``url`` as the page to return to. None is ignored."""
        if url is None:
            return
        self._push(self._back, self._forward, PageUrl.parse(url))
        self._emit_state()

    def step_back(self, current_url: PageUrl | str | None) -> Optional[PageUrl]:
        """Move one page back.

        Args:
            current_url: Page being left; it becomes available via
                step_forward. None (no page loaded) is not pushed.

        Returns:
            The page to load, or None if there is nothing to go back to
        """
        if not self._back:
            return None
        back_url = self._back.pop()
        if current_url is not None:
            self._push(self._forward, self._back, PageUrl.parse(current_url))
        self._emit_state()
        return back_url

    def step_forward(self, current_url: PageUrl | str | None) -> Optional[PageUrl]:
        """Move one page forward, the mirror image of step_back.

        A None ``current_url`` is not pushed onto ``back``.
        """
        if not self._forward:
            return None
        forward_url = self._forward.pop()
        if current_url is not None:
            self._push(self._back, self._forward, PageUrl.parse(current_url))
        self._emit_state()
        return forward_url

    def clear_forward(self) -> None:
        """Drop the forward stack after a fresh navigation."""
        if not self._forward:
            return
        self._forward = []
        self._emit_state()

    def clear_all(self) -> None:
        """Drop both stacks, e.g. when browsing history is wiped."""
        if not self._back and not self._forward:
            return
        self._back = []
        self._forward = []
        self._emit_state()

    def _emit_state(self):
        self.state_changed.emit(self.has_back(), self.has_forward())

    @staticmethod
    def _push(stack: list[PageUrl], other: list[PageUrl], url: PageUrl):
        # An address lives on at most one of the two stacks.
        other[:] = [entry for entry in other if entry != url]
        stack.append(url)
