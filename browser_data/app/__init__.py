"""Session-level controllers."""

from .session_navigator import SessionNavigator
from .browser_session import BrowserSession

__all__ = [
    "SessionNavigator",
    "BrowserSession",
]
