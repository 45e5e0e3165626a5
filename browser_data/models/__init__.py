"""Record and URL value types."""

from .errors import InvalidRecordError
from .page_url import PageUrl, parse_url_input
from .url_item import UrlRecord, HistoryItem
from .bookmark import BookmarkItem

__all__ = [
    "InvalidRecordError",
    "PageUrl",
    "parse_url_input",
    "UrlRecord",
    "HistoryItem",
    "BookmarkItem",
]
