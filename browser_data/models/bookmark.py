"""Bookmark record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .errors import InvalidRecordError
from .url_item import UrlRecord


@dataclass(frozen=True, eq=False)
class BookmarkItem(UrlRecord):
    """A saved page with a user-supplied title.

    Equality is inherited from UrlRecord and ignores ``title``: two bookmarks
    for the same URL created at the same instant are the same bookmark.

    Attributes:
        title: Label shown in bookmark lists. May be empty, never None.
    """
    title: str

    record_type: ClassVar[str] = "bookmark"

    def __post_init__(self):
        super().__post_init__()
        if self.title is None:
            raise InvalidRecordError("BookmarkItem requires a title")
        if not isinstance(self.title, str):
            raise InvalidRecordError("BookmarkItem title must be a string")

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["title"] = self.title
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BookmarkItem:
        return cls(data["url"], data["title"], created_at=data["created_at"])

    def __str__(self) -> str:
        return self.title if self.title else str(self.url)
