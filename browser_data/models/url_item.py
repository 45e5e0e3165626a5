"""Time-stamped URL records shared by bookmarks and browsing history."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, ClassVar

from .errors import InvalidRecordError
from .page_url import PageUrl

DATE_DISPLAY_FORMAT = "%d/%m/%Y %H:%M:%S"


@dataclass(frozen=True, eq=False)
class UrlRecord:
    """A URL plus the moment it was recorded.

    Records sort newest first. Two records are equal when both their URL and
    creation time match; subclasses do not take their extra fields into
    account.

    Attributes:
        url: The recorded address
        created_at: When the record was created. Set once, to the current
            time, unless restored from storage. Timezone-aware values are
            converted to naive local time.
    """
    url: PageUrl
    created_at: datetime = field(default_factory=datetime.now, kw_only=True)

    # Tag written to storage so a file can only be loaded as the right kind.
    record_type: ClassVar[str] = "url"

    def __post_init__(self):
        if self.url is None or self.url == "":
            raise InvalidRecordError(f"{type(self).__name__} requires a URL")
        object.__setattr__(self, "url", PageUrl.parse(self.url))
        if not isinstance(self.created_at, datetime):
            raise InvalidRecordError("created_at must be a datetime")
        # Timestamps are naive local time so any two records compare.
        if self.created_at.tzinfo is not None:
            object.__setattr__(self, "created_at", self.created_at.astimezone().replace(tzinfo=None))

    @property
    def creation_date_string(self) -> str:
        return self.created_at.strftime(DATE_DISPLAY_FORMAT)

    def compare(self, other: UrlRecord) -> int:
        """Order newest first: -1 if self is newer, 1 if older, 0 on a tie."""
        if self.created_at == other.created_at:
            return 0
        return -1 if self.created_at > other.created_at else 1

    def __lt__(self, other: UrlRecord) -> bool:
        """Sort newer records before older ones."""
        if not isinstance(other, UrlRecord):
            return NotImplemented
        return self.compare(other) < 0

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, UrlRecord):
            return NotImplemented
        return self.url == other.url and self.created_at == other.created_at

    def __hash__(self) -> int:
        return hash((self.url, self.created_at))

    def clone(self) -> UrlRecord:
        """Return an independent copy carrying the same timestamp."""
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        return {"url": str(self.url), "created_at": self.created_at}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UrlRecord:
        """Restore a record, keeping its persisted timestamp."""
        return cls(data["url"], created_at=data["created_at"])

    def __str__(self) -> str:
        return f"{self.creation_date_string} - {self.url}"


@dataclass(frozen=True, eq=False)
class HistoryItem(UrlRecord):
    """One visited page in the browsing history."""

    record_type: ClassVar[str] = "history"
