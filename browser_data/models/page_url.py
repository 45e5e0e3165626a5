"""Structured URL value used by records and the navigator."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from .errors import InvalidRecordError

# Address bar input without this prefix gets the default scheme added.
BASE_URL_SCHEME = "http"


@dataclass(frozen=True)
class PageUrl:
    """An immutable, validated URL.

    Attributes:
        value: The URL text exactly as it was parsed
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidRecordError("PageUrl requires a URL")
        parts = urlsplit(self.value)
        if not parts.scheme:
            raise InvalidRecordError(f"URL has no scheme: {self.value!r}")
        if not parts.netloc and not parts.path:
            raise InvalidRecordError(f"URL has no location: {self.value!r}")

    @classmethod
    def parse(cls, url: str | PageUrl | None) -> PageUrl:
        """Return ``url`` as a PageUrl, validating plain strings."""
        if isinstance(url, PageUrl):
            return url
        if url is None:
            raise InvalidRecordError("A URL is required")
        return cls(url.strip() if isinstance(url, str) else url)

    @property
    def scheme(self) -> str:
        return urlsplit(self.value).scheme

    @property
    def host(self) -> str:
        return urlsplit(self.value).hostname or ""

    @property
    def path(self) -> str:
        return urlsplit(self.value).path

    def __str__(self) -> str:
        return self.value


def parse_url_input(text: str) -> PageUrl:
    """Turn address bar text into a PageUrl.

    Text longer than four characters that does not start with ``http`` gets
    ``http://`` prepended, so ``example.com`` becomes ``http://example.com``.

    Raises:
        InvalidRecordError: If the resulting text is not a valid URL
    """
    if text is None:
        raise InvalidRecordError("A URL is required")
    text = text.strip()
    if len(text) > 4 and not text.startswith(BASE_URL_SCHEME):
        text = f"{BASE_URL_SCHEME}://{text}"
    return PageUrl.parse(text)
