"""User preferences persisted between sessions."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from browser_data.models import InvalidRecordError, PageUrl
from browser_data.storage import PersistError, write_text_atomic

logger = logging.getLogger(__name__)

DEFAULT_HOMEPAGE_URL = "http://www.ncl.ac.uk/computing/"


class UserPreferences:
    """Homepage preference stored as a small YAML file."""

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def homepage_url(self) -> PageUrl:
        """Return the saved homepage, or the default if none is usable."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
        except FileNotFoundError:
            return PageUrl(DEFAULT_HOMEPAGE_URL)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning("Failed to read preferences from %s: %s", self._path, e)
            return PageUrl(DEFAULT_HOMEPAGE_URL)

        value = cfg.get("homepage_url") if isinstance(cfg, dict) else None
        try:
            return PageUrl.parse(value)
        except InvalidRecordError:
            logger.warning("Ignoring invalid homepage %r in %s", value, self._path)
            return PageUrl(DEFAULT_HOMEPAGE_URL)

    def set_homepage_url(self, url: PageUrl | str | None) -> PageUrl:
        """Save a new homepage.

        Raises:
            InvalidRecordError: If ``url`` is None or not a valid URL
            PersistError: If the preferences file could not be written
        """
        if url is None:
            raise InvalidRecordError("set_homepage_url requires a URL")
        homepage = PageUrl.parse(url)
        text = yaml.safe_dump({"homepage_url": str(homepage)}, sort_keys=False)
        try:
            write_text_atomic(self._path, text)
        except OSError as e:
            logger.error("Failed to save homepage to %s: %s", self._path, e)
            raise PersistError(f"Homepage could not be saved: {e}", self._path) from e
        return homepage
