"""Application configuration loaded from YAML."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from browser_data.storage.stores import BOOKMARKS_FILE_NAME, HISTORY_FILE_NAME

logger = logging.getLogger(__name__)

DATA_DIR_ENV_VAR = "BROWSER_DATA_DIR"
DEFAULT_DATA_DIR = Path.home() / ".browser_data"
PREFERENCES_FILE_NAME = "preferences.yaml"


@dataclass
class BrowserConfig:
    """Where the browser keeps its files and how loudly it logs.

    Attributes:
        data_dir: Directory holding the bookmark, history and preference files
        bookmarks_file: Bookmark file name inside ``data_dir``
        history_file: History file name inside ``data_dir``
        preferences_file: Preferences file name inside ``data_dir``
        log_level: Name of the logging level, e.g. ``"INFO"``
    """
    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    bookmarks_file: str = BOOKMARKS_FILE_NAME
    history_file: str = HISTORY_FILE_NAME
    preferences_file: str = PREFERENCES_FILE_NAME
    log_level: str = "WARNING"

    @property
    def bookmarks_path(self) -> Path:
        return self.data_dir / self.bookmarks_file

    @property
    def history_path(self) -> Path:
        return self.data_dir / self.history_file

    @property
    def preferences_path(self) -> Path:
        return self.data_dir / self.preferences_file


def load_config(yaml_path: str | Path | None = None) -> BrowserConfig:
    """Load configuration, falling back to defaults for anything missing.

    A missing file gives the defaults. A file that cannot be parsed, or that
    is not a mapping, is logged and ignored. ``BROWSER_DATA_DIR`` in the
    environment takes precedence over ``data_dir`` from the file.
    """
    cfg: dict = {}
    if yaml_path is not None and Path(yaml_path).is_file():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                cfg = loaded
            else:
                logger.warning("Ignoring config %s: expected a mapping", yaml_path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning("Failed to load config from %s: %s", yaml_path, e)

    defaults = BrowserConfig()
    data_dir = os.environ.get(DATA_DIR_ENV_VAR) or cfg.get("data_dir")
    return BrowserConfig(
        data_dir=Path(data_dir).expanduser() if data_dir else defaults.data_dir,
        bookmarks_file=str(cfg.get("bookmarks_file", defaults.bookmarks_file)),
        history_file=str(cfg.get("history_file", defaults.history_file)),
        preferences_file=str(cfg.get("preferences_file", defaults.preferences_file)),
        log_level=str(cfg.get("log_level", defaults.log_level)).upper(),
    )
