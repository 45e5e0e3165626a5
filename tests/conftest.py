"""Pytest configuration for tests."""

import os
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import yaml

# pytest-qt starts a QApplication; run it without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from browser_data.models import BookmarkItem, HistoryItem
from browser_data.config import DATA_DIR_ENV_VAR


@pytest.fixture(autouse=True)
def _isolate_data_dir_env(monkeypatch):
    """Keep a developer's BROWSER_DATA_DIR from leaking into tests."""
    monkeypatch.delenv(DATA_DIR_ENV_VAR, raising=False)


@pytest.fixture
def base_time() -> datetime:
    return datetime(2024, 1, 1, 10, 0, 0, 123456)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "browser"


@pytest.fixture
def sample_bookmarks(base_time):
    """Three bookmarks one minute apart, oldest first."""
    return [
        BookmarkItem("http://example.com/a", "A", created_at=base_time),
        BookmarkItem("http://example.com/b", "B", created_at=base_time + timedelta(minutes=1)),
        BookmarkItem("http://example.com/c", "C", created_at=base_time + timedelta(minutes=2)),
    ]


@pytest.fixture
def sample_history(base_time):
    """Three visits one second apart, oldest first."""
    return [
        HistoryItem("http://a.example", created_at=base_time),
        HistoryItem("http://b.example", created_at=base_time + timedelta(seconds=1)),
        HistoryItem("http://c.example", created_at=base_time + timedelta(seconds=2)),
    ]


@pytest.fixture
def sample_yaml_config_file(tmp_path):
    """Write a configuration file pointing at a temporary data directory."""
    config = {
        "data_dir": str(tmp_path / "configured"),
        "bookmarks_file": "marks.yaml",
        "history_file": "visits.yaml",
        "log_level": "debug",
    }
    path = tmp_path / "config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(config, f)
    return path
