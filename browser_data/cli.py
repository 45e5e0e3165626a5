"""Command-line access to the stored bookmarks, history and homepage."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from browser_data.config import BrowserConfig, load_config
from browser_data.models import BookmarkItem, HistoryItem, InvalidRecordError, parse_url_input
from browser_data.preferences import UserPreferences
from browser_data.storage import (
    PersistedRecordStore,
    StoreError,
    open_bookmark_store,
    open_history_store,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="browser-data",
        description="Inspect and edit stored browser bookmarks, history and homepage.",
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--data-dir", type=Path, help="Override the data directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    bookmarks = sub.add_parser("bookmarks", help="Manage bookmarks")
    bookmarks_sub = bookmarks.add_subparsers(dest="action", required=True)
    bookmarks_sub.add_parser("list", help="List bookmarks, newest first")
    add_bookmark = bookmarks_sub.add_parser("add", help="Add a bookmark")
    add_bookmark.add_argument("url")
    add_bookmark.add_argument("title")
    remove_bookmark = bookmarks_sub.add_parser("remove", help="Remove a bookmark by list index")
    remove_bookmark.add_argument("index", type=int)
    bookmarks_sub.add_parser("clear", help="Remove all bookmarks")

    history = sub.add_parser("history", help="Manage browsing history")
    history_sub = history.add_subparsers(dest="action", required=True)
    history_sub.add_parser("list", help="List visited pages, newest first")
    add_visit = history_sub.add_parser("add", help="Record a visit")
    add_visit.add_argument("url")
    remove_visit = history_sub.add_parser("remove", help="Remove a visit by list index")
    remove_visit.add_argument("index", type=int)
    history_sub.add_parser("clear", help="Clear browsing history")

    homepage = sub.add_parser("homepage", help="Show or change the homepage")
    homepage_sub = homepage.add_subparsers(dest="action", required=True)
    homepage_sub.add_parser("get", help="Print the homepage")
    set_homepage = homepage_sub.add_parser("set", help="Save a new homepage")
    set_homepage.add_argument("url")

    return parser


def _print_items(store: PersistedRecordStore) -> None:
    items = store.list_items()
    if not items:
        print("(empty)")
        return
    for index, item in enumerate(items):
        if isinstance(item, BookmarkItem):
            print(f"{index:>3}  {item}  <{item.url}>  {item.creation_date_string}")
        else:
            print(f"{index:>3}  {item}")


def _remove_at(store: PersistedRecordStore, index: int) -> int:
    items = store.list_items()
    if index < 0 or index >= len(items):
        print(f"No entry at index {index}", file=sys.stderr)
        return 1
    store.remove(items[index])
    print(f"Removed: {items[index]}")
    return 0


def _run_bookmarks(args, config: BrowserConfig) -> int:
    store = open_bookmark_store(config.data_dir, config.bookmarks_file)
    if args.action == "list":
        _print_items(store)
    elif args.action == "add":
        item = BookmarkItem(parse_url_input(args.url), args.title)
        store.add(item)
        print(f"Added bookmark: {item}")
    elif args.action == "remove":
        return _remove_at(store, args.index)
    elif args.action == "clear":
        store.clear()
        print("Bookmarks cleared")
    return 0


def _run_history(args, config: BrowserConfig) -> int:
    store = open_history_store(config.data_dir, config.history_file)
    if args.action == "list":
        _print_items(store)
    elif args.action == "add":
        item = HistoryItem(parse_url_input(args.url))
        store.add(item)
        print(f"Recorded visit: {item}")
    elif args.action == "remove":
        return _remove_at(store, args.index)
    elif args.action == "clear":
        store.clear()
        print("History cleared")
    return 0


def _run_homepage(args, config: BrowserConfig) -> int:
    preferences = UserPreferences(config.preferences_path)
    if args.action == "get":
        print(preferences.homepage_url())
    elif args.action == "set":
        homepage = preferences.set_homepage_url(parse_url_input(args.url))
        print(f"Homepage set to {homepage}")
    return 0


COMMANDS = {
    "bookmarks": _run_bookmarks,
    "history": _run_history,
    "homepage": _run_homepage,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line tool and return its exit status."""
    args = _build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.data_dir is not None:
        config.data_dir = args.data_dir

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")
    logger.debug("Using data directory %s", config.data_dir)

    try:
        return COMMANDS[args.command](args, config)
    except (StoreError, InvalidRecordError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
