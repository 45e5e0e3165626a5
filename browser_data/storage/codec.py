"""Whole-blob YAML encoding for record collections.

A store file holds one YAML document describing the complete collection::

    format_version: 1
    record_type: bookmark
    count: 2
    records:
      - url: http://example.com
        created_at: 2024-01-01 10:00:00.123456
        title: Example

``count`` is checked against the records actually read so a file cut short
at an item boundary is still reported as damaged.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TypeVar

import yaml

from browser_data.models import InvalidRecordError, UrlRecord
from .errors import DecodeError

FORMAT_VERSION = 1

T = TypeVar("T", bound=UrlRecord)


def encode_records(records: Iterable[UrlRecord], record_type: type[UrlRecord]) -> str:
    """Serialize every record into a single YAML document."""
    items = [record.to_dict() for record in records]
    document = {
        "format_version": FORMAT_VERSION,
        "record_type": record_type.record_type,
        "count": len(items),
        "records": items,
    }
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


def decode_records(text: str, record_type: type[T], source: str | None = None) -> list[T]:
    """Parse a YAML document produced by :func:`encode_records`.

    Args:
        text: File contents
        record_type: Record class the file must contain
        source: Path used in error messages

    Returns:
        Records in file order

    Raises:
        DecodeError: If the text is not valid YAML or does not describe a
            complete collection of ``record_type`` records
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DecodeError(f"Stored records cannot be read: {exc}", source) from exc

    if not isinstance(document, dict):
        raise DecodeError("Stored records are not a YAML mapping", source)

    version = document.get("format_version")
    if version != FORMAT_VERSION:
        raise DecodeError(f"Unsupported format version {version!r}", source)

    stored_type = document.get("record_type")
    if stored_type != record_type.record_type:
        raise DecodeError(
            f"Expected {record_type.record_type!r} records, found {stored_type!r}",
            source,
        )

    raw_records = document.get("records")
    if not isinstance(raw_records, list):
        raise DecodeError("Stored records are missing the record list", source)

    count = document.get("count")
    if count != len(raw_records):
        raise DecodeError(
            f"Stored records are truncated: expected {count!r}, found {len(raw_records)}",
            source,
        )

    records: list[T] = []
    for index, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            raise DecodeError(f"Record {index} is not a mapping", source)
        if not isinstance(raw.get("created_at"), datetime):
            raise DecodeError(f"Record {index} has no valid timestamp", source)
        try:
            records.append(record_type.from_dict(raw))
        except (KeyError, TypeError, InvalidRecordError) as exc:
            raise DecodeError(f"Record {index} is invalid: {exc}", source) from exc
    return records
