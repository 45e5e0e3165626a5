"""Crash-safe whole-file writes."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


def _target_mode(path: Path) -> int:
    """Mode for the replacement file: keep an existing file's, else umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        # os.umask can only be read by setting it.
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_text_atomic(path: Path | str, text: str) -> None:
    """Write ``text`` to a sibling temporary file, then move it over ``path``.

    Parent directories are created as needed. A failure leaves any previous
    file untouched and removes the temporary file.

    Raises:
        OSError: If the directory, temporary file or rename fails
    """
    path = Path(path)
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        # mkstemp creates the file as 0600.
        os.chmod(temp_name, _target_mode(path))
        os.replace(temp_name, path)
    except BaseException:
        try:
            os.unlink(temp_name)
        except FileNotFoundError:
            pass
        raise
