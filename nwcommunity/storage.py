"""JSON list files shared by the file-backed stores.

Each store file holds one JSON list. Writes land in a temp file beside the
target and are swapped in with ``os.replace`` so a reader never sees half a
file. ``locked`` serializes read-modify-write cycles across processes (the
CLI and the web backend share the same data directory).
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import structlog

from nwcommunity.errors import StoreCorruptError

logger = structlog.get_logger()


def read_json_list(path: Path, strict: bool = False) -> list[dict]:
    """Load the list stored at *path*; a missing file is an empty list.

    With ``strict`` an unreadable file raises :class:`StoreCorruptError`.
    Otherwise it is logged and treated as empty, which is only safe for
    callers that never write the result back.
    """
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as exc:
        if strict:
            raise StoreCorruptError(str(path), str(exc)) from exc
        logger.warning("storage.unreadable", path=str(path), error=str(exc))
        return []
    if not isinstance(data, list):
        if strict:
            raise StoreCorruptError(str(path), "expected a JSON list")
        logger.warning("storage.unreadable", path=str(path), error="expected a JSON list")
        return []
    return data


def write_json_atomic(path: Path, data: list[dict]) -> None:
    """Replace *path* with *data* in one step."""
    with tempfile.NamedTemporaryFile(
        "w", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    ) as tmp:
        json.dump(data, tmp, indent=2, default=str)
        tmp.flush()
        os.fsync(tmp.fileno())
        tmp_path = tmp.name
    try:
        os.replace(tmp_path, path)
    finally:
        Path(tmp_path).unlink(missing_ok=True)


@contextmanager
def locked(path: Path) -> Iterator[None]:
    """Hold an exclusive advisory lock on ``<path>.lock``."""
    lock_path = path.with_name(path.name + ".lock")
    with open(lock_path, "a") as fh:
        fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
