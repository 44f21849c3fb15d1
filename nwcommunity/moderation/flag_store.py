"""File-based JSON storage for flagged content.

Backed by ``flagged_content.json`` under the moderation data directory. The
interface mirrors a ``FlaggedContent`` table: one insert per flag, one update
per status transition.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from nwcommunity.errors import FlagNotFoundError, ValidationError
from nwcommunity.moderation.models import ContentType, FlaggedContent, FlagReason, FlagStatus
from nwcommunity.storage import locked, read_json_list, write_json_atomic


class FlagStore:
    """File-based storage for moderation flags.

    Storage path: ``<base_dir>/flagged_content.json`` -- list of flag dicts.
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None) -> None:
        if base_dir is None:
            self._base = Path.home() / ".nwcommunity" / "moderation"
        else:
            self._base = Path(base_dir)
        self._base.mkdir(parents=True, exist_ok=True)
        self._flags_path = self._base / "flagged_content.json"
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_json(self, strict: bool = False) -> list[dict]:
        return read_json_list(self._flags_path, strict=strict)

    def _write_json(self, data: list[dict]) -> None:
        write_json_atomic(self._flags_path, data)

    @staticmethod
    def _to_dict(flag: FlaggedContent) -> dict:
        return {
            "id": flag.id,
            "content_type": flag.content_type.value,
            "content_id": flag.content_id,
            "reason": flag.reason.value,
            "snippet": flag.snippet,
            "author_id": flag.author_id,
            "status": flag.status.value,
            "created_at": flag.created_at,
            "updated_at": flag.updated_at,
            "reviewed_by": flag.reviewed_by,
        }

    @staticmethod
    def _from_dict(d: dict) -> FlaggedContent:
        return FlaggedContent(
            id=d["id"],
            content_type=d["content_type"],
            reason=d["reason"],
            content_id=d.get("content_id"),
            snippet=d.get("snippet"),
            author_id=d.get("author_id"),
            status=d.get("status", FlagStatus.pending.value),
            created_at=d.get("created_at", ""),
            updated_at=d.get("updated_at", ""),
            reviewed_by=d.get("reviewed_by"),
        )

    # ------------------------------------------------------------------
    # Flag CRUD
    # ------------------------------------------------------------------

    def insert(
        self,
        content_type: ContentType,
        reason: FlagReason,
        content_id: Optional[str] = None,
        snippet: Optional[str] = None,
        author_id: Optional[str] = None,
    ) -> FlaggedContent:
        """Insert a new pending flag and return it."""
        flag = FlaggedContent(
            id=uuid.uuid4().hex,
            content_type=content_type,
            reason=reason,
            content_id=content_id,
            snippet=snippet,
            author_id=author_id,
        )
        with self._lock, locked(self._flags_path):
            flags = self._read_json(strict=True)
            flags.append(self._to_dict(flag))
            self._write_json(flags)
        return flag

    def get(self, flag_id: str) -> Optional[FlaggedContent]:
        for d in self._read_json():
            if d.get("id") == flag_id:
                return self._from_dict(d)
        return None

    def list_flags(self, status: Optional[FlagStatus] = None, limit: int = 200) -> list[FlaggedContent]:
        """Return flags newest first, optionally filtered by status."""
        flags = [self._from_dict(d) for d in self._read_json()]
        if status is not None:
            flags = [f for f in flags if f.status == status]
        flags.sort(key=lambda f: f.created_at, reverse=True)
        return flags[:limit]

    def transition(
        self, flag_id: str, target: FlagStatus, reviewed_by: Optional[str] = None
    ) -> tuple[FlagStatus, FlaggedContent]:
        """Move a flag forward to *target*, checking the stored status under the lock.

        Returns ``(previous_status, flag)``. Asking for the current status
        writes nothing. Raises ``FlagNotFoundError`` for an unknown id and
        ``ValidationError`` when *target* ranks below the stored status.
        """
        with self._lock, locked(self._flags_path):
            flags = self._read_json(strict=True)
            for d in flags:
                if d.get("id") != flag_id:
                    continue
                current = FlagStatus(d.get("status", FlagStatus.pending.value))
                if target == current:
                    return current, self._from_dict(d)
                if target.rank < current.rank:
                    raise ValidationError(
                        f"Cannot move flag from '{current.value}' back to '{target.value}'",
                        fields=["status"],
                    )
                d["status"] = target.value
                d["updated_at"] = datetime.now(timezone.utc).isoformat()
                if reviewed_by:
                    d["reviewed_by"] = reviewed_by
                self._write_json(flags)
                return current, self._from_dict(d)
        raise FlagNotFoundError(flag_id)

    def count_by_status(self) -> dict[str, int]:
        counts = {s.value: 0 for s in FlagStatus}
        for d in self._read_json():
            status = d.get("status", FlagStatus.pending.value)
            if status in counts:
                counts[status] += 1
        return counts
