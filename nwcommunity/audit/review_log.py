"""Append-only trail of flag review decisions.

Every accepted status transition becomes one JSON line in a daily file under
``<data_dir>/audit_logs/``. Lines are never rewritten; a line that fails to
parse is skipped on read and reported through the log.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

import structlog

logger = structlog.get_logger()


@dataclass
class FlagTransition:
    """One admin decision: *flag_id* moved from one status to another."""

    id: str
    timestamp: str
    actor: str
    flag_id: str
    from_status: str
    to_status: str


class ReviewAuditLog:
    def __init__(self, base_dir: Optional[Union[str, Path]] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else Path.home() / ".nwcommunity" / "audit_logs"
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def _today_file(self) -> Path:
        return self._base_dir / f"{datetime.now(timezone.utc):%Y-%m-%d}.jsonl"

    def _iter_transitions(self) -> Iterator[FlagTransition]:
        for path in sorted(self._base_dir.glob("*.jsonl")):
            for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
                if not line.strip():
                    continue
                try:
                    yield FlagTransition(**json.loads(line))
                except (json.JSONDecodeError, TypeError) as exc:
                    logger.warning("audit.bad_line", path=path.name, line=lineno, error=str(exc))

    def record_transition(
        self, flag_id: str, from_status: str, to_status: str, actor: str
    ) -> FlagTransition:
        """Append one transition and return it."""
        entry = FlagTransition(
            id=uuid.uuid4().hex[:16],
            timestamp=datetime.now(timezone.utc).isoformat(),
            actor=actor,
            flag_id=flag_id,
            from_status=from_status,
            to_status=to_status,
        )
        with self._today_file().open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(asdict(entry)) + "\n")
        return entry

    def transitions(
        self,
        *,
        flag_id: Optional[str] = None,
        actor: Optional[str] = None,
        limit: int = 200,
    ) -> list[FlagTransition]:
        """Return recorded transitions, newest first."""
        entries = [
            e for e in self._iter_transitions()
            if (flag_id is None or e.flag_id == flag_id)
            and (actor is None or e.actor == actor)
        ]
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]
