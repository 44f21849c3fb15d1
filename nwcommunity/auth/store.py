"""File-based JSON storage for members and sessions.

Acts as the session provider for the admin credential resolver. Provides a
DB-ready interface backed by simple JSON files under ``<data_dir>/auth/``.
"""

from __future__ import annotations

import secrets
import threading
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Union

from nwcommunity.auth.models import Member, Session
from nwcommunity.storage import locked, read_json_list, write_json_atomic


class MemberStore:
    """File-based storage for members and sessions.

    Storage path: ``<base_dir>`` with:
    - ``members.json`` -- list of member dicts
    - ``sessions.json`` -- list of session dicts
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None) -> None:
        if base_dir is None:
            self._base = Path.home() / ".nwcommunity" / "auth"
        else:
            self._base = Path(base_dir)
        self._base.mkdir(parents=True, exist_ok=True)
        self._members_path = self._base / "members.json"
        self._sessions_path = self._base / "sessions.json"
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_json(self, path: Path, strict: bool = False) -> list[dict]:
        return read_json_list(path, strict=strict)

    def _write_json(self, path: Path, data: list[dict]) -> None:
        write_json_atomic(path, data)

    @staticmethod
    def _member_from_dict(d: dict) -> Member:
        return Member(
            id=d["id"],
            email=d["email"],
            display_name=d.get("display_name", ""),
            created_at=d.get("created_at", ""),
        )

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def create_member(self, email: str, display_name: str = "") -> Member:
        """Persist a new member. Returns the member."""
        member = Member(id=str(uuid.uuid4()), email=email, display_name=display_name)
        with self._lock, locked(self._members_path):
            members = self._read_json(self._members_path, strict=True)
            members.append({
                "id": member.id,
                "email": member.email,
                "display_name": member.display_name,
                "created_at": member.created_at,
            })
            self._write_json(self._members_path, members)
        return member

    def get_member(self, member_id: str) -> Optional[Member]:
        for d in self._read_json(self._members_path):
            if d.get("id") == member_id:
                return self._member_from_dict(d)
        return None

    def get_member_by_email(self, email: str) -> Optional[Member]:
        wanted = email.strip().lower()
        for d in self._read_json(self._members_path):
            if d.get("email", "").lower() == wanted:
                return self._member_from_dict(d)
        return None

    def get_or_create_member(self, email: str, display_name: str = "") -> Member:
        member = self.get_member_by_email(email)
        if member is not None:
            return member
        return self.create_member(email, display_name=display_name)

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def create_session(self, member_id: str, expires_in_hours: int = 24 * 30) -> Session:
        """Create a new session for a member."""
        now = datetime.utcnow()
        session = Session(
            id=str(uuid.uuid4()),
            member_id=member_id,
            token=secrets.token_urlsafe(48),
            created_at=now.isoformat(),
            expires_at=(now + timedelta(hours=expires_in_hours)).isoformat(),
        )
        with self._lock, locked(self._sessions_path):
            sessions = self._read_json(self._sessions_path, strict=True)
            sessions.append({
                "id": session.id,
                "member_id": session.member_id,
                "token": session.token,
                "created_at": session.created_at,
                "expires_at": session.expires_at,
            })
            self._write_json(self._sessions_path, sessions)
        return session

    def validate_session(self, token: str) -> Optional[Member]:
        """Return the member behind *token*, or None when it is unknown or expired."""
        if not token:
            return None
        now = datetime.utcnow().isoformat()
        for d in self._read_json(self._sessions_path):
            if d.get("token") == token:
                if d.get("expires_at") and d["expires_at"] < now:
                    # Expired -- clean it up
                    self.delete_session(token)
                    return None
                return self.get_member(d.get("member_id", ""))
        return None

    def delete_session(self, token: str) -> bool:
        with self._lock, locked(self._sessions_path):
            sessions = self._read_json(self._sessions_path, strict=True)
            remaining = [d for d in sessions if d.get("token") != token]
            if len(remaining) < len(sessions):
                self._write_json(self._sessions_path, remaining)
                return True
        return False
