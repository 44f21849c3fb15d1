"""Auth domain models for members, sessions, and admin credentials."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional


class CredentialVia(str, Enum):
    """Which path granted administrative access."""

    header = "header"
    session = "session"


@dataclass
class Member:
    """A community member as seen by the session provider."""

    id: str
    email: str
    display_name: str = ""
    created_at: str = ""

    def __post_init__(self) -> None:
        self.email = self.email.strip().lower()
        if not self.created_at:
            self.created_at = datetime.utcnow().isoformat()


@dataclass
class Session:
    """Represents an active member session."""

    id: str
    member_id: str
    token: str
    created_at: str = ""
    expires_at: str = ""

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = datetime.utcnow().isoformat()


@dataclass
class RequestCredentials:
    """The parts of an inbound request the resolver looks at.

    Header names are matched case-insensitively.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def cookie(self, name: str) -> Optional[str]:
        return self.cookies.get(name)


@dataclass(frozen=True)
class AdminCredential:
    """Per-request authorization result. Never persisted."""

    is_admin: bool
    via: Optional[CredentialVia] = None

    @classmethod
    def denied(cls) -> "AdminCredential":
        return cls(is_admin=False)
