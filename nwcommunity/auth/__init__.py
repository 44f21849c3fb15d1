"""Admin authorization: members, sessions and the credential resolver."""

from nwcommunity.auth.models import AdminCredential, CredentialVia, Member, RequestCredentials, Session
from nwcommunity.auth.resolver import (
    AdminCodeHeaderStrategy,
    AdminEmailSessionStrategy,
    CredentialResolver,
    CredentialStrategy,
    build_resolver,
)
from nwcommunity.auth.store import MemberStore

__all__ = [
    "AdminCredential",
    "AdminCodeHeaderStrategy",
    "AdminEmailSessionStrategy",
    "CredentialResolver",
    "CredentialStrategy",
    "CredentialVia",
    "Member",
    "MemberStore",
    "RequestCredentials",
    "Session",
    "build_resolver",
]
