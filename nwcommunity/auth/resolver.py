"""Admin credential resolution.

Two independent paths can grant administrative access:

1. ``x-admin-code`` header equal to the configured shared admin code
   (scripted / service-to-service access, no session lookup).
2. A session cookie whose member email matches the configured admin email,
   compared case-insensitively (interactive admins).

Each path is a :class:`CredentialStrategy`. The resolver asks them in order
and the first definite answer wins; when none answers, access is denied.
An unset secret disables its path, so a bare deployment fails closed.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

import structlog

from nwcommunity.auth.models import AdminCredential, CredentialVia, RequestCredentials
from nwcommunity.config import Settings

logger = structlog.get_logger()

ADMIN_CODE_HEADER = "x-admin-code"


class Identity(Protocol):
    email: str


class SessionProvider(Protocol):
    """Anything that can turn a session token into an identity."""

    def validate_session(self, token: str) -> Optional[Identity]:
        ...


class CredentialStrategy(Protocol):
    """One way of proving administrative access."""

    via: CredentialVia

    def try_authorize(self, request: RequestCredentials) -> Optional[bool]:
        """Return True/False for a definite answer, None to defer."""
        ...


class AdminCodeHeaderStrategy:
    """Grant access when the admin code header equals the shared secret."""

    via = CredentialVia.header

    def __init__(self, admin_code: str) -> None:
        self._admin_code = admin_code

    def try_authorize(self, request: RequestCredentials) -> Optional[bool]:
        if not self._admin_code:
            return None
        supplied = request.header(ADMIN_CODE_HEADER)
        # TODO: move to hmac.compare_digest once the security review signs off
        if supplied is not None and supplied == self._admin_code:
            return True
        return None


class AdminEmailSessionStrategy:
    """Grant access when the session's member email is the admin email."""

    via = CredentialVia.session

    def __init__(self, admin_email: str, sessions: SessionProvider, cookie_name: str) -> None:
        self._admin_email = admin_email.strip().lower()
        self._sessions = sessions
        self._cookie_name = cookie_name

    def try_authorize(self, request: RequestCredentials) -> Optional[bool]:
        if not self._admin_email:
            return None
        token = request.cookie(self._cookie_name)
        if not token:
            return None
        try:
            identity = self._sessions.validate_session(token)
        except Exception as exc:
            logger.warning("auth.session_lookup_failed", error=str(exc))
            return None
        email = getattr(identity, "email", None) if identity is not None else None
        if not email or email.strip().lower() != self._admin_email:
            return None
        return True


class CredentialResolver:
    """Ordered list of credential strategies with a default deny."""

    def __init__(self, strategies: Sequence[CredentialStrategy]) -> None:
        self._strategies = list(strategies)

    def add_strategy(self, strategy: CredentialStrategy) -> None:
        self._strategies.append(strategy)

    def resolve(self, request: RequestCredentials) -> AdminCredential:
        for strategy in self._strategies:
            decision = strategy.try_authorize(request)
            if decision is None:
                continue
            if decision:
                return AdminCredential(is_admin=True, via=strategy.via)
            return AdminCredential.denied()
        return AdminCredential.denied()

    def is_admin(self, request: RequestCredentials) -> bool:
        credential = self.resolve(request)
        if not credential.is_admin:
            logger.info("auth.admin_denied")
        return credential.is_admin


def build_resolver(settings: Settings, sessions: SessionProvider) -> CredentialResolver:
    """Header path first, then session path."""
    return CredentialResolver([
        AdminCodeHeaderStrategy(settings.admin_code),
        AdminEmailSessionStrategy(settings.admin_email, sessions, settings.session_cookie),
    ])
