"""Auth middleware -- FastAPI dependencies for admin access and rate limiting.

Admin routes accept either credential path:
1. ``x-admin-code: <shared code>`` header (scripts, the admin app)
2. a session cookie belonging to the configured admin email

Public abuse-prone routes (sign-in, sign-up) go through the login limiter,
keyed by the client address from the proxy headers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from nwcommunity.audit.review_log import ReviewAuditLog
from nwcommunity.auth.models import AdminCredential, CredentialVia, RequestCredentials
from nwcommunity.auth.resolver import CredentialResolver, build_resolver
from nwcommunity.auth.store import MemberStore
from nwcommunity.config import Settings, get_settings
from nwcommunity.moderation.flag_store import FlagStore
from nwcommunity.moderation.recorder import FlagRecorder
from nwcommunity.ratelimit.limiter import RateLimiter, identify_client
from nwcommunity.ratelimit.models import RateLimitConfig

# Shared instances (singletons for the running process)
_member_store: Optional[MemberStore] = None
_audit: Optional[ReviewAuditLog] = None
_recorder: Optional[FlagRecorder] = None
_login_limiter: Optional[RateLimiter] = None


def get_app_settings() -> Settings:
    return get_settings()


def _data_dir(settings: Settings, name: str) -> Path:
    return Path(settings.data_dir) / name


def get_member_store(settings: Settings = Depends(get_app_settings)) -> MemberStore:
    """Return the singleton MemberStore instance."""
    global _member_store
    if _member_store is None:
        _member_store = MemberStore(_data_dir(settings, "auth"))
    return _member_store


def get_review_log(settings: Settings = Depends(get_app_settings)) -> ReviewAuditLog:
    global _audit
    if _audit is None:
        _audit = ReviewAuditLog(_data_dir(settings, "audit_logs"))
    return _audit


def get_flag_recorder(
    settings: Settings = Depends(get_app_settings),
    audit: ReviewAuditLog = Depends(get_review_log),
) -> FlagRecorder:
    global _recorder
    if _recorder is None:
        _recorder = FlagRecorder(FlagStore(_data_dir(settings, "moderation")), audit=audit)
    return _recorder


def get_login_limiter(settings: Settings = Depends(get_app_settings)) -> RateLimiter:
    global _login_limiter
    if _login_limiter is None:
        _login_limiter = RateLimiter(
            RateLimitConfig(
                window_ms=settings.login_window_ms,
                max_requests=settings.login_max_requests,
            ),
            scope="login",
        )
    return _login_limiter


def get_resolver(
    settings: Settings = Depends(get_app_settings),
    members: MemberStore = Depends(get_member_store),
) -> CredentialResolver:
    return build_resolver(settings, members)


def request_credentials(request: Request) -> RequestCredentials:
    return RequestCredentials(headers=dict(request.headers), cookies=dict(request.cookies))


async def require_admin(
    request: Request,
    resolver: CredentialResolver = Depends(get_resolver),
) -> AdminCredential:
    """FastAPI dependency guarding admin-only routes.

    Raises ``401 Unauthorized`` with a generic body when neither credential
    path authorizes the request.
    """
    credential = resolver.resolve(request_credentials(request))
    if not credential.is_admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return credential


def admin_actor(credential: AdminCredential, settings: Settings) -> str:
    """Name recorded in the audit log for an admin action."""
    if credential.via == CredentialVia.session and settings.admin_email:
        return settings.admin_email.lower()
    return "admin-code"


async def enforce_login_rate_limit(
    request: Request,
    limiter: RateLimiter = Depends(get_login_limiter),
) -> None:
    """Reject with 429 once a client exceeds the login window."""
    result = limiter.check(identify_client(request.headers))
    if not result.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again in a minute.",
            headers={"Retry-After": str(result.retry_after_seconds)},
        )


def reset_singletons() -> None:
    """Drop cached instances so the next request rebuilds them from settings."""
    global _member_store, _audit, _recorder, _login_limiter
    _member_store = None
    _audit = None
    _recorder = None
    _login_limiter = None
