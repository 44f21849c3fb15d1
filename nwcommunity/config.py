"""Environment-driven settings.

Every value is optional. An empty ``NWC_ADMIN_CODE`` or ``NWC_ADMIN_EMAIL``
disables the matching admin credential path entirely.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _default_data_dir() -> Path:
    return Path.home() / ".nwcommunity"


@dataclass
class Settings:
    """Runtime configuration for the core and the web backend."""

    admin_code: str = ""
    admin_email: str = ""
    session_cookie: str = "nwc_session"
    data_dir: Path = field(default_factory=_default_data_dir)
    login_window_ms: int = 60_000
    login_max_requests: int = 5
    log_level: str = "INFO"


def _positive_int_env(name: str, default: int) -> int:
    """Read a positive integer; anything else falls back to *default*."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_settings() -> Settings:
    """Build a :class:`Settings` from ``NWC_*`` environment variables."""
    data_dir = os.environ.get("NWC_DATA_DIR", "").strip()
    return Settings(
        admin_code=os.environ.get("NWC_ADMIN_CODE", ""),
        admin_email=os.environ.get("NWC_ADMIN_EMAIL", "").strip(),
        session_cookie=os.environ.get("NWC_SESSION_COOKIE", "") or "nwc_session",
        data_dir=Path(data_dir) if data_dir else _default_data_dir(),
        login_window_ms=_positive_int_env("NWC_LOGIN_WINDOW_MS", 60_000),
        login_max_requests=_positive_int_env("NWC_LOGIN_MAX_REQUESTS", 5),
        log_level=os.environ.get("NWC_LOG_LEVEL", "INFO").upper(),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def override_settings(settings: Optional[Settings]) -> None:
    """Replace (or with ``None``, reset) the cached settings."""
    global _settings
    _settings = settings
