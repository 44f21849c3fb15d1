"""Tests for environment-driven settings."""

from pathlib import Path

from nwcommunity.config import load_settings
from nwcommunity.ratelimit.models import RateLimitConfig


def test_defaults_without_environment(monkeypatch):
    for name in ("NWC_ADMIN_CODE", "NWC_ADMIN_EMAIL", "NWC_LOGIN_WINDOW_MS", "NWC_LOGIN_MAX_REQUESTS"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.admin_code == ""
    assert settings.login_window_ms == 60_000
    assert settings.login_max_requests == 5


def test_environment_values_are_read(monkeypatch, tmp_path):
    monkeypatch.setenv("NWC_ADMIN_EMAIL", " admin@nwcommunity.test ")
    monkeypatch.setenv("NWC_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("NWC_LOGIN_MAX_REQUESTS", "10")
    monkeypatch.setenv("NWC_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.admin_email == "admin@nwcommunity.test"
    assert settings.data_dir == Path(tmp_path)
    assert settings.login_max_requests == 10
    assert settings.log_level == "DEBUG"


def test_non_positive_limits_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("NWC_LOGIN_MAX_REQUESTS", "0")
    monkeypatch.setenv("NWC_LOGIN_WINDOW_MS", "-5")
    settings = load_settings()
    assert settings.login_max_requests == 5
    assert settings.login_window_ms == 60_000
    RateLimitConfig(window_ms=settings.login_window_ms, max_requests=settings.login_max_requests)


def test_unparseable_limits_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("NWC_LOGIN_MAX_REQUESTS", "many")
    assert load_settings().login_max_requests == 5
