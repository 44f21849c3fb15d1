"""Shared fixtures for the web backend tests."""

import tempfile

import pytest
from fastapi.testclient import TestClient

from nwcommunity.config import Settings
from web.backend.app.main import app
from web.backend.app.middleware.auth import get_app_settings, reset_singletons

ADMIN_CODE = "NWC-test-code"
ADMIN_EMAIL = "admin@nwcommunity.test"


@pytest.fixture
def settings():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Settings(admin_code=ADMIN_CODE, admin_email=ADMIN_EMAIL, data_dir=tmpdir)


@pytest.fixture
def client(settings):
    reset_singletons()
    app.dependency_overrides[get_app_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_singletons()
