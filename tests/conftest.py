"""
Shared test fixtures for wpengine-mcp tests.
Patches config module to avoid loading a real .env and making API calls.
"""

import logging
import os
import sys
from unittest.mock import MagicMock

import pytest

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wpengine_mcp.client import WPEngineClient  # noqa: E402
from wpengine_mcp.models import Success  # noqa: E402

SITE_ID = "11111111-1111-1111-1111-111111111111"
ACCOUNT_ID = "22222222-2222-2222-2222-222222222222"
INSTALL_ID = "33333333-3333-3333-3333-333333333333"
DOMAIN_ID = "44444444-4444-4444-4444-444444444444"
USER_ID = "55555555-5555-5555-5555-555555555555"


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Ensure every test starts with a clean config state.
    Prevents tests from reading the real .env or leaking log handlers."""
    from wpengine_mcp import config

    monkeypatch.setattr(config, "env", {})
    monkeypatch.setattr(config, "USERNAME", "fake-user")
    monkeypatch.setattr(config, "PASSWORD", "fake-pass")
    monkeypatch.setattr(config, "API_TOKEN", "")
    monkeypatch.setattr(config, "BASE_URL", "https://api.wpengineapi.com/v1")
    monkeypatch.setattr(config, "HTTP_TIMEOUT_SECONDS", 30)
    monkeypatch.setattr(config, "HTTP_LOG_ENABLED", False)
    monkeypatch.setattr(config, "STARTUP_CHECK", False)

    yield
    logger = logging.getLogger("wpengine_mcp")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def client():
    """A WPEngineClient mock whose public methods all return Success({"ok": True})."""
    mock = MagicMock(spec=WPEngineClient)
    for name in dir(WPEngineClient):
        if not name.startswith("_"):
            getattr(mock, name).return_value = Success({"ok": True})
    return mock
