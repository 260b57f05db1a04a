"""Pytest configuration and fixtures."""

import pytest
import structlog

from signed_urls.common.settings import Settings, get_settings
from signed_urls.signer import UrlSigner

SECRET = "hunter2"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Keep process settings isolated between tests."""
    monkeypatch.delenv("SIGNED_URLS_SECRET", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(secret=SECRET, exempt_paths=("/health", "/metrics"))


@pytest.fixture
def signer() -> UrlSigner:
    """Signer using the test secret."""
    return UrlSigner(SECRET)


@pytest.fixture
def unconfigured_signer() -> UrlSigner:
    """Signer with no secret configured."""
    return UrlSigner(None)
