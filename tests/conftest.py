"""Shared fixtures for the IP country service test suite."""

import pytest

from src.config import get_settings


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(RATE_LIMIT_IPSTACK="2", PROVIDERS="ipxapi")
    """

    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()
