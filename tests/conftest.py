"""Pytest configuration and shared fixtures for all tests."""

import pytest

CONFIG_ENV_VARS = (
    "ACCESS_TOKEN_URL",
    "CLIENT_ID",
    "CLIENT_SECRET",
    "API_KEY",
    "PRODUCT_ID",
    "NOTES",
    "ZIP_FILE",
    "SENTRY_DSN",
)


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests.

    Tests that specifically exercise Sentry filtering call
    initialize_sentry() with their own SENTRY_DSN.
    """
    monkeypatch.setenv("TELEMETRY", "false")


@pytest.fixture(autouse=True)
def isolate_config_env(monkeypatch):
    """Keep a developer's real credentials out of CLI tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
