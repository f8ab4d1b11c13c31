"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

_SETTINGS_ENV = (
    "QUOTA_PROBE_PROBE_TIMEOUT_SECONDS",
    "QUOTA_PROBE_FETCH_TIMEOUT_SECONDS",
    "QUOTA_PROBE_COMMAND_TIMEOUT_SECONDS",
    "QUOTA_PROBE_IDE_NAME",
    "QUOTA_PROBE_DEBUG",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep a developer's shell settings out of the tests."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
