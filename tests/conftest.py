"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
from datetime import date, datetime, timezone

import pytest

from stockcast.core.config import Settings, get_settings
from tests.helpers import TODAY


@pytest.fixture
def today() -> date:
    """Fixed clock for forecast dates."""
    return TODAY


@pytest.fixture
def now() -> datetime:
    """Fixed generation timestamp."""
    return datetime(2024, 1, 21, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(monkeypatch) -> Settings:
    """Default settings, isolated from .env and STOCKCAST_* variables."""
    for key in list(os.environ):
        if key.upper().startswith("STOCKCAST_"):
            monkeypatch.delenv(key)
    return Settings(_env_file=None)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Drop cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
