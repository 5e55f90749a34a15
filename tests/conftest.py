"""
Test Configuration and Fixtures

Settings isolation plus common workers, shifts and templates.
"""

import pytest

from payroll_engines.config import get_settings
from payroll_engines.schemas.schedule import DayOfWeek
from tests.factories import make_template, make_worker


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def override_settings(monkeypatch):
    """Set environment variables and reload settings."""

    def _override(**values):
        for key, value in values.items():
            monkeypatch.setenv(key.upper(), str(value))
        get_settings.cache_clear()
        return get_settings()

    return _override


@pytest.fixture
def worker():
    return make_worker()


@pytest.fixture
def roster():
    return [
        make_worker(id=1, name="김민수"),
        make_worker(id=2, name="이지은", hourly_wage="12000"),
    ]


@pytest.fixture
def staffed_template():
    """Worker 1 on Monday 09:00-17:00 around the lunch break."""
    return make_template({DayOfWeek.MONDAY: [("09:00", "17:00", 1)]})
