"""Shared fixtures."""

from datetime import UTC, datetime

import pytest

from wvruns.config import get_settings
from wvruns.dao import AthleteDAO
from wvruns.models import Athlete, Gender
from wvruns.store import MemoryStore

FIXED_NOW = datetime(2025, 5, 20, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> MemoryStore:
    """Provide an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def fixed_now():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def roster(store: MemoryStore) -> dict[str, Athlete]:
    """Four athletes spread over the 2025-2028 classes."""
    dao = AthleteDAO(store)
    athletes = [
        Athlete(
            slug="amy-2025",
            name="Amy Cole",
            school_slug="morgantown",
            gender=Gender.FEMALE,
            graduation_year=2025,
        ),
        Athlete(
            slug="ben-2026",
            name="Ben Ortiz",
            school_slug="morgantown",
            gender=Gender.MALE,
            graduation_year=2026,
        ),
        Athlete(
            slug="cara-2027",
            name="Cara Lin",
            school_slug="bridgeport",
            gender=Gender.FEMALE,
            graduation_year=2027,
        ),
        Athlete(
            slug="dan-2028",
            name="Dan Price",
            school_slug="bridgeport",
            gender=Gender.MALE,
            graduation_year=2028,
        ),
    ]
    for athlete in athletes:
        dao.create(athlete)
    return {a.slug: a for a in athletes}
