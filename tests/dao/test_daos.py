"""Tests for the DAOs over an in-memory store."""

from datetime import UTC, date, datetime

import pytest

from wvruns.dao import (
    ArchivedSeasonDAO,
    AthleteDAO,
    MeetDAO,
    ResultDAO,
    SchoolDAO,
    SeasonDAO,
)
from wvruns.models import (
    ArchivedSeason,
    Athlete,
    AthleteStatus,
    Gender,
    Meet,
    Result,
    School,
    Season,
)


@pytest.fixture
def athlete_dao(store) -> AthleteDAO:
    return AthleteDAO(store)


class TestSchoolDAO:
    """Tests for SchoolDAO."""

    def test_create_and_lookup(self, store):
        dao = SchoolDAO(store)
        dao.create(School(slug="morgantown", name="Morgantown High"))
        dao.create(School(slug="bridgeport", name="Bridgeport High"))

        assert dao.get_by_slug("morgantown").name == "Morgantown High"
        assert dao.get_names() == {
            "morgantown": "Morgantown High",
            "bridgeport": "Bridgeport High",
        }

    def test_delete(self, store):
        dao = SchoolDAO(store)
        dao.create(School(slug="morgantown", name="Morgantown High"))

        assert dao.delete("morgantown")
        assert not dao.delete("morgantown")
        assert dao.count() == 0


class TestAthleteDAO:
    """Tests for AthleteDAO."""

    def test_round_trip(self, athlete_dao):
        stamp = datetime(2025, 6, 2, 9, 30, tzinfo=UTC)
        athlete = Athlete(
            slug="jane-doe",
            name="Jane Doe",
            school_slug="morgantown",
            gender=Gender.FEMALE,
            graduation_year=2026,
            advanced_at=stamp,
            last_advanced_academic_year=2025,
        )
        athlete_dao.create(athlete)

        assert athlete_dao.get_by_slug("jane-doe") == athlete

    def test_stored_record_shape(self, store, athlete_dao):
        athlete_dao.create(Athlete(slug="jane-doe", name="Jane Doe", graduation_year=2026))

        assert store.get("athletes/jane-doe") == {
            "slug": "jane-doe",
            "name": "Jane Doe",
            "graduation_year": 2026,
            "status": "active",
        }

    def test_finders(self, athlete_dao, roster):
        assert [a.slug for a in athlete_dao.find_by_graduation_year(2026)] == ["ben-2026"]
        assert {a.slug for a in athlete_dao.find_graduating_on_or_after(2027)} == {
            "cara-2027",
            "dan-2028",
        }

    def test_partial_update_converts_types(self, store, athlete_dao, roster):
        stamp = datetime(2025, 6, 2, tzinfo=UTC)
        updated = athlete_dao.partial_update(
            "amy-2025",
            {"status": AthleteStatus.GRADUATED, "graduated_at": stamp, "gender": None},
        )

        assert updated.status == AthleteStatus.GRADUATED
        assert updated.graduated_at == stamp
        assert updated.gender == Gender.FEMALE
        assert store.get("athletes/amy-2025")["graduated_at"] == stamp.isoformat()

    def test_partial_update_missing(self, athlete_dao):
        assert athlete_dao.partial_update("nobody", {"graduation_year": 2025}) is None


class TestMeetDAO:
    """Tests for MeetDAO."""

    def test_find_or_create_first_writer_wins(self, store):
        dao = MeetDAO(store)
        original = Meet(slug="state", name="State Meet", date=date(2024, 11, 2))

        meet, created = dao.find_or_create(original)
        assert created
        assert meet == original

        meet, created = dao.find_or_create(original.model_copy(update={"name": "Other"}))
        assert not created
        assert meet.name == "State Meet"

    def test_find_by_year(self, store):
        dao = MeetDAO(store)
        for slug, day in [("b", date(2024, 10, 5)), ("a", date(2024, 9, 14)), ("c", date(2023, 9, 1))]:
            dao.save(slug, Meet(slug=slug, name=slug.upper(), date=day))

        assert [m.slug for m in dao.find_by_year(2024)] == ["a", "b"]

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            Meet(slug="state", name="  ", date=date(2024, 11, 2))


class TestResultDAO:
    """Tests for ResultDAO."""

    def test_append_all_assigns_ids(self, store):
        dao = ResultDAO(store)
        stored = dao.append_all(
            [
                Result(athlete_name="Slow", meet_slug="m1", time_seconds=1300.5),
                Result(athlete_name="No Time", meet_slug="m1"),
                Result(athlete_name="Fast", meet_slug="m1", time_seconds=1100.25, place=1),
            ]
        )

        assert all(r.id for r in stored)
        assert [r.athlete_name for r in dao.find_by_meet("m1")] == ["Fast", "Slow", "No Time"]

    def test_stored_column_names(self, store):
        dao = ResultDAO(store)
        (result,) = dao.append_all(
            [
                Result(
                    athlete_name="Jane Doe",
                    school_slug="morgantown",
                    meet_slug="m1",
                    gender=Gender.FEMALE,
                    time_seconds=1215.2,
                    distance_meters=5000,
                    place=2,
                )
            ]
        )

        assert store.get(f"results/{result.id}") == {
            "athlete_name": "Jane Doe",
            "school_slug": "morgantown",
            "meet_slug": "m1",
            "gender": "F",
            "time": 1215.2,
            "distance": 5000,
            "place": 2,
        }

    def test_append_nothing(self, store):
        assert ResultDAO(store).append_all([]) == []

    def test_find_by_meet_filters(self, store):
        dao = ResultDAO(store)
        dao.append_all(
            [
                Result(athlete_name="Jane Doe", school_slug="morgantown", meet_slug="m1"),
                Result(athlete_name="Jane Doe", school_slug="morgantown", meet_slug="m2"),
                Result(athlete_name="John Roe", school_slug="bridgeport", meet_slug="m2"),
            ]
        )

        assert [r.athlete_name for r in dao.find_by_meet("m2")] == ["Jane Doe", "John Roe"]


class TestSeasonDAOs:
    """Tests for SeasonDAO and ArchivedSeasonDAO."""

    def test_current_season(self, store):
        dao = SeasonDAO(store)
        assert dao.get_current() is None

        dao.set_current(Season(year=2025, start_month=7, end_month=10))

        assert store.get("seasons/current") == {"year": 2025, "start_month": 7, "end_month": 10}
        assert dao.get_current().year == 2025

    def test_archived_seasons(self, store):
        dao = ArchivedSeasonDAO(store)
        stamp = datetime(2025, 12, 1, tzinfo=UTC)
        dao.create(ArchivedSeason(year=2024, start_month=7, end_month=10, archived_at=stamp))
        dao.create(ArchivedSeason(year=2025, start_month=7, end_month=10, archived_at=stamp))

        assert dao.get_by_year(2024).archived_at == stamp
        assert dao.get_by_year(2023) is None
        assert [s.year for s in dao.get_all_sorted()] == [2025, 2024]

    def test_month_range(self):
        with pytest.raises(ValueError):
            Season(year=2025, start_month=12, end_month=10)
