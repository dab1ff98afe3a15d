"""Service for season transitions over the athlete roster."""

from collections import Counter
from collections.abc import Callable
from datetime import UTC, date, datetime

from pydantic import BaseModel

from wvruns.dao.athlete_dao import AthleteDAO
from wvruns.dao.meet_dao import MeetDAO
from wvruns.dao.result_dao import ResultDAO
from wvruns.dao.season_dao import ArchivedSeasonDAO, SeasonDAO
from wvruns.errors import AthleteNotFound, NoCurrentSeason, SeasonAlreadyArchived, StoreError
from wvruns.logging import get_logger
from wvruns.models.athlete import Athlete, AthleteStatus
from wvruns.models.meet import Meet
from wvruns.models.result import Result
from wvruns.models.season import ArchivedSeason, Season
from wvruns.services.lifecycle import (
    Active,
    LifecycleState,
    Standing,
    academic_year,
    classify,
)
from wvruns.store.base import Store

logger = get_logger(__name__)


# =============================================================================
# Result schemas
# =============================================================================


class BulkTransitionResult(BaseModel):
    """Outcome of a bulk athlete transition.

    count and affected cover the athletes actually written. failed lists
    the slugs whose write failed; they were left as they were.
    """

    success: bool = True
    academic_year: int
    count: int = 0
    affected: list[str] = []
    failed: list[str] = []
    skipped: list[str] = []


class AthleteStanding(BaseModel):
    athlete: Athlete
    academic_year: int
    standing: Standing


class RosterSummary(BaseModel):
    """Roster headcount by lifecycle state on a reference date."""

    reference_date: date
    academic_year: int
    total: int = 0
    by_state: dict[LifecycleState, int] = {}
    by_grade: dict[str, int] = {}


class SeasonData(BaseModel):
    """Everything recorded for one calendar year of competition."""

    year: int
    meet_count: int
    result_count: int
    athlete_count: int
    meets: list[Meet]
    results: list[Result]
    athletes: list[Athlete]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SeasonService:
    """Season lifecycle operations.

    Bulk transitions read the roster once and then write each affected
    athlete separately. Nothing stops two calls in the same academic year
    from both applying; pass skip_already_advanced=True to
    advance_all_athletes when that matters, or serialize calls externally.
    """

    def __init__(
        self,
        store: Store,
        athlete_dao: AthleteDAO | None = None,
        meet_dao: MeetDAO | None = None,
        result_dao: ResultDAO | None = None,
        season_dao: SeasonDAO | None = None,
        archived_dao: ArchivedSeasonDAO | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        self.athlete_dao = athlete_dao or AthleteDAO(store)
        self.meet_dao = meet_dao or MeetDAO(store)
        self.result_dao = result_dao or ResultDAO(store)
        self.season_dao = season_dao or SeasonDAO(store)
        self.archived_dao = archived_dao or ArchivedSeasonDAO(store)
        self.now = now or _utcnow

    # =========================================================================
    # Athlete transitions
    # =========================================================================

    def advance_all_athletes(
        self,
        reference_date: date,
        skip_already_advanced: bool = False,
    ) -> BulkTransitionResult:
        """Move every non-graduated class one year closer to graduation.

        Each athlete with graduation_year >= the academic year of
        reference_date gets graduation_year - 1 and an advanced_at stamp.
        Calling this twice in one academic year decrements twice unless
        skip_already_advanced is set.
        """
        year = academic_year(reference_date)
        stamp = self.now()
        result = BulkTransitionResult(academic_year=year)

        for athlete in self.athlete_dao.find_graduating_on_or_after(year):
            if skip_already_advanced and athlete.last_advanced_academic_year == year:
                result.skipped.append(athlete.slug)
                continue

            self._apply(
                result,
                athlete,
                {
                    "graduation_year": athlete.graduation_year - 1,
                    "advanced_at": stamp,
                    "last_advanced_academic_year": year,
                },
            )

        logger.info(
            "athletes_advanced",
            academic_year=year,
            count=result.count,
            failed=len(result.failed),
            skipped=len(result.skipped),
        )
        return result

    def graduate_all_seniors(self, reference_date: date) -> BulkTransitionResult:
        """Mark this academic year's seniors as graduated.

        Seniors get status graduated, graduation_year - 1 and a
        graduated_at stamp. Everyone else is untouched.
        """
        year = academic_year(reference_date)
        stamp = self.now()
        result = BulkTransitionResult(academic_year=year)

        for athlete in self.athlete_dao.find_by_graduation_year(year):
            self._apply(
                result,
                athlete,
                {
                    "status": AthleteStatus.GRADUATED,
                    "graduation_year": athlete.graduation_year - 1,
                    "graduated_at": stamp,
                },
            )

        logger.info(
            "seniors_graduated",
            academic_year=year,
            count=result.count,
            failed=len(result.failed),
        )
        return result

    def correct_graduation_year(self, slug: str, graduation_year: int) -> Athlete:
        """Set an athlete's graduation year directly.

        This is the only way a graduation year moves later; bulk
        transitions only ever decrement it.
        """
        updated = self.athlete_dao.partial_update(slug, {"graduation_year": graduation_year})
        if updated is None:
            raise AthleteNotFound(slug)

        logger.info("graduation_year_corrected", slug=slug, graduation_year=graduation_year)
        return updated

    def _apply(self, result: BulkTransitionResult, athlete: Athlete, updates: dict) -> None:
        try:
            updated = self.athlete_dao.partial_update(athlete.slug, updates)
        except StoreError as e:
            logger.warning("athlete_update_failed", slug=athlete.slug, error=str(e))
            updated = None
        else:
            if updated is None:
                logger.warning("athlete_update_failed", slug=athlete.slug, error="not found")

        if updated is None:
            result.failed.append(athlete.slug)
            result.success = False
            return

        result.affected.append(athlete.name)
        result.count += 1

    # =========================================================================
    # Classification
    # =========================================================================

    def classify_athlete(self, slug: str, reference_date: date) -> AthleteStanding:
        athlete = self.athlete_dao.get_by_slug(slug)
        if athlete is None:
            raise AthleteNotFound(slug)
        return AthleteStanding(
            athlete=athlete,
            academic_year=academic_year(reference_date),
            standing=classify(athlete, reference_date),
        )

    def roster_summary(self, reference_date: date) -> RosterSummary:
        """Count athletes by lifecycle state, and active athletes by grade."""
        states: Counter[LifecycleState] = Counter()
        grades: Counter[str] = Counter()
        athletes = self.athlete_dao.get_all()

        for athlete in athletes:
            standing = classify(athlete, reference_date)
            states[standing.state] += 1
            if isinstance(standing, Active):
                grades[standing.grade.value] += 1

        return RosterSummary(
            reference_date=reference_date,
            academic_year=academic_year(reference_date),
            total=len(athletes),
            by_state=dict(states),
            by_grade=dict(grades),
        )

    # =========================================================================
    # Seasons
    # =========================================================================

    def get_current_season(self) -> Season | None:
        return self.season_dao.get_current()

    def set_current_season(self, year: int, start_month: int, end_month: int) -> Season:
        """Replace the current season record."""
        season = Season(year=year, start_month=start_month, end_month=end_month)
        self.season_dao.set_current(season)
        logger.info("season_set", year=year, start_month=start_month, end_month=end_month)
        return season

    def archive_season(self, year: int) -> ArchivedSeason:
        """Snapshot the current season under year.

        The snapshot is the current record unchanged, so its own year is
        kept even when it differs from the archive key. The current season
        stays as it is. Archives are write-once.

        Raises:
            NoCurrentSeason: nothing to copy
            SeasonAlreadyArchived: year already has an archive
        """
        current = self.season_dao.get_current()
        if current is None:
            raise NoCurrentSeason()
        if self.archived_dao.get_by_year(year) is not None:
            raise SeasonAlreadyArchived(year)

        archived = ArchivedSeason(**current.model_dump(), archived_at=self.now())
        self.archived_dao.create(archived, year=year)
        logger.info("season_archived", year=year, current_year=current.year)
        return archived

    def list_archived_seasons(self) -> list[ArchivedSeason]:
        return self.archived_dao.get_all_sorted()

    def get_season_data(self, year: int) -> SeasonData:
        """Meets held in calendar year, their results, and the athletes named in them."""
        meets = self.meet_dao.find_by_year(year)
        meet_slugs = {m.slug for m in meets}

        results = [r for r in self.result_dao.get_all() if r.meet_slug in meet_slugs]
        names = {r.athlete_name for r in results}
        athletes = [a for a in self.athlete_dao.get_all() if a.name in names]

        return SeasonData(
            year=year,
            meet_count=len(meets),
            result_count=len(results),
            athlete_count=len(athletes),
            meets=meets,
            results=results,
            athletes=athletes,
        )
