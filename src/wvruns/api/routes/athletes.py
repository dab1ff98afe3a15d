"""Athlete lifecycle endpoints."""

from datetime import date

from fastapi import APIRouter
from pydantic import BaseModel, Field

from wvruns.api.dependencies import SeasonServiceDep
from wvruns.models import Athlete
from wvruns.services.season_service import AthleteStanding, BulkTransitionResult, RosterSummary

router = APIRouter(prefix="/athletes", tags=["athletes"])


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================


class TransitionRequest(BaseModel):
    """Request body for a bulk transition. The date defaults to today."""

    reference_date: date = Field(default_factory=date.today)
    skip_already_advanced: bool = False


class GraduationYearUpdate(BaseModel):
    graduation_year: int = Field(ge=1900, le=2200)


# =============================================================================
# BULK TRANSITIONS
# =============================================================================


@router.post("/advance", response_model=BulkTransitionResult)
def advance_athletes(data: TransitionRequest, service: SeasonServiceDep) -> BulkTransitionResult:
    """Advance every non-graduated athlete by one year.

    Not idempotent: calling twice in one academic year advances twice
    unless skip_already_advanced is set.
    """
    return service.advance_all_athletes(
        data.reference_date,
        skip_already_advanced=data.skip_already_advanced,
    )


@router.post("/graduate", response_model=BulkTransitionResult)
def graduate_seniors(data: TransitionRequest, service: SeasonServiceDep) -> BulkTransitionResult:
    """Graduate the current academic year's seniors."""
    return service.graduate_all_seniors(data.reference_date)


# =============================================================================
# READ
# =============================================================================


@router.get("/roster", response_model=RosterSummary)
def roster_summary(
    service: SeasonServiceDep,
    reference_date: date | None = None,
) -> RosterSummary:
    return service.roster_summary(reference_date or date.today())


@router.get("/{slug}/status", response_model=AthleteStanding)
def athlete_status(
    slug: str,
    service: SeasonServiceDep,
    reference_date: date | None = None,
) -> AthleteStanding:
    """Lifecycle standing of one athlete, today unless reference_date is given."""
    return service.classify_athlete(slug, reference_date or date.today())


# =============================================================================
# UPDATE
# =============================================================================


@router.patch("/{slug}/graduation-year", response_model=Athlete)
def set_graduation_year(
    slug: str,
    data: GraduationYearUpdate,
    service: SeasonServiceDep,
) -> Athlete:
    """Correct an athlete's graduation year."""
    return service.correct_graduation_year(slug, data.graduation_year)
