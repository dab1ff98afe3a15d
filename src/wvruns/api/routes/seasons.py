"""Season endpoints."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from wvruns.api.dependencies import SeasonServiceDep
from wvruns.models import ArchivedSeason, Season
from wvruns.services.season_service import SeasonData

router = APIRouter(prefix="/seasons", tags=["seasons"])


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================


class SeasonUpdate(BaseModel):
    """Request body for replacing the current season. Months are 0-11."""

    year: int
    start_month: int = Field(ge=0, le=11)
    end_month: int = Field(ge=0, le=11)


# =============================================================================
# CURRENT SEASON
# =============================================================================


@router.get("/current", response_model=Season)
def get_current_season(service: SeasonServiceDep) -> Season:
    season = service.get_current_season()
    if not season:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No current season is set",
        )
    return season


@router.put("/current", response_model=Season)
def set_current_season(data: SeasonUpdate, service: SeasonServiceDep) -> Season:
    return service.set_current_season(data.year, data.start_month, data.end_month)


# =============================================================================
# ARCHIVE
# =============================================================================


@router.post("/{year}/archive", response_model=ArchivedSeason, status_code=status.HTTP_201_CREATED)
def archive_season(year: int, service: SeasonServiceDep) -> ArchivedSeason:
    """Snapshot the current season under year. Each year can be archived once."""
    return service.archive_season(year)


@router.get("/archived", response_model=list[ArchivedSeason])
def list_archived_seasons(service: SeasonServiceDep) -> list[ArchivedSeason]:
    return service.list_archived_seasons()


@router.get("/{year}", response_model=SeasonData)
def get_season_data(year: int, service: SeasonServiceDep) -> SeasonData:
    """Meets, results and athletes for a calendar year."""
    return service.get_season_data(year)
