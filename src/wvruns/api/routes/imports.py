"""Result import and listing endpoints."""

from datetime import date

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, field_validator

from wvruns import get_logger
from wvruns.api.dependencies import ImportServiceDep, ResultDAODep
from wvruns.models import Gender, Meet, Result
from wvruns.services.import_schemas import ImportReport
from wvruns.services.import_service import csv_template
from wvruns.services.normalizer import calculate_pace, format_duration

logger = get_logger(__name__)

router = APIRouter(tags=["results"])


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================


class ResultImportRequest(BaseModel):
    """Request body for importing a results file into a meet.

    Meet metadata is only used when the meet does not exist yet.
    """

    meet_name: str
    meet_date: date
    location: str | None = None
    description: str | None = None
    csv: str
    batch_id: str | None = None
    dry_run: bool = False

    @field_validator("meet_name")
    @classmethod
    def validate_meet_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class ResultResponse(BaseModel):
    """A stored result with display fields."""

    id: str | None
    athlete_name: str
    school_slug: str | None
    gender: Gender | None
    time_seconds: float | None
    time_formatted: str | None
    pace: str | None
    distance_meters: float | None
    place: int | None

    @classmethod
    def from_result(cls, result: Result) -> "ResultResponse":
        """Create response from Result model."""
        seconds = result.time_seconds
        return cls(
            id=result.id,
            athlete_name=result.athlete_name,
            school_slug=result.school_slug,
            gender=result.gender,
            time_seconds=seconds,
            time_formatted=format_duration(seconds) if seconds is not None else None,
            pace=calculate_pace(seconds, result.distance_meters) if seconds is not None else None,
            distance_meters=result.distance_meters,
            place=result.place,
        )


# =============================================================================
# IMPORT
# =============================================================================


@router.post("/meets/{slug}/results/import", response_model=ImportReport)
def import_results(
    slug: str,
    data: ResultImportRequest,
    service: ImportServiceDep,
    results: ResultDAODep,
):
    """Import CSV results for a meet, creating the meet on first use.

    A batch_id that is already stored is refused so a retried upload is
    not applied twice.
    """
    if data.batch_id and results.has_batch(data.batch_id):
        logger.warning("duplicate_batch_refused", meet_slug=slug, batch_id=data.batch_id)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Batch '{data.batch_id}' has already been imported",
        )

    meet = Meet(
        slug=slug,
        name=data.meet_name,
        date=data.meet_date,
        location=data.location,
        description=data.description,
    )
    report = service.import_csv(meet, data.csv, batch_id=data.batch_id, dry_run=data.dry_run)

    if not report.success:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=report.model_dump(mode="json"),
        )
    return report


@router.get("/results/template", response_class=PlainTextResponse)
def results_template() -> PlainTextResponse:
    """Download the CSV template."""
    return PlainTextResponse(
        csv_template(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=results-template.csv"},
    )


# =============================================================================
# READ
# =============================================================================


@router.get("/meets/{slug}/results", response_model=list[ResultResponse])
def list_meet_results(slug: str, results: ResultDAODep) -> list[ResultResponse]:
    """Results for a meet, fastest first."""
    return [ResultResponse.from_result(r) for r in results.find_by_meet(slug)]
