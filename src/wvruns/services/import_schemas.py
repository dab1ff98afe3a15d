"""Pydantic schemas for CSV result imports."""

from pydantic import BaseModel, computed_field, field_validator

from wvruns.errors import ErrorReason
from wvruns.models.result import Result

# Fixed column order of a results file. The header line itself is never read.
RESULT_COLUMNS: tuple[str, ...] = (
    "athlete_name",
    "school_slug",
    "gender",
    "time",
    "distance",
    "place",
)


class CsvRow(BaseModel):
    """Raw values of one data line, with its line number in the file."""

    row_number: int
    values: list[str]


class ResultRow(BaseModel):
    """A results line mapped onto the fixed column schema.

    Every field is optional text here; blank values become None.
    Type conversion happens in the import service.
    """

    athlete_name: str | None = None
    school_slug: str | None = None
    gender: str | None = None
    time: str | None = None
    distance: str | None = None
    place: str | None = None
    row_number: int = 0

    @field_validator("athlete_name", "school_slug", "gender", "time", "distance", "place")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Strip whitespace and handle empty strings."""
        if v is None:
            return None
        v = v.strip()
        return v if v else None

    @classmethod
    def from_values(cls, values: list[str], row_number: int) -> "ResultRow":
        """Build from raw values already known to match RESULT_COLUMNS."""
        return cls(row_number=row_number, **dict(zip(RESULT_COLUMNS, values, strict=True)))


class RowError(BaseModel):
    """Why one field of one row was rejected."""

    row_number: int
    field: str
    reason: ErrorReason
    message: str

    def __str__(self) -> str:
        return f"{self.reason} ({self.field}): {self.message}"


class RejectedRow(BaseModel):
    """A row left out of the import, with every reason found."""

    row_number: int
    errors: list[RowError] = []

    @computed_field
    @property
    def reasons(self) -> list[str]:
        """Human-readable reason strings, one per failing field."""
        return [str(e) for e in self.errors]

    def has_reason(self, reason: ErrorReason) -> bool:
        return any(e.reason == reason for e in self.errors)


class ImportReport(BaseModel):
    """Outcome of one import call.

    accepted holds every row that passed validation. persisted says
    whether they were written; when the write fails, failure explains why
    and none of the accepted rows can be assumed stored.
    """

    meet_slug: str
    meet_created: bool = False
    total_rows: int = 0
    accepted: list[Result] = []
    rejected: list[RejectedRow] = []
    persisted: bool = False
    dry_run: bool = False
    batch_id: str | None = None
    failure_reason: ErrorReason | None = None
    failure: str | None = None

    @computed_field
    @property
    def success(self) -> bool:
        return self.failure_reason is None

    @property
    def accepted_count(self) -> int:
        return len(self.accepted)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)

    def mark_failed(self, reason: ErrorReason, message: str) -> None:
        """Record a batch-level failure."""
        self.failure_reason = reason
        self.failure = message
        self.persisted = False
