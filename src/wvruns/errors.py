"""Error taxonomy for result imports and lifecycle operations."""

from enum import StrEnum


class ErrorReason(StrEnum):
    """Machine-readable failure reasons surfaced to callers."""

    MALFORMED_DURATION = "MalformedDuration"
    OUT_OF_RANGE = "OutOfRange"
    MALFORMED_NUMBER = "MalformedNumber"
    INVALID_ENUM = "InvalidEnum"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    COLUMN_COUNT_MISMATCH = "ColumnCountMismatch"
    PERSISTENCE_FAILURE = "PersistenceFailure"
    ATHLETE_NOT_FOUND = "AthleteNotFound"


class WVRunsError(Exception):
    """Base class for all wvruns errors."""


# =============================================================================
# Field normalization (row-local, recoverable)
# =============================================================================


class NormalizationError(WVRunsError, ValueError):
    """A single field value could not be normalized."""

    reason: ErrorReason

    def __init__(self, message: str, value: str | float | None = None):
        super().__init__(message)
        self.message = message
        self.value = value


class MalformedDuration(NormalizationError):
    reason = ErrorReason.MALFORMED_DURATION


class OutOfRange(NormalizationError):
    reason = ErrorReason.OUT_OF_RANGE


class MalformedNumber(NormalizationError):
    reason = ErrorReason.MALFORMED_NUMBER


class InvalidEnum(NormalizationError):
    reason = ErrorReason.INVALID_ENUM


# =============================================================================
# Storage and lifecycle
# =============================================================================


class StoreError(WVRunsError):
    """The backing store rejected or failed a read or write."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class AthleteNotFound(WVRunsError):
    """A single-athlete operation referenced an unknown slug."""

    reason = ErrorReason.ATHLETE_NOT_FOUND

    def __init__(self, slug: str):
        super().__init__(f"Athlete not found: {slug}")
        self.slug = slug


class SeasonError(WVRunsError):
    """A season transition could not be applied."""


class NoCurrentSeason(SeasonError):
    def __init__(self) -> None:
        super().__init__("No current season is set")


class SeasonAlreadyArchived(SeasonError):
    def __init__(self, year: int):
        super().__init__(f"Season {year} is already archived")
        self.year = year
