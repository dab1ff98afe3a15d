"""Business logic services."""

from wvruns.services.import_schemas import (
    RESULT_COLUMNS,
    CsvRow,
    ImportReport,
    RejectedRow,
    RowError,
)
from wvruns.services.import_service import ImportService, csv_template, parse_results_csv
from wvruns.services.lifecycle import academic_year, classify
from wvruns.services.season_service import (
    AthleteStanding,
    BulkTransitionResult,
    RosterSummary,
    SeasonData,
    SeasonService,
)

__all__ = [
    # Import
    "RESULT_COLUMNS",
    "CsvRow",
    "ImportReport",
    "ImportService",
    "RejectedRow",
    "RowError",
    "csv_template",
    "parse_results_csv",
    # Lifecycle
    "AthleteStanding",
    "BulkTransitionResult",
    "RosterSummary",
    "SeasonData",
    "SeasonService",
    "academic_year",
    "classify",
]
