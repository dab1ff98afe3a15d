"""Service for importing meet results from CSV text."""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

from wvruns.dao.meet_dao import MeetDAO
from wvruns.dao.result_dao import ResultDAO
from wvruns.errors import ErrorReason, NormalizationError, StoreError
from wvruns.logging import get_logger
from wvruns.models.meet import Meet
from wvruns.models.result import Result
from wvruns.services.import_schemas import (
    RESULT_COLUMNS,
    CsvRow,
    ImportReport,
    RejectedRow,
    ResultRow,
    RowError,
)
from wvruns.services.normalizer import (
    normalize_time,
    parse_decimal,
    parse_gender,
    parse_place,
)
from wvruns.store.base import Store

logger = get_logger(__name__)

V = TypeVar("V")

TEMPLATE_ROWS = [
    ["John Smith", "morgantown", "M", "18:30.45", "5000", "1"],
    ["Jane Doe", "university-high", "F", "20:15.20", "5000", "2"],
    ["Mike Johnson", "bridgeport", "M", "19:45.10", "5000", "3"],
]


def parse_results_csv(text: str) -> list[CsvRow]:
    """Split results CSV text into raw rows.

    The first line is the header and is skipped without being read; the
    column order is fixed. Blank lines are ignored. Values are split on
    commas, stripped, and lose one pair of wrapping double quotes.
    Embedded commas cannot be escaped.
    """
    rows: list[CsvRow] = []
    lines = text.strip().splitlines()

    for line_number, line in enumerate(lines[1:], start=2):  # Header is line 1
        if not line.strip():
            continue
        values = [_unquote(v.strip()) for v in line.split(",")]
        rows.append(CsvRow(row_number=line_number, values=values))

    return rows


def _unquote(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def csv_template() -> str:
    """CSV template with the expected header and a few sample rows."""
    lines = [",".join(RESULT_COLUMNS), *(",".join(row) for row in TEMPLATE_ROWS)]
    return "\n".join(lines)


class ImportService:
    """Validates result rows and appends the accepted ones for a meet.

    Imports are not idempotent: running the same file twice stores every
    accepted row twice. Callers that need exactly-once behaviour pass a
    batch_id and check ResultDAO.has_batch before importing.
    """

    def __init__(
        self,
        store: Store,
        meet_dao: MeetDAO | None = None,
        result_dao: ResultDAO | None = None,
    ):
        self.meet_dao = meet_dao or MeetDAO(store)
        self.result_dao = result_dao or ResultDAO(store)

    # =========================================================================
    # Entry points
    # =========================================================================

    def import_csv(
        self,
        meet: Meet,
        csv_text: str,
        batch_id: str | None = None,
        dry_run: bool = False,
    ) -> ImportReport:
        """Import results from CSV text for a meet."""
        return self._import(meet, parse_results_csv(csv_text), batch_id, dry_run)

    def import_file(
        self,
        meet: Meet,
        csv_path: Path,
        batch_id: str | None = None,
        dry_run: bool = False,
    ) -> ImportReport:
        """Import results from a CSV file for a meet."""
        text = Path(csv_path).read_text(encoding="utf-8-sig")
        return self.import_csv(meet, text, batch_id=batch_id, dry_run=dry_run)

    def import_rows(
        self,
        meet: Meet,
        rows: Sequence[Sequence[str]],
        batch_id: str | None = None,
        dry_run: bool = False,
    ) -> ImportReport:
        """Import already-split data rows (no header) for a meet.

        Row numbers in the report count the header as line 1, so the first
        data row is row 2, matching what a spreadsheet shows.
        """
        csv_rows = [
            CsvRow(row_number=i, values=list(values)) for i, values in enumerate(rows, start=2)
        ]
        return self._import(meet, csv_rows, batch_id, dry_run)

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_rows(
        self,
        meet_slug: str,
        rows: list[CsvRow],
        batch_id: str | None = None,
    ) -> tuple[list[Result], list[RejectedRow]]:
        """Validate every row in memory. Nothing is written.

        Returns:
            Tuple of (accepted results, rejected rows)
        """
        accepted: list[Result] = []
        rejected: list[RejectedRow] = []

        for row in rows:
            outcome = self.validate_row(meet_slug, row, batch_id)
            if isinstance(outcome, RejectedRow):
                rejected.append(outcome)
            else:
                accepted.append(outcome)

        return accepted, rejected

    def validate_row(
        self,
        meet_slug: str,
        row: CsvRow,
        batch_id: str | None = None,
    ) -> Result | RejectedRow:
        """Validate one row into a Result, or collect why it was rejected."""
        if len(row.values) != len(RESULT_COLUMNS):
            return RejectedRow(
                row_number=row.row_number,
                errors=[
                    RowError(
                        row_number=row.row_number,
                        field="row",
                        reason=ErrorReason.COLUMN_COUNT_MISMATCH,
                        message=(
                            f"Row has {len(row.values)} columns, "
                            f"expected {len(RESULT_COLUMNS)}"
                        ),
                    )
                ],
            )

        fields = ResultRow.from_values(row.values, row.row_number)

        # A row without a name is not checked any further
        if not fields.athlete_name:
            return RejectedRow(
                row_number=row.row_number,
                errors=[
                    RowError(
                        row_number=row.row_number,
                        field="athlete_name",
                        reason=ErrorReason.MISSING_REQUIRED_FIELD,
                        message="Missing required field: athlete_name",
                    )
                ],
            )

        errors: list[RowError] = []
        time_seconds = self._check(errors, fields, "time", normalize_time)
        distance = self._check(errors, fields, "distance", parse_decimal)
        place = self._check(errors, fields, "place", parse_place)
        gender = self._check(errors, fields, "gender", parse_gender)

        if errors:
            return RejectedRow(row_number=row.row_number, errors=errors)

        return Result(
            athlete_name=fields.athlete_name,
            school_slug=fields.school_slug,
            meet_slug=meet_slug,
            gender=gender,
            time_seconds=time_seconds,
            distance_meters=distance,
            place=place,
            batch_id=batch_id,
        )

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _check(
        self,
        errors: list[RowError],
        fields: ResultRow,
        name: str,
        parse: Callable[[str], V],
    ) -> V | None:
        """Run one field through its parser, recording any failure."""
        raw = getattr(fields, name)
        if raw is None:
            return None
        try:
            return parse(raw)
        except NormalizationError as e:
            errors.append(
                RowError(
                    row_number=fields.row_number,
                    field=name,
                    reason=e.reason,
                    message=e.message,
                )
            )
            return None

    def _import(
        self,
        meet: Meet,
        rows: list[CsvRow],
        batch_id: str | None,
        dry_run: bool,
    ) -> ImportReport:
        accepted, rejected = self.validate_rows(meet.slug, rows, batch_id)
        report = ImportReport(
            meet_slug=meet.slug,
            total_rows=len(rows),
            accepted=accepted,
            rejected=rejected,
            dry_run=dry_run,
            batch_id=batch_id,
        )

        for rejected_row in rejected:
            logger.info(
                "result_row_rejected",
                meet_slug=meet.slug,
                row_number=rejected_row.row_number,
                reasons=rejected_row.reasons,
            )

        if dry_run or not accepted:
            logger.info(
                "results_import_skipped_write",
                meet_slug=meet.slug,
                dry_run=dry_run,
                total_rows=report.total_rows,
                rejected=report.rejected_count,
            )
            return report

        try:
            _, created = self.meet_dao.find_or_create(meet)
            report.meet_created = created
            report.accepted = self.result_dao.append_all(accepted)
        except StoreError as e:
            logger.error(
                "results_import_failed",
                meet_slug=meet.slug,
                accepted=len(accepted),
                error=str(e),
            )
            report.mark_failed(
                ErrorReason.PERSISTENCE_FAILURE,
                f"Database error: {e}. None of the {len(accepted)} accepted rows "
                "can be assumed saved",
            )
            return report

        report.persisted = True
        logger.info(
            "results_imported",
            meet_slug=meet.slug,
            meet_created=report.meet_created,
            batch_id=batch_id,
            total_rows=report.total_rows,
            accepted=report.accepted_count,
            rejected=report.rejected_count,
        )
        return report
