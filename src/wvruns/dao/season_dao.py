"""Data Access Objects for the current and archived seasons."""

from datetime import datetime

from wvruns.dao.base import BaseDAO
from wvruns.models.season import ArchivedSeason, Season

CURRENT_KEY = "current"


class SeasonDAO(BaseDAO[Season]):
    """DAO for the single current season record."""

    collection = "seasons"
    model_class = Season

    def get_current(self) -> Season | None:
        return self.get(CURRENT_KEY)

    def set_current(self, season: Season) -> Season:
        """Overwrite the current season."""
        return self.save(CURRENT_KEY, season)

    def _to_model(self, row: dict, key: str | None = None) -> Season:
        return Season(
            year=int(row["year"]),
            start_month=int(row["start_month"]),
            end_month=int(row["end_month"]),
        )

    def _to_db(self, model: Season) -> dict:
        return {
            "year": model.year,
            "start_month": model.start_month,
            "end_month": model.end_month,
        }


class ArchivedSeasonDAO(BaseDAO[ArchivedSeason]):
    """DAO for archived season snapshots, keyed by year."""

    collection = "archived_seasons"
    model_class = ArchivedSeason

    def get_by_year(self, year: int) -> ArchivedSeason | None:
        return self.get(str(year))

    def create(self, season: ArchivedSeason, year: int | None = None) -> ArchivedSeason:
        """Store a snapshot under year, defaulting to the snapshot's own year."""
        return self.save(str(season.year if year is None else year), season)

    def get_all_sorted(self) -> list[ArchivedSeason]:
        """Archived seasons, most recent year first."""
        return sorted(self.get_all(), key=lambda s: s.year, reverse=True)

    def _to_model(self, row: dict, key: str | None = None) -> ArchivedSeason:
        return ArchivedSeason(
            year=int(row["year"]),
            start_month=int(row["start_month"]),
            end_month=int(row["end_month"]),
            archived_at=datetime.fromisoformat(row["archived_at"]),
        )

    def _to_db(self, model: ArchivedSeason) -> dict:
        return {
            "year": model.year,
            "start_month": model.start_month,
            "end_month": model.end_month,
            "archived_at": model.archived_at.isoformat(),
        }
