"""Data Access Object for Athletes."""

from datetime import datetime

from wvruns.dao.base import BaseDAO
from wvruns.models.athlete import Athlete, AthleteStatus, Gender


class AthleteDAO(BaseDAO[Athlete]):
    """DAO for Athlete entities."""

    collection = "athletes"
    model_class = Athlete

    def get_by_slug(self, slug: str) -> Athlete | None:
        return self.get(slug)

    def create(self, athlete: Athlete) -> Athlete:
        return self.save(athlete.slug, athlete)

    def find_by_graduation_year(self, graduation_year: int) -> list[Athlete]:
        return self.find_by("graduation_year", graduation_year)

    def find_graduating_on_or_after(self, year: int) -> list[Athlete]:
        """Athletes whose graduation year is year or later.

        The store only filters on equality, so the range is applied here.
        """
        return [a for a in self.get_all() if a.graduation_year >= year]

    def partial_update(self, slug: str, updates: dict) -> Athlete | None:
        """Update specific fields of an athlete.

        Args:
            slug: Athlete slug
            updates: Dictionary of field names to new values

        Returns:
            Updated Athlete or None if not found
        """
        if not self.exists(slug):
            return None

        data = {k: v for k, v in updates.items() if v is not None}
        if not data:
            return self.get(slug)

        # Convert types for storage
        for key, value in data.items():
            if isinstance(value, (Gender, AthleteStatus)):
                data[key] = value.value
            elif isinstance(value, datetime):
                data[key] = value.isoformat()

        self.store.update(self.path(slug), data)
        return self.get(slug)

    def _to_model(self, row: dict, key: str | None = None) -> Athlete:
        """Convert stored record to Athlete model."""
        return Athlete(
            slug=row.get("slug") or key,
            name=row["name"],
            school_slug=row.get("school_slug"),
            gender=Gender(row["gender"]) if row.get("gender") else None,
            graduation_year=int(row["graduation_year"]),
            status=AthleteStatus(row.get("status") or AthleteStatus.ACTIVE),
            advanced_at=_parse_datetime(row.get("advanced_at")),
            graduated_at=_parse_datetime(row.get("graduated_at")),
            last_advanced_academic_year=row.get("last_advanced_academic_year"),
        )

    def _to_db(self, model: Athlete) -> dict:
        """Convert Athlete model to stored record."""
        data = {
            "slug": model.slug,
            "name": model.name,
            "graduation_year": model.graduation_year,
            "status": model.status.value,
        }

        if model.school_slug:
            data["school_slug"] = model.school_slug
        if model.gender:
            data["gender"] = model.gender.value
        if model.advanced_at:
            data["advanced_at"] = model.advanced_at.isoformat()
        if model.graduated_at:
            data["graduated_at"] = model.graduated_at.isoformat()
        if model.last_advanced_academic_year is not None:
            data["last_advanced_academic_year"] = model.last_advanced_academic_year

        return data


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
