"""Data Access Object for Meets."""

from datetime import date

from wvruns.dao.base import BaseDAO
from wvruns.models.meet import Meet


class MeetDAO(BaseDAO[Meet]):
    """DAO for Meet entities."""

    collection = "meets"
    model_class = Meet

    def get_by_slug(self, slug: str) -> Meet | None:
        return self.get(slug)

    def find_or_create(self, meet: Meet) -> tuple[Meet, bool]:
        """Return the stored meet for meet.slug, creating it if absent.

        The first writer wins: when the slug already exists the supplied
        name, date, location and description are ignored.

        Returns:
            Tuple of (meet, was_created)
        """
        existing = self.get(meet.slug)
        if existing:
            return (existing, False)

        self.save(meet.slug, meet)
        return (meet, True)

    def find_by_year(self, year: int) -> list[Meet]:
        """Meets held during a calendar year, oldest first."""
        meets = [m for m in self.get_all() if m.date.year == year]
        return sorted(meets, key=lambda m: m.date)

    def _to_model(self, row: dict, key: str | None = None) -> Meet:
        """Convert stored record to Meet model."""
        return Meet(
            slug=row.get("slug") or key,
            name=row["name"],
            date=date.fromisoformat(row["date"]),
            location=row.get("location"),
            description=row.get("description"),
        )

    def _to_db(self, model: Meet) -> dict:
        """Convert Meet model to stored record."""
        data = {
            "slug": model.slug,
            "name": model.name,
            "date": model.date.isoformat(),
        }

        if model.location:
            data["location"] = model.location
        if model.description:
            data["description"] = model.description

        return data
