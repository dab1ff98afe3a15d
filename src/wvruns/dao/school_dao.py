"""Data Access Object for Schools."""

from wvruns.dao.base import BaseDAO
from wvruns.models.school import School


class SchoolDAO(BaseDAO[School]):
    """DAO for School entities. Schools are created by the admin side."""

    collection = "schools"
    model_class = School

    def get_by_slug(self, slug: str) -> School | None:
        return self.get(slug)

    def get_names(self) -> dict[str, str]:
        """Map of slug to display name for every school."""
        return {s.slug: s.name for s in self.get_all()}

    def create(self, school: School) -> School:
        return self.save(school.slug, school)

    def _to_model(self, row: dict, key: str | None = None) -> School:
        return School(slug=row.get("slug") or key, name=row["name"])

    def _to_db(self, model: School) -> dict:
        return {"slug": model.slug, "name": model.name}
