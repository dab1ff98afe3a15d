"""Data Access Object for Results."""

import math

from wvruns.dao.base import BaseDAO
from wvruns.models.athlete import Gender
from wvruns.models.result import Result
from wvruns.store.base import split_path


class ResultDAO(BaseDAO[Result]):
    """DAO for Result entities.

    Results are only ever appended. There is no update path and the core
    never deletes them.
    """

    collection = "results"
    model_class = Result

    def append_all(self, results: list[Result]) -> list[Result]:
        """Write results with a single batch call.

        Returns:
            The results with their store-assigned ids
        """
        if not results:
            return []
        paths = self.store.append_all(self.path(), [self._to_db(r) for r in results])
        return [
            r.model_copy(update={"id": split_path(p)[-1]})
            for r, p in zip(results, paths, strict=True)
        ]

    def find_by_meet(self, meet_slug: str) -> list[Result]:
        """Results for a meet, fastest first; rows without a time sort last."""
        results = self.find_by("meet_slug", meet_slug)
        return sorted(results, key=_time_key)

    def has_batch(self, batch_id: str) -> bool:
        """Check whether any result was stored under an import batch id.

        Imports never check this themselves; callers that want
        exactly-once imports do.
        """
        return bool(self.store.query(self.path(), "batch_id", batch_id))

    def _to_model(self, row: dict, key: str | None = None) -> Result:
        """Convert stored record to Result model."""
        return Result(
            id=row.get("id") or key,
            athlete_name=row["athlete_name"],
            school_slug=row.get("school_slug"),
            meet_slug=row["meet_slug"],
            gender=Gender(row["gender"]) if row.get("gender") else None,
            time_seconds=row.get("time"),
            distance_meters=row.get("distance"),
            place=row.get("place"),
            batch_id=row.get("batch_id"),
        )

    def _to_db(self, model: Result) -> dict:
        """Convert Result model to stored record."""
        data = {
            "athlete_name": model.athlete_name,
            "meet_slug": model.meet_slug,
        }

        if model.school_slug:
            data["school_slug"] = model.school_slug
        if model.gender:
            data["gender"] = model.gender.value
        if model.time_seconds is not None:
            data["time"] = model.time_seconds
        if model.distance_meters is not None:
            data["distance"] = model.distance_meters
        if model.place is not None:
            data["place"] = model.place
        if model.batch_id:
            data["batch_id"] = model.batch_id

        return data


def _time_key(result: Result) -> float:
    return result.time_seconds if result.time_seconds is not None else math.inf
