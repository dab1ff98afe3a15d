"""Result model for a single finisher at a meet."""

from pydantic import BaseModel

from wvruns.models.athlete import Gender


class Result(BaseModel):
    """One finisher's line from an imported meet file.

    Results are append-only. They have no natural identity beyond the key
    the store assigns on insert, so the same file imported twice yields
    two records per finisher.
    """

    id: str | None = None  # Store-assigned key
    athlete_name: str
    school_slug: str | None = None
    meet_slug: str
    gender: Gender | None = None
    time_seconds: float | None = None  # Hundredths precision
    distance_meters: float | None = None
    place: int | None = None
    batch_id: str | None = None  # Caller-supplied import batch, if any
