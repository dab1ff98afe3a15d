"""Season models."""

from datetime import datetime

from pydantic import BaseModel, Field


class Season(BaseModel):
    """The active competitive season.

    Months are zero-based (0 = January) to match the stored records.
    """

    year: int
    start_month: int = Field(ge=0, le=11)
    end_month: int = Field(ge=0, le=11)


class ArchivedSeason(Season):
    """Frozen snapshot of a season that was once current."""

    archived_at: datetime
