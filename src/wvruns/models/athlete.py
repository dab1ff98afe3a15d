"""Athlete model."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel


class Gender(StrEnum):
    """Athlete gender for competition purposes."""

    MALE = "M"
    FEMALE = "F"


class AthleteStatus(StrEnum):
    """Roster status, changed only by season transitions."""

    ACTIVE = "active"
    GRADUATED = "graduated"


class Athlete(BaseModel):
    """A rostered runner.

    graduation_year is the class year. Season transitions move it and
    status; name, school and gender are maintained by the admin side.
    """

    slug: str
    name: str
    school_slug: str | None = None  # May point at a school that no longer exists
    gender: Gender | None = None
    graduation_year: int
    status: AthleteStatus = AthleteStatus.ACTIVE

    # Lifecycle stamps
    advanced_at: datetime | None = None
    graduated_at: datetime | None = None
    last_advanced_academic_year: int | None = None

    def __str__(self) -> str:
        return self.name

    @property
    def is_graduated(self) -> bool:
        return self.status == AthleteStatus.GRADUATED
