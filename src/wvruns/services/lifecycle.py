"""Academic-year arithmetic and athlete lifecycle classification.

Everything here is pure: the reference date is always passed in.
"""

from datetime import date
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from wvruns.models.athlete import Athlete

# Academic years run August through July (August is month 8 here)
ACADEMIC_YEAR_START_MONTH = 8

GRADUATION_MONTH = 6
GRADUATION_DAY = 1


class Grade(StrEnum):
    """Class an active athlete moves into at the next academic year.

    Athletes in their final year already have the Senior state, so an
    athlete one year out is a rising senior and is currently a junior.
    """

    RISING_FRESHMAN = "Rising Freshman"
    RISING_SOPHOMORE = "Rising Sophomore"
    RISING_JUNIOR = "Rising Junior"
    RISING_SENIOR = "Rising Senior"


GRADE_ORDER = [
    Grade.RISING_FRESHMAN,
    Grade.RISING_SOPHOMORE,
    Grade.RISING_JUNIOR,
    Grade.RISING_SENIOR,
]


class LifecycleState(StrEnum):
    ACTIVE = "active"
    SENIOR = "senior"
    GRADUATED = "graduated"
    UNKNOWN = "unknown"


class Active(BaseModel):
    state: Literal[LifecycleState.ACTIVE] = LifecycleState.ACTIVE
    grade: Grade
    graduating_year: int


class Senior(BaseModel):
    state: Literal[LifecycleState.SENIOR] = LifecycleState.SENIOR
    graduating_year: int
    days_until_graduation: int


class Graduated(BaseModel):
    state: Literal[LifecycleState.GRADUATED] = LifecycleState.GRADUATED
    graduated_year: int
    years_ago: int


class Unknown(BaseModel):
    state: Literal[LifecycleState.UNKNOWN] = LifecycleState.UNKNOWN
    graduating_year: int


Standing = Annotated[Active | Senior | Graduated | Unknown, Field(discriminator="state")]


def academic_year(reference_date: date) -> int:
    """Academic year containing reference_date.

    An academic year is named after the calendar year it ends in, so
    August 2024 through July 2025 is academic year 2025.
    """
    if reference_date.month >= ACADEMIC_YEAR_START_MONTH:
        return reference_date.year + 1
    return reference_date.year


def graduation_date(graduation_year: int) -> date:
    """Nominal graduation day used for countdowns."""
    return date(graduation_year, GRADUATION_MONTH, GRADUATION_DAY)


def grade_for_offset(years_remaining: int) -> Grade | None:
    """Grade for an athlete graduating years_remaining academic years out.

    GRADE_ORDER is read from the end: 1 is a rising senior, 4 a rising
    freshman. Anything outside 1..4 has no grade.
    """
    if not 1 <= years_remaining <= len(GRADE_ORDER):
        return None
    return GRADE_ORDER[len(GRADE_ORDER) - years_remaining]


def classify(athlete: Athlete, reference_date: date) -> Active | Senior | Graduated | Unknown:
    """Lifecycle standing of an athlete on reference_date.

    Derived only from graduation_year and the date; the stored status
    field is not consulted.
    """
    current = academic_year(reference_date)
    year = athlete.graduation_year

    if year < current:
        return Graduated(graduated_year=year, years_ago=current - year)

    if year == current:
        days = (graduation_date(year) - reference_date).days
        return Senior(graduating_year=year, days_until_graduation=max(days, 0))

    grade = grade_for_offset(year - current)
    if grade is None:
        return Unknown(graduating_year=year)
    return Active(grade=grade, graduating_year=year)
