"""Pydantic models for meet results and the athlete roster."""

from wvruns.models.athlete import Athlete, AthleteStatus, Gender
from wvruns.models.meet import Meet
from wvruns.models.result import Result
from wvruns.models.school import School
from wvruns.models.season import ArchivedSeason, Season

__all__ = [
    # Athlete
    "Athlete",
    "AthleteStatus",
    "Gender",
    # Meet
    "Meet",
    # Result
    "Result",
    # School
    "School",
    # Season
    "ArchivedSeason",
    "Season",
]
