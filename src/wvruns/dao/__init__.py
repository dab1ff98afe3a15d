"""Data Access Objects for wvruns records."""

from wvruns.dao.athlete_dao import AthleteDAO
from wvruns.dao.base import BaseDAO
from wvruns.dao.meet_dao import MeetDAO
from wvruns.dao.result_dao import ResultDAO
from wvruns.dao.school_dao import SchoolDAO
from wvruns.dao.season_dao import ArchivedSeasonDAO, SeasonDAO

__all__ = [
    # Base
    "BaseDAO",
    # DAOs
    "ArchivedSeasonDAO",
    "AthleteDAO",
    "MeetDAO",
    "ResultDAO",
    "SchoolDAO",
    "SeasonDAO",
]
