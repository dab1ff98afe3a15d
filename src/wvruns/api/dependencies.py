"""FastAPI dependencies for dependency injection.

Usage in routes:
    from wvruns.api.dependencies import SeasonServiceDep

    @router.get("/seasons/current")
    def current(service: SeasonServiceDep):
        return service.get_current_season()

Tests swap the backend by overriding get_store.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from wvruns.config import Settings, get_settings
from wvruns.dao.athlete_dao import AthleteDAO
from wvruns.dao.result_dao import ResultDAO
from wvruns.services.import_service import ImportService
from wvruns.services.season_service import SeasonService
from wvruns.store import Store, get_store as build_store


def get_settings_dep() -> Settings:
    """Get application settings (dependency wrapper)."""
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]


@lru_cache
def get_cached_store() -> Store:
    """Create the process-wide store from settings."""
    return build_store(get_settings())


def get_store() -> Store:
    """Get the store for the current request."""
    return get_cached_store()


StoreDep = Annotated[Store, Depends(get_store)]


def get_athlete_dao(store: StoreDep) -> AthleteDAO:
    """Get AthleteDAO instance."""
    return AthleteDAO(store)


def get_result_dao(store: StoreDep) -> ResultDAO:
    """Get ResultDAO instance."""
    return ResultDAO(store)


def get_import_service(store: StoreDep) -> ImportService:
    """Get ImportService instance."""
    return ImportService(store)


def get_season_service(store: StoreDep) -> SeasonService:
    """Get SeasonService instance."""
    return SeasonService(store)


AthleteDAODep = Annotated[AthleteDAO, Depends(get_athlete_dao)]
ResultDAODep = Annotated[ResultDAO, Depends(get_result_dao)]
ImportServiceDep = Annotated[ImportService, Depends(get_import_service)]
SeasonServiceDep = Annotated[SeasonService, Depends(get_season_service)]
