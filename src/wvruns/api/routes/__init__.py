"""API route modules."""

from wvruns.api.routes.athletes import router as athletes_router
from wvruns.api.routes.health import router as health_router
from wvruns.api.routes.imports import router as imports_router
from wvruns.api.routes.seasons import router as seasons_router

__all__ = [
    "athletes_router",
    "health_router",
    "imports_router",
    "seasons_router",
]
