"""FastAPI application factory.

Usage:
    # Development
    uv run fastapi dev src/wvruns/api/app.py

    # Production
    uv run fastapi run src/wvruns/api/app.py
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wvruns import configure_logging, get_logger
from wvruns.api.routes import (
    athletes_router,
    health_router,
    imports_router,
    seasons_router,
)
from wvruns.config import get_settings
from wvruns.errors import AthleteNotFound, SeasonError, StoreError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    configure_logging()
    logger.info(
        "app_starting",
        environment=settings.environment.value,
        store_backend=settings.store_backend.value,
    )
    yield
    logger.info("app_shutdown")


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto HTTP responses."""

    @app.exception_handler(AthleteNotFound)
    def athlete_not_found(request: Request, exc: AthleteNotFound) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "reason": exc.reason.value},
        )

    @app.exception_handler(SeasonError)
    def season_error(request: Request, exc: SeasonError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    def store_error(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("store_unavailable", path=exc.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": f"Storage error: {exc}"},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="WV Runs API",
        description="Import meet results and manage the athlete season lifecycle",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health_router)
    app.include_router(imports_router, prefix="/api/v1")
    app.include_router(athletes_router, prefix="/api/v1")
    app.include_router(seasons_router, prefix="/api/v1")

    return app


# Application instance for uvicorn
app = create_app()
