"""Liveness and readiness probes."""

from fastapi import APIRouter

from wvruns.api.dependencies import SettingsDep, StoreDep

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict:
    return {"status": "ok"}


@router.get("/ready")
def ready(settings: SettingsDep, store: StoreDep) -> dict:
    """Check that the store answers a read. A StoreError surfaces as 503."""
    store.get("seasons")
    return {"status": "ready", "store_backend": settings.store_backend.value}
