from fastapi import APIRouter

from app.core.dependencies import SettingsDep


router = APIRouter(tags=["Health"])


@router.get("/")
def read_health(settings: SettingsDep) -> dict[str, str]:
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@router.get("/health")
def health_check(settings: SettingsDep) -> dict[str, str]:
    """Explicit health endpoint for readiness probes."""
    return read_health(settings)
