"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from fastapi import APIRouter, Depends

from og_image.api.dependencies import get_app_settings
from og_image.config.settings import Settings
from og_image.core.rendering.browser import resolve_launch_config
from og_image.models.schemas import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthStatus:
    """
    Report service health and the browser build renders would use.

    No browser is launched; the strategy is resolved from what is on disk.
    """
    config = resolve_launch_config(settings)
    return HealthStatus(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        browser_strategy=config.strategy,
        executable_path=config.executable_path,
    )
