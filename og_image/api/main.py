"""
FastAPI Application
==================

Main FastAPI application serving Open Graph images rendered from live pages.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from og_image.api.routes.health import router as health_router
from og_image.api.routes.opengraph import router as opengraph_router
from og_image.config.settings import get_settings, Settings
from og_image.config.logging import get_logger
from og_image.core.errors import RenderError, RenderRequestError, describe_error
from og_image.core.rendering.browser import resolve_launch_config
from og_image.models.schemas import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    config = resolve_launch_config(settings)
    logger.info(
        "Starting FastAPI application",
        environment=settings.environment,
        browser_strategy=config.strategy.value,
        executable_path=config.executable_path,
    )

    try:
        yield
    finally:
        logger.info("Shutting down FastAPI application")


async def render_request_exception_handler(
    request: Request, exc: RenderRequestError
) -> JSONResponse:
    """Reject invalid query parameters with a 400 and the error code only."""
    logger.info(
        "Render request rejected",
        error_code=exc.code,
        request_id=getattr(request.state, "request_id", None),
    )
    body = ErrorResponse(error=ErrorDetail(code=exc.code))
    return JSONResponse(status_code=exc.http_status, content=body.model_dump(exclude_none=True))


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """General exception handler for unexpected errors."""
    logger.error(
        "Unhandled exception",
        exception=describe_error(exc),
        request_id=getattr(request.state, "request_id", None),
        exc_info=True,
    )
    body = ErrorResponse(error=ErrorDetail(code=RenderError.code, message=describe_error(exc)))
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function for creating FastAPI app instance.

    Args:
        settings: Optional settings override (useful for testing)

    Returns:
        FastAPI application instance
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Render Open Graph preview images from live pages",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_hosts,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next: Any) -> Any:
        """Add request ID to all requests."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

    app.add_exception_handler(RenderRequestError, render_request_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(opengraph_router)
    app.include_router(health_router)

    @app.get("/", tags=["General"])
    async def root() -> dict[str, Any]:
        """
        Root endpoint with basic API information.
        """
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": "Render Open Graph preview images from live pages",
            "docs_url": "/docs" if settings.debug else None,
            "health_check": "/health",
            "endpoints": {
                "opengraph_image": "GET /api/opengraph/image",
            },
        }

    return app


app = create_app()


# Development server runner
def run_development_server() -> None:
    """Run development server with auto-reload."""
    settings = get_settings()
    uvicorn.run(
        "og_image.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_development_server()
