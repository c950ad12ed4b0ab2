"""
Open Graph Routes
=================

FastAPI route that renders an Open Graph image and finalizes the response:
cache headers on success, fallback redirect or structured error on failure.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, RedirectResponse, Response

from og_image.config.logging import get_logger
from og_image.api.dependencies import get_app_settings
from og_image.config.settings import Settings
from og_image.core.errors import OGImageError, RenderError, describe_error
from og_image.core.rendering.renderer import OpenGraphRenderer
from og_image.core.validation import parse_render_request
from og_image.models.schemas import ErrorDetail, ErrorResponse, RenderedImage

logger = get_logger(__name__)

router = APIRouter(prefix="/api/opengraph", tags=["Open Graph"])

# Fresh for 8 hours, then served stale for up to 24 hours while revalidating in
# the background. Requests outside both windows wait for a fresh render.
CACHE_S_MAXAGE = 60 * 60 * 8
CACHE_STALE_WHILE_REVALIDATE = 60 * 60 * 24
CACHE_CONTROL = f"s-maxage={CACHE_S_MAXAGE}, stale-while-revalidate={CACHE_STALE_WHILE_REVALIDATE}"

FALLBACK_REDIRECT_STATUS = 302


def get_renderer(settings: Settings = Depends(get_app_settings)) -> OpenGraphRenderer:
    """Dependency providing a renderer for the current request."""
    return OpenGraphRenderer(settings)


def image_response(image: RenderedImage) -> Response:
    return Response(
        content=image.content,
        media_type=image.content_type,
        headers={"Cache-Control": CACHE_CONTROL},
    )


def failure_response(error: Exception, fallback: Optional[str]) -> Response:
    """Redirect to the fallback image, or describe the error as JSON."""
    if fallback:
        return RedirectResponse(url=fallback, status_code=FALLBACK_REDIRECT_STATUS)

    code = error.code if isinstance(error, OGImageError) else RenderError.code
    body = ErrorResponse(error=ErrorDetail(code=code, message=describe_error(error)))
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@router.get("/image")
async def render_opengraph_image(
    url: Optional[str] = Query(None, description="Page to render"),
    fallback: Optional[str] = Query(None, description="Image to redirect to on failure"),
    pixel_density: Optional[str] = Query(None, alias="pixelDensity"),
    image_format: Optional[str] = Query(None, alias="format"),
    quality: Optional[str] = Query(None),
    renderer: OpenGraphRenderer = Depends(get_renderer),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Render the ``#opengraph-image`` element of an allow-listed page.

    Validation errors propagate to the application's 400 handler before any
    browser is launched. Everything after validation is handled here.
    """
    request = parse_render_request(
        url=url,
        fallback=fallback,
        pixel_density=pixel_density,
        format=image_format,
        quality=quality,
        settings=settings,
    )

    try:
        image = await renderer.render(request)
    except Exception as e:
        logger.error(
            "Error while generating Open Graph image",
            url=request.url,
            error=describe_error(e),
            fallback=request.fallback,
            exc_info=True,
        )
        return failure_response(e, request.fallback)

    return image_response(image)
