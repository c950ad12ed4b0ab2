"""
Request Validation
==================

Turns raw query parameters into a RenderRequest.

A missing or non-allow-listed ``url`` is rejected; every other parameter is
lenient and falls back to its default when it cannot be parsed.
"""

import re
from typing import List, Optional, Pattern

from og_image.config.logging import get_logger
from og_image.config.settings import Settings, get_settings
from og_image.core.errors import InvalidUrlError, MissingUrlError
from og_image.models.schemas import ImageFormat, RenderRequest

logger = get_logger(__name__)

DEFAULT_PIXEL_DENSITY = 1
MAX_PIXEL_DENSITY = 4
DEFAULT_FORMAT = ImageFormat.PNG
DEFAULT_QUALITY = 70
MIN_QUALITY = 0
MAX_QUALITY = 100

LOCALHOST_PATTERN = r"^http://localhost(:\d+)?/"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def build_allowed_url_patterns(settings: Optional[Settings] = None) -> List[Pattern[str]]:
    """
    Compile the URL allow-list for the current deployment.

    Args:
        settings: Settings to read domains from (defaults to global settings)

    Returns:
        Case-insensitive patterns matched against the start of the URL
    """
    settings = settings or get_settings()

    sources = [
        rf"^https://([\w-]+\.)?{re.escape(settings.site_domain)}/",
        rf"^https://[\w-]+-{re.escape(settings.preview_project)}\.vercel\.app/",
        *settings.extra_allowed_url_patterns,
    ]
    if not settings.is_production:
        sources.append(LOCALHOST_PATTERN)

    return [re.compile(source, re.IGNORECASE) for source in sources]


def is_allowed_url(url: str, patterns: List[Pattern[str]]) -> bool:
    """Check whether any allow-list pattern matches the URL."""
    return any(pattern.match(url) for pattern in patterns)


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the integer at the start of a string.

    ``"3"`` and ``"3px"`` give 3, ``"2.5"`` gives 2, ``"abc"`` and None give None.
    """
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def resolve_pixel_density(value: Optional[str]) -> int:
    density = parse_leading_int(value)
    if density is None or density < 1:
        return DEFAULT_PIXEL_DENSITY
    return min(density, MAX_PIXEL_DENSITY)


def resolve_format(value: Optional[str]) -> ImageFormat:
    for image_format in ImageFormat:
        if value == image_format.value:
            return image_format
    return DEFAULT_FORMAT


def resolve_quality(value: Optional[str]) -> int:
    quality = parse_leading_int(value)
    if quality is None:
        return DEFAULT_QUALITY
    return max(MIN_QUALITY, min(MAX_QUALITY, quality))


def parse_render_request(
    url: Optional[str],
    fallback: Optional[str] = None,
    pixel_density: Optional[str] = None,
    format: Optional[str] = None,
    quality: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> RenderRequest:
    """
    Validate raw query parameters.

    Args:
        url: Page to render (required, must be allow-listed)
        fallback: Redirect target on failure
        pixel_density: Device scale factor, as received
        format: Image format name, as received
        quality: Lossy encoder quality, as received
        settings: Settings override

    Returns:
        Validated render request

    Raises:
        MissingUrlError: If ``url`` is absent or empty
        InvalidUrlError: If ``url`` matches no allow-list pattern
    """
    if not url:
        raise MissingUrlError("url query parameter is required")

    if not is_allowed_url(url, build_allowed_url_patterns(settings)):
        logger.warning("Rejected URL outside allow-list", url=url)
        raise InvalidUrlError(f"URL is not allowed: {url}")

    return RenderRequest(
        url=url,
        fallback=fallback or None,
        pixel_density=resolve_pixel_density(pixel_density),
        format=resolve_format(format),
        quality=resolve_quality(quality),
    )
