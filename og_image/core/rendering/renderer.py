"""
Open Graph Renderer
===================

Loads a page in a fresh browser and screenshots its ``#opengraph-image``
element. One attempt per request; every failure surfaces as a RenderError.
"""

import io
from typing import Optional

from playwright.async_api import Browser, ElementHandle, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from PIL import Image  # type: ignore

from og_image.config.logging import get_logger
from og_image.config.settings import Settings, get_settings
from og_image.core.errors import ElementNotFoundError, ImageEncodingError, NavigationError
from og_image.core.rendering.browser import LaunchConfig, browser_session, resolve_launch_config
from og_image.models.schemas import ImageFormat, RenderedImage, RenderRequest

logger = get_logger(__name__)

VIEWPORT_WIDTH = 1280
VIEWPORT_HEIGHT = 720
NAVIGATION_TIMEOUT_MS = 10 * 1000
# Kept below NAVIGATION_TIMEOUT_MS: a slow element counts as a missing one
ELEMENT_WAIT_TIMEOUT_MS = 500
TARGET_SELECTOR = "#opengraph-image"


class OpenGraphRenderer:
    """Renders the Open Graph element of an allow-listed page."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        launch_config: Optional[LaunchConfig] = None,
    ):
        self.settings = settings or get_settings()
        self.launch_config = launch_config
        self.logger = logger.bind(component="renderer")

    async def render(self, request: RenderRequest) -> RenderedImage:
        """
        Render the target element of ``request.url``.

        Args:
            request: Validated render request

        Returns:
            Encoded image of the target element

        Raises:
            BrowserLaunchError: If Chromium fails to start
            NavigationError: If the page fails to load within the timeout
            ElementNotFoundError: If the target element never appears
            ImageEncodingError: If the screenshot cannot be produced
        """
        config = self.launch_config or resolve_launch_config(self.settings)
        log = self.logger.bind(
            url=request.url,
            format=request.format.value,
            pixel_density=request.pixel_density,
            strategy=config.strategy.value,
        )
        log.info("Rendering Open Graph image")

        async with browser_session(config) as browser:
            page = await self._open_page(browser, request, config)
            await self._load(page, request.url)
            element = await self._locate_element(page)
            content = await self._capture(element, request)

        image = RenderedImage(content=content, format=request.format)
        log.info("Open Graph image rendered", size_bytes=image.size_bytes)
        return image

    async def _open_page(
        self, browser: Browser, request: RenderRequest, config: LaunchConfig
    ) -> Page:
        page = await browser.new_page(
            viewport={"width": VIEWPORT_WIDTH, "height": VIEWPORT_HEIGHT},
            device_scale_factor=request.pixel_density,
            ignore_https_errors=config.ignore_https_errors,
        )
        page.set_default_navigation_timeout(NAVIGATION_TIMEOUT_MS)
        return page

    async def _load(self, page: Page, url: str) -> None:
        """Navigate and wait for network idle, bounded by the navigation timeout."""
        try:
            await page.goto(url)
            await page.wait_for_load_state("networkidle")
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e}") from e

    async def _locate_element(self, page: Page) -> ElementHandle:
        try:
            await page.wait_for_selector(TARGET_SELECTOR, timeout=ELEMENT_WAIT_TIMEOUT_MS)
        except PlaywrightTimeoutError as e:
            raise ElementNotFoundError(
                f"No {TARGET_SELECTOR} element appeared within {ELEMENT_WAIT_TIMEOUT_MS}ms"
            ) from e

        element = await page.query_selector(TARGET_SELECTOR)
        if element is None:
            raise ElementNotFoundError(f"No {TARGET_SELECTOR} element found at path")
        return element

    async def _capture(self, element: ElementHandle, request: RenderRequest) -> bytes:
        """Screenshot the element in the requested format."""
        try:
            if request.format is ImageFormat.PNG:
                return await element.screenshot(type="png")
            if request.format is ImageFormat.JPEG:
                return await element.screenshot(type="jpeg", quality=request.encoder_quality)
            # Chromium only captures png/jpeg, webp is transcoded from a lossless capture
            png_bytes = await element.screenshot(type="png")
        except PlaywrightError as e:
            raise ImageEncodingError(f"Element screenshot failed: {e}") from e

        return transcode_to_webp(png_bytes, request.quality)


def transcode_to_webp(png_bytes: bytes, quality: int) -> bytes:
    """
    Re-encode a PNG screenshot as WebP.

    Args:
        png_bytes: Lossless screenshot
        quality: WebP quality (0-100)

    Returns:
        WebP bytes

    Raises:
        ImageEncodingError: If the image cannot be decoded or encoded
    """
    try:
        with Image.open(io.BytesIO(png_bytes)) as image:
            output = io.BytesIO()
            image.save(output, format="WEBP", quality=quality)
            return output.getvalue()
    except (OSError, ValueError) as e:
        raise ImageEncodingError(f"WebP encoding failed: {e}") from e
