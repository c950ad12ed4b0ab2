"""
Browser Acquisition
===================

Chooses which Chromium build to launch and owns the per-request browser.

A minimized binary is used when one can be found on disk (serverless
deployments ship it in a layer); otherwise Playwright's own Chromium
install is launched. Browsers are never pooled or shared between requests.
"""

import os
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, Dict, List, Optional

from playwright.async_api import Browser, async_playwright

from og_image.config.logging import get_logger
from og_image.config.settings import Settings, get_settings
from og_image.core.errors import BrowserLaunchError
from og_image.models.schemas import BrowserStrategy

logger = get_logger(__name__)

BASE_CHROMIUM_ARGS = [
    "--ignore-certificate-errors",
    "--hide-scrollbars",
    "--mute-audio",
    "--no-first-run",
]

# Sandboxed, single-process flags for constrained serverless runtimes
SERVERLESS_CHROMIUM_ARGS = BASE_CHROMIUM_ARGS + [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--no-zygote",
    "--single-process",
]


@dataclass
class LaunchConfig:
    """How to launch Chromium for one request."""

    strategy: BrowserStrategy
    executable_path: Optional[str] = None
    args: List[str] = field(default_factory=lambda: list(BASE_CHROMIUM_ARGS))
    headless: bool = True
    ignore_https_errors: bool = True

    def launch_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``playwright.chromium.launch``."""
        options: Dict[str, Any] = {"headless": self.headless, "args": list(self.args)}
        if self.executable_path:
            options["executable_path"] = self.executable_path
        return options


def find_serverless_executable(settings: Optional[Settings] = None) -> Optional[str]:
    """Return the first minimized Chromium binary that exists and is executable."""
    settings = settings or get_settings()

    candidates = list(settings.serverless_chromium_paths)
    if settings.chromium_executable_path:
        candidates.insert(0, settings.chromium_executable_path)

    for path in candidates:
        if os.path.isfile(path) and os.access(path, os.X_OK):
            return path
    return None


def resolve_launch_config(settings: Optional[Settings] = None) -> LaunchConfig:
    """
    Pick the Chromium build for this environment.

    Args:
        settings: Settings override

    Returns:
        Serverless launch config if a minimized binary resolves, else local
    """
    executable_path = find_serverless_executable(settings)

    if executable_path is None:
        return LaunchConfig(strategy=BrowserStrategy.LOCAL)

    return LaunchConfig(
        strategy=BrowserStrategy.SERVERLESS,
        executable_path=executable_path,
        args=list(SERVERLESS_CHROMIUM_ARGS),
    )


@asynccontextmanager
async def browser_session(config: LaunchConfig) -> AsyncGenerator[Browser, None]:
    """
    Launch a browser for a single request and close it on exit.

    Raises:
        BrowserLaunchError: If Playwright or Chromium fails to start
    """
    log = logger.bind(strategy=config.strategy.value, executable_path=config.executable_path)

    async with async_playwright() as playwright:
        try:
            browser = await playwright.chromium.launch(**config.launch_options())
        except Exception as e:
            log.error("Browser launch failed", error=str(e))
            raise BrowserLaunchError(f"Browser launch failed: {e}") from e

        log.debug("Browser launched")
        try:
            yield browser
        finally:
            try:
                await browser.close()
            except Exception:
                # Close errors never replace the render outcome
                log.warning("Browser close failed", exc_info=True)
            else:
                log.debug("Browser closed")
