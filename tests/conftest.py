"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides test settings, Playwright mocks, and an HTTP test client.
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from og_image.api.main import create_app
from og_image.config.settings import Settings
from og_image.core.rendering.browser import LaunchConfig
from og_image.models.schemas import BrowserStrategy, ImageFormat, RenderRequest

from tests.utils.mocks import MockPlaywright, make_png


def build_settings(**overrides) -> Settings:
    """Settings isolated from the host: no serverless binary probing, no .env."""
    values = {
        "environment": "testing",
        "debug": True,
        "log_level": "DEBUG",
        "site_domain": "okpc.app",
        "preview_project": "okpc",
        "serverless_chromium_paths": [],
        "chromium_executable_path": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings fixture."""
    return build_settings()


@pytest.fixture
def production_settings() -> Settings:
    """Settings for a production deployment."""
    return build_settings(environment="production", debug=False)


@pytest.fixture
def local_launch_config() -> LaunchConfig:
    return LaunchConfig(strategy=BrowserStrategy.LOCAL)


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def mock_playwright(png_bytes: bytes) -> Generator[MockPlaywright, None, None]:
    """Patched Playwright graph; no real browser is started."""
    mocks = MockPlaywright(screenshot_bytes=png_bytes)
    with mocks.patch():
        yield mocks


@pytest.fixture
def sample_render_request() -> RenderRequest:
    return RenderRequest(url="https://okpc.app/card/42/", format=ImageFormat.PNG)


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """FastAPI application wired to test settings."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """FastAPI test client that does not follow redirects."""
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
