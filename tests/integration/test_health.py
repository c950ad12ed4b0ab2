"""
Integration Tests for Service Endpoints
=======================================

Tests for the health check and root endpoints.
"""

from fastapi import status

from og_image.api.main import create_app

from tests.conftest import build_settings


class TestHealth:
    def test_health_local_strategy(self, client, mock_playwright):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "testing"
        assert data["browser_strategy"] == "local"
        assert data["executable_path"] is None
        assert mock_playwright.launch_count == 0

    def test_health_serverless_strategy(self, tmp_path):
        from fastapi.testclient import TestClient

        binary = tmp_path / "chromium"
        binary.write_text("#!/bin/sh\n")
        binary.chmod(0o755)
        settings = build_settings(serverless_chromium_paths=[str(binary)])
        app = create_app(settings)

        with TestClient(app) as client:
            data = client.get("/health").json()

        assert data["browser_strategy"] == "serverless"
        assert data["executable_path"] == str(binary)


class TestRoot:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["endpoints"]["opengraph_image"] == "GET /api/opengraph/image"
        assert data["health_check"] == "/health"


class TestAppSettings:
    """Test that the settings given to create_app reach every route."""

    def test_production_app_rejects_localhost(self, production_settings, mock_playwright):
        from fastapi.testclient import TestClient

        app = create_app(production_settings)

        with TestClient(app, follow_redirects=False) as client:
            response = client.get(
                "/api/opengraph/image", params={"url": "http://localhost:3000/card/1/"}
            )
            health = client.get("/health").json()

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": {"code": "INVALID_URL"}}
        assert mock_playwright.launch_count == 0
        assert health["environment"] == "production"

    def test_testing_app_accepts_localhost(self, test_settings, mock_playwright):
        from fastapi.testclient import TestClient

        app = create_app(test_settings)

        with TestClient(app) as client:
            response = client.get(
                "/api/opengraph/image", params={"url": "http://localhost:3000/card/1/"}
            )

        assert response.status_code == status.HTTP_200_OK
        assert mock_playwright.launch_count == 1
        assert mock_playwright.close_count == 1
