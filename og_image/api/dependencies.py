"""
API Dependencies
================

FastAPI dependencies shared by the routers.
"""

from fastapi import Request

from og_image.config.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings
