"""
Open Graph Image Renderer
=========================

An HTTP service that renders social-preview ("Open Graph") images by loading a
webpage in headless Chromium and screenshotting its ``#opengraph-image`` element.

This package provides:
- FastAPI endpoint for on-demand image rendering
- Per-request browser lifecycle with Playwright
- Query parameter validation against a URL allow-list
- Cache headers for delegation to an HTTP cache
"""

__version__ = "1.0.0"
__author__ = "OG Image Renderer Team"
