"""
FastAPI REST Endpoints
======================

REST API endpoints for HTTP access to Open Graph image rendering.

Endpoints:
- GET /api/opengraph/image: Render the Open Graph element of a page
- GET /health: Health check endpoint
"""
