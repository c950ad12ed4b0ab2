"""
Test Suite
==========

Unit and integration tests for the Open Graph image renderer.

Test Categories:
- unit: Validation, browser acquisition, and render pipeline tests
- integration: HTTP contract tests through the FastAPI application
"""
