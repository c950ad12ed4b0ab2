"""
Test Utilities
==============

Playwright mocks and image helpers shared across tests.
"""
