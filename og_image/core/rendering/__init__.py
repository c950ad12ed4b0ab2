"""
Rendering Module
===============

Browser automation for Open Graph image screenshots.

Components:
- browser: Chromium build selection and per-request browser lifecycle
- renderer: Page load, element wait, and screenshot encoding pipeline
"""
