"""
Core Business Logic
==================

Core business logic modules for Open Graph image rendering.

Modules:
- errors: Exception hierarchy shared by validation and rendering
- validation: Query parameter parsing and URL allow-list checks
- rendering: Browser acquisition and the element screenshot pipeline
"""
