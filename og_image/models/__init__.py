"""
Data Models
===========

Pydantic data models for request/response validation and internal data structures.

Models:
- schemas: Render request, rendered image, error and health schemas
"""
