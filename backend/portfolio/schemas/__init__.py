"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary, before storage is touched
"""
