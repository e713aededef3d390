"""API Layer — FastAPI routes, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.create_app (no auto-discovery)
    - Every response body is JSON; errors use the {success: false, message} envelope
"""
