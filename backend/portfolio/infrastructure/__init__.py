"""Infrastructure Layer — filesystem access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Blocking file IO runs in worker threads, never on the event loop
"""
