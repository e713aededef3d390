"""Route Modules — one file per resource/concern.

Invariants:
    - Each module exposes an APIRouter (or a factory returning one) with prefix and tags
    - Routes never contain record logic (delegate to services/)
"""
