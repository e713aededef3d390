"""Study Portfolio Package — JSON-file backed REST API for study notes.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
