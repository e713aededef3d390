"""Core Layer — pure record logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Functions take the clock as an argument where time matters
"""
