"""Core Layer: pure profile rules, no IO, no locking, no FastAPI.

Invariants:
    - No module in core/ imports from services/, api/, schemas/ or infrastructure/
    - Rule functions are pure: "today" is always passed in, never read from the clock
"""
