"""Users API Package: in-memory user profile management service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
