"""Schemas Layer: Pydantic request/response models for the HTTP boundary.

Invariants:
    - Schemas translate to and from core dataclasses; no business rules live here
"""
