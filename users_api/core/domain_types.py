"""Domain Types: typed markers shared across core, schemas and services.

Invariants:
    - UNSET marks an update slot the caller did not provide; None is a real value

Design Decisions:
    - Single-member Enum for UNSET: a typed sentinel that keeps its identity across copies
"""

from enum import Enum


class Unset(Enum):
    """Marker for an update slot that was not provided."""
    UNSET = "unset"


UNSET = Unset.UNSET
