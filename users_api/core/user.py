"""User Record: the single entity managed by the service, plus its typed update.

Invariants:
    - User is keyed by email; identity is the key, never object identity
    - UserUpdate has exactly one slot per updatable field, UNSET when not provided
    - copy() returns an independent record (all fields are immutable values)

Design Decisions:
    - Plain dataclasses, no pydantic: core stays free of boundary validation
    - UserUpdate is frozen: a request's update set never changes after decoding
"""

from dataclasses import dataclass, fields, replace
from datetime import date

from users_api.core.domain_types import UNSET, Unset


@dataclass
class User:
    """A user profile as stored by the record store."""

    email: str
    first_name: str
    last_name: str
    date_of_birth: date
    address: str | None = None
    phone_number: str | None = None

    def copy(self) -> "User":
        return replace(self)

    def overwrite_from(self, other: "User") -> None:
        """Overwrite every field in place from another record."""
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))


@dataclass(frozen=True)
class UserUpdate:
    """Sparse set of field changes for a partial update."""

    email: str | Unset = UNSET
    first_name: str | Unset = UNSET
    last_name: str | Unset = UNSET
    date_of_birth: date | Unset = UNSET
    address: str | None | Unset = UNSET
    phone_number: str | None | Unset = UNSET

    def provided(self) -> dict[str, object]:
        """Field name -> new value for every slot that is set."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }
