"""Record Store: authoritative in-memory collection of user records keyed by email.

Invariants:
    - Every operation holds the store lock; no caller ever sees a half-written record
    - Reads return copies; callers can never reach the stored objects
    - Records keep insertion order; update() overwrites in place, keeping position
    - update() is an upsert: an absent key inserts the new record
    - save() does NOT check for duplicate emails (the service guarantees uniqueness)

Design Decisions:
    - Ordered list + linear scan: lookups match on each record's current email field,
      so a record whose email changed through update() is found under its new email
    - Single RLock for the whole store: small working set, and locked() lets the
      service hold the same lock across a read-then-write sequence
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from users_api.core.user import User

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    """Thread-safe ordered store of User records."""

    def __init__(self) -> None:
        self._users: list[User] = []
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the store lock across several store calls."""
        with self._lock:
            yield

    def save(self, user: User) -> User:
        with self._lock:
            self._users.append(user.copy())
        return user

    def find_all(self) -> list[User]:
        with self._lock:
            return [u.copy() for u in self._users]

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            found = self._find(email)
            return found.copy() if found else None

    def update(self, email: str, new_user: User) -> User:
        """Overwrite the record stored under `email`, or insert `new_user`."""
        with self._lock:
            existing = self._find(email)
            if existing is None:
                self._users.append(new_user.copy())
                return new_user.copy()
            existing.overwrite_from(new_user)
            return existing.copy()

    def delete_by_email(self, email: str) -> bool:
        with self._lock:
            before = len(self._users)
            self._users = [u for u in self._users if u.email != email]
            return len(self._users) != before

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def _find(self, email: str) -> User | None:
        for user in self._users:
            if user.email == email:
                return user
        return None
