"""User Service: business rules and merge/replace semantics above the record store.

Invariants:
    - Every write is validated before the store is touched; a failed call mutates nothing
    - Read-then-write sequences run under store.locked() (no lost updates per email)
    - update_user checks existence first, then re-checks the minimum age only when
      date_of_birth is provided
    - replace_user always re-checks the minimum age and is create-or-replace
    - The service keeps no copies of records; the store owns them

Design Decisions:
    - Rule checks live in core/enforce_profile.py and return typed errors; this
      module raises them, so the error kinds stay explicit at every call site
    - clock injected (defaults to date.today) so the age rule is testable on fixed dates
"""

import logging
from collections.abc import Callable
from datetime import date

from users_api.core.enforce_profile import (
    check_birth_date_range,
    check_email_unclaimed,
    check_minimum_age,
    filter_by_birth_date,
)
from users_api.core.errors import UserNotFoundError
from users_api.core.merge_profile import merge_user_update
from users_api.core.user import User, UserUpdate
from users_api.core.domain_types import UNSET
from users_api.infrastructure.user_store import InMemoryUserStore

logger = logging.getLogger(__name__)


class UserService:
    """Profile management use cases."""

    def __init__(
        self,
        store: InMemoryUserStore,
        minimum_age: int,
        clock: Callable[[], date] = date.today,
    ):
        self.store = store
        self.minimum_age = minimum_age
        self._clock = clock

    def add_user(self, user: User) -> User:
        """Validate the age rule and email uniqueness, then store the user."""
        self._validate_date_of_birth(user.date_of_birth)
        with self.store.locked():
            error = check_email_unclaimed(
                self.store.find_by_email(user.email), user.email,
            )
            if error:
                raise error
            saved = self.store.save(user)
        logger.info(f"User {saved.email} created", extra={"email": saved.email})
        return saved

    def find_all_users(self) -> list[User]:
        return self.store.find_all()

    def find_user_by_email(self, email: str) -> User:
        user = self.store.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    def find_users_by_birth_date_range(
        self, date_from: date, date_to: date,
    ) -> list[User]:
        """Users born strictly between the two dates, in insertion order."""
        error = check_birth_date_range(date_from, date_to)
        if error:
            raise error
        return filter_by_birth_date(self.store.find_all(), date_from, date_to)

    def update_user(self, email: str, updates: UserUpdate) -> User:
        """Apply a partial update to the record stored under `email`."""
        with self.store.locked():
            existing = self.find_user_by_email(email)
            if updates.date_of_birth is not UNSET:
                self._validate_date_of_birth(updates.date_of_birth)
            merged = merge_user_update(existing, updates)
            self._ensure_email_unclaimed(merged.email, email)
            updated = self.store.update(email, merged)
        logger.info(
            f"User {email} updated ({', '.join(updates.provided()) or 'no fields'})",
            extra={"email": email},
        )
        return updated

    def replace_user(self, email: str, new_user: User) -> User:
        """Fully overwrite the record under `email`, or create it from new_user."""
        self._validate_date_of_birth(new_user.date_of_birth)
        with self.store.locked():
            self._ensure_email_unclaimed(new_user.email, email)
            replaced = self.store.update(email, new_user)
        logger.info(f"User {email} replaced", extra={"email": email})
        return replaced

    def delete_user(self, email: str) -> None:
        if not self.store.delete_by_email(email):
            raise UserNotFoundError(email)
        logger.info(f"User {email} deleted", extra={"email": email})

    # ─── helpers ────────────────────────────────────────────────

    def _validate_date_of_birth(self, date_of_birth: date) -> None:
        error = check_minimum_age(date_of_birth, self.minimum_age, self._clock())
        if error:
            logger.warning(
                f"Minimum age rule failed for birth date {date_of_birth}",
                extra={"error_code": error.code, "minimum_age": self.minimum_age},
            )
            raise error

    def _ensure_email_unclaimed(self, new_email: str, current_email: str) -> None:
        owner = None
        if new_email != current_email:
            owner = self.store.find_by_email(new_email)
        error = check_email_unclaimed(owner, new_email, current_email)
        if error:
            raise error
