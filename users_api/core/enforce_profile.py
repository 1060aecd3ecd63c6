"""Profile Rule Enforcement: validates writes and range queries before they reach the store.

Invariants:
    - All functions are PURE: no IO, no clock reads, no store access, no side effects
    - Check functions return the typed error on violation, None on success
    - Range bounds are exclusive on both ends
    - A birth date exactly minimum_age years before today passes the age rule

Design Decisions:
    - Return errors (not raise): the caller decides when to raise, and tests assert on values
    - today - N years on Feb 29 clamps to Feb 28 when the target year is not a leap year
"""

from collections.abc import Iterable
from datetime import date

from users_api.core.errors import (
    InvalidDateRangeError,
    MinimumAgeViolationError,
    UserAlreadyExistsError,
)
from users_api.core.user import User


def years_before(today: date, years: int) -> date:
    """Same calendar day `years` years earlier."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # Feb 29 -> Feb 28
        return today.replace(year=today.year - years, day=28)


def check_minimum_age(
    date_of_birth: date, minimum_age: int, today: date,
) -> MinimumAgeViolationError | None:
    """Rule 1: subject must be at least minimum_age years old today."""
    if date_of_birth > years_before(today, minimum_age):
        return MinimumAgeViolationError(minimum_age)
    return None


def check_birth_date_range(
    date_from: date, date_to: date,
) -> InvalidDateRangeError | None:
    """Rule 2: range lower bound must not be after the upper bound."""
    if date_from > date_to:
        return InvalidDateRangeError()
    return None


def check_email_unclaimed(
    owner: User | None, email: str, current_email: str | None = None,
) -> UserAlreadyExistsError | None:
    """Rule 3: a write may not put a second record under an owned email.

    `owner` is the record currently stored under `email` (if any) and
    `current_email` the key of the record being written (None for inserts).
    """
    if owner is not None and email != current_email:
        return UserAlreadyExistsError(email)
    return None


def is_born_within(user: User, date_from: date, date_to: date) -> bool:
    return date_from < user.date_of_birth < date_to


def filter_by_birth_date(
    users: Iterable[User], date_from: date, date_to: date,
) -> list[User]:
    """Users born strictly between the bounds, input order preserved."""
    return [u for u in users if is_born_within(u, date_from, date_to)]
