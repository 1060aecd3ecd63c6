"""Root conftest: shared test configuration and record builders."""

import os
from datetime import date

import pytest

from users_api.core.user import User

# Ensure tests don't depend on a developer's .env
os.environ.setdefault("MINIMUM_AGE", "18")
os.environ.setdefault("LOG_FORMAT", "text")

TODAY = date(2024, 6, 15)


def _make_user(email: str = "jane.doe@example.com", **overrides) -> User:
    fields = {
        "email": email,
        "first_name": "Jane",
        "last_name": "Doe",
        "date_of_birth": date(1990, 6, 15),
        "address": "1 Main St",
        "phone_number": "+380501234567",
    }
    fields.update(overrides)
    return User(**fields)


@pytest.fixture
def make_user():
    """Factory for valid adult users; any field can be overridden."""
    return _make_user


@pytest.fixture
def today() -> date:
    return TODAY
