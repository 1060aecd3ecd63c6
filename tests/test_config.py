"""Settings: environment-driven configuration."""

import pytest
from pydantic import ValidationError

from users_api.config import Settings, get_settings


def test_minimum_age_defaults_to_18(monkeypatch):
    monkeypatch.delenv("MINIMUM_AGE", raising=False)
    assert Settings(_env_file=None).minimum_age == 18


def test_minimum_age_read_from_environment(monkeypatch):
    monkeypatch.setenv("MINIMUM_AGE", "21")
    assert Settings(_env_file=None).minimum_age == 21


@pytest.mark.parametrize("value", ["0", "-3"])
def test_minimum_age_must_be_positive(monkeypatch, value):
    monkeypatch.setenv("MINIMUM_AGE", value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
