"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - minimum_age is a positive whole number of years
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: the service starts with no environment at all
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Profile rules
    minimum_age: int = 18

    @field_validator("minimum_age")
    @classmethod
    def check_minimum_age_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("minimum_age must be a positive number of years")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
