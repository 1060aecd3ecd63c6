"""Service Wiring: process-wide UserService singleton and its FastAPI dependency.

Invariants:
    - Exactly one store + service per process (initialized via init_user_service)
    - get_user_service raises until the lifespan has initialized the service

Design Decisions:
    - Singleton initialized on startup: FastAPI lifespan manages lifecycle,
      no global import side effects; tests override get_user_service
"""

import logging

from users_api.infrastructure.user_store import InMemoryUserStore
from users_api.services.user_service import UserService

logger = logging.getLogger(__name__)

# Singleton (initialized on startup)
user_service: UserService | None = None


def init_user_service(minimum_age: int) -> UserService:
    global user_service
    user_service = UserService(InMemoryUserStore(), minimum_age)
    logger.info(
        "User service initialized", extra={"minimum_age": minimum_age},
    )
    return user_service


def get_user_service() -> UserService:
    """FastAPI dependency for the user service."""
    if not user_service:
        raise RuntimeError("User service not initialized")
    return user_service
