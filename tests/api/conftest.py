"""API test fixtures: FastAPI test client over a fresh in-memory service.

Invariants:
    - Every test gets a fresh store and a service with a fixed clock
    - get_user_service dependency overridden; the module singleton is patched for probes
"""

import pytest
from httpx import ASGITransport, AsyncClient

from users_api.api.dependencies import get_user_service
from users_api.infrastructure.user_store import InMemoryUserStore
from users_api.services.user_service import UserService
import users_api.api.dependencies as deps_module
from users_api.main import app


@pytest.fixture
def service(today):
    return UserService(InMemoryUserStore(), minimum_age=18, clock=lambda: today)


@pytest.fixture
async def client(service):
    """FastAPI test client with the service dependency overridden."""
    app.dependency_overrides[get_user_service] = lambda: service

    original = deps_module.user_service
    deps_module.user_service = service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    deps_module.user_service = original
