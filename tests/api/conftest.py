"""API test fixtures — in-memory repository + FastAPI test client.

Invariants:
    - Every test gets a fresh InMemoryUserRepository
    - get_user_repository overridden; the Supabase lifespan never runs
      (httpx ASGITransport does not send lifespan events)
    - App exceptions are rendered, not re-raised, so the 500 safety net is observable
"""

import pytest
from httpx import ASGITransport, AsyncClient

from users_api.api.dependencies import get_user_repository
from users_api.main import app
from tests.fakes import InMemoryUserRepository


@pytest.fixture
def repository():
    return InMemoryUserRepository()


@pytest.fixture
async def client(repository):
    """FastAPI test client with the repository dependency overridden."""
    app.dependency_overrides[get_user_repository] = lambda: repository

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def ann(repository):
    return repository.seed("Ann Lee", "ann@example.com", 25)
