"""API test fixtures — FastAPI test client over an in-memory StarService.

Invariants:
    - Every test gets a fresh InMemoryStarStore behind the real StarService
    - get_star_service dependency overridden; the lifespan does not run

Design Decisions:
    - httpx ASGITransport: exercises routing, validation and error handlers
      without a server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from starfield.api.dependencies import get_star_service
from starfield.infrastructure.memory_store import InMemoryStarStore
from starfield.main import app
from starfield.services.star_service import StarService


@pytest.fixture
def store() -> InMemoryStarStore:
    return InMemoryStarStore()


@pytest.fixture
def service(store, clock) -> StarService:
    return StarService(store, clock=clock)


@pytest.fixture
async def client(service):
    """FastAPI test client with the star service overridden."""
    app.dependency_overrides[get_star_service] = lambda: service
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
