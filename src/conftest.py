from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


@pytest.fixture
def client_factory():
    """
    Build an AsyncClient against the app with the given dependency overrides.

    Usage:
        async with client_factory({get_x: lambda: fake_x}) as client:
            ...
    """

    @asynccontextmanager
    async def _factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return _factory


@pytest_asyncio.fixture
async def client(client_factory):
    """Client with no overrides."""
    async with client_factory() as c:
        yield c
