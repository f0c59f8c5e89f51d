"""HTTP fixtures.

The app is built around the per-test container, so no lifespan is needed
and nothing leaks between tests.
"""

from __future__ import annotations

from typing import Any, AsyncIterator, cast

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app import create_app
from infrastructure.container import Container


def _client(container: Container) -> AsyncClient:
    transport = ASGITransport(app=cast(Any, create_app(container)))
    return AsyncClient(transport=transport, base_url="http://testserver")


@pytest_asyncio.fixture
async def client(container: Container) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the app; keeps cookies like a browser."""
    async with _client(container) as ac:
        yield ac


@pytest_asyncio.fixture
async def other_client(container: Container) -> AsyncIterator[AsyncClient]:
    """Second browser sharing the same backend (separate cookie jar)."""
    async with _client(container) as ac:
        yield ac
