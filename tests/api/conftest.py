"""Fixtures for API tests: mocked services behind dependency overrides."""

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import (
    get_analytics,
    get_auth,
    get_history,
    get_item_service,
    get_suppliers,
)
from src.api.main import create_app
from src.api.security import get_current_actor
from src.core.entities import Actor
from src.core.services import (
    AnalyticsService,
    AuthService,
    InventoryItemService,
    StockHistoryService,
    SupplierService,
)


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def mock_item_service() -> AsyncMock:
    return AsyncMock(spec=InventoryItemService)


@pytest.fixture
def mock_supplier_service() -> AsyncMock:
    return AsyncMock(spec=SupplierService)


@pytest.fixture
def mock_history_service() -> AsyncMock:
    return AsyncMock(spec=StockHistoryService)


@pytest.fixture
def mock_analytics_service() -> AsyncMock:
    return AsyncMock(spec=AnalyticsService)


@pytest.fixture
def mock_auth_service() -> AsyncMock:
    return AsyncMock(spec=AuthService)


@pytest.fixture
def client_as(
    app: FastAPI,
    mock_item_service,
    mock_supplier_service,
    mock_history_service,
    mock_analytics_service,
    mock_auth_service,
) -> Callable:
    """Build a client whose requests run as `actor` (None = real cookie check)."""
    app.dependency_overrides[get_item_service] = lambda: mock_item_service
    app.dependency_overrides[get_suppliers] = lambda: mock_supplier_service
    app.dependency_overrides[get_history] = lambda: mock_history_service
    app.dependency_overrides[get_analytics] = lambda: mock_analytics_service
    app.dependency_overrides[get_auth] = lambda: mock_auth_service

    @asynccontextmanager
    async def _client(actor: Actor | None) -> AsyncGenerator[AsyncClient, None]:
        if actor is not None:
            app.dependency_overrides[get_current_actor] = lambda: actor
        else:
            app.dependency_overrides.pop(get_current_actor, None)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

    yield _client
    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(client_as, admin_actor) -> AsyncGenerator[AsyncClient, None]:
    async with client_as(admin_actor) as ac:
        yield ac


@pytest.fixture
async def user_client(client_as, user_actor) -> AsyncGenerator[AsyncClient, None]:
    async with client_as(user_actor) as ac:
        yield ac


@pytest.fixture
async def anon_client(client_as) -> AsyncGenerator[AsyncClient, None]:
    async with client_as(None) as ac:
        yield ac
