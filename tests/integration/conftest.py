"""Integration fixtures: the real app over a migrated temporary database."""

from collections.abc import AsyncGenerator, Callable

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
from src.api.security import create_session_token
from src.core.entities import AppUser


@pytest.fixture
def app(
    item_service, supplier_service, history_service, analytics_service, auth_service
) -> FastAPI:
    app = create_app()
    app.dependency_overrides[get_item_service] = lambda: item_service
    app.dependency_overrides[get_suppliers] = lambda: supplier_service
    app.dependency_overrides[get_history] = lambda: history_service
    app.dependency_overrides[get_analytics] = lambda: analytics_service
    app.dependency_overrides[get_auth] = lambda: auth_service
    return app


@pytest.fixture
def session_for(auth_service) -> Callable:
    """Provision a user through the login hook and return its Cookie header."""

    async def _session(email: str) -> dict[str, str]:
        user: AppUser = await auth_service.register_login(email)
        return {"Cookie": f"SESSION={create_session_token(user)}"}

    return _session


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def admin_headers(session_for) -> dict[str, str]:
    return await session_for("admin@example.com")


@pytest.fixture
async def user_headers(session_for) -> dict[str, str]:
    return await session_for("clerk@example.com")
