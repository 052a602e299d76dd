"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from decimal import Decimal
from pathlib import Path

import pytest

from src.api.dependencies import get_app_settings
from src.application.services import reset_services
from src.config import reset_settings
from src.core.entities import Actor, InventoryItem, ItemDraft, Role, Supplier, SupplierDraft
from src.core.services import (
    AnalyticsService,
    AuthService,
    InventoryItemService,
    StockHistoryService,
    SupplierService,
)
from src.infrastructure.storage.sqlite import ConnectionPool, sqlite_uow_factory
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point settings at a per-test data dir and drop cached singletons."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("AUTH_SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("AUTH_ADMIN_EMAILS", "admin@example.com")
    reset_settings()
    reset_services()
    get_app_settings.cache_clear()
    yield
    reset_settings()
    reset_services()
    get_app_settings.cache_clear()


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def pool(temp_db_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Migrated temporary database behind a small connection pool."""
    await initialize_database(temp_db_path, create_backup_before=False)
    pool = ConnectionPool(temp_db_path, pool_size=3, busy_timeout=5000)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def uow_factory(pool: ConnectionPool):
    return sqlite_uow_factory(pool)


@pytest.fixture
def admin_actor() -> Actor:
    return Actor(id="admin-1", email="admin@example.com", role=Role.ADMIN)


@pytest.fixture
def user_actor() -> Actor:
    return Actor(id="user-1", email="user@example.com", role=Role.USER)


# --- Services over the temporary database ---


@pytest.fixture
def history_service(uow_factory) -> StockHistoryService:
    return StockHistoryService(uow_factory)


@pytest.fixture
def item_service(uow_factory, history_service: StockHistoryService) -> InventoryItemService:
    return InventoryItemService(uow_factory, history_service)


@pytest.fixture
def supplier_service(uow_factory) -> SupplierService:
    return SupplierService(uow_factory)


@pytest.fixture
def analytics_service(uow_factory) -> AnalyticsService:
    return AnalyticsService(uow_factory)


@pytest.fixture
def auth_service(uow_factory) -> AuthService:
    return AuthService(uow_factory, admin_emails=["admin@example.com"])


@pytest.fixture
async def supplier(supplier_service: SupplierService, admin_actor: Actor) -> Supplier:
    return await supplier_service.create(
        SupplierDraft(name="Acme Components", contact_name="Jane Roe"), admin_actor
    )


@pytest.fixture
async def widget(
    item_service: InventoryItemService, supplier: Supplier, admin_actor: Actor
) -> InventoryItem:
    return await item_service.create(
        ItemDraft(name="Widget", quantity=10, price=Decimal("5.00"), supplier_id=supplier.id),
        admin_actor,
    )
