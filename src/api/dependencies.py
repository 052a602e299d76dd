"""
Dependency injection container for FastAPI.

Provides service instances to route handlers. Tests replace these through
`app.dependency_overrides`.
"""

from functools import lru_cache

from src.application.services import (
    get_analytics_service,
    get_auth_service,
    get_inventory_item_service,
    get_stock_history_service,
    get_supplier_service,
)
from src.config import Settings, get_settings
from src.core.services import (
    AnalyticsService,
    AuthService,
    InventoryItemService,
    StockHistoryService,
    SupplierService,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


def get_item_service() -> InventoryItemService:
    return get_inventory_item_service()


def get_suppliers() -> SupplierService:
    return get_supplier_service()


def get_history() -> StockHistoryService:
    return get_stock_history_service()


def get_analytics() -> AnalyticsService:
    return get_analytics_service()


def get_auth() -> AuthService:
    return get_auth_service()
