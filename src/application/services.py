"""
Service factory functions for dependency injection.

This module wires the SQLite unit of work and configuration to the core
services. API dependencies should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from src.config import get_settings
from src.core.interfaces import UnitOfWorkFactory
from src.core.services import (
    AnalyticsService,
    AuthService,
    InventoryItemService,
    StockHistoryService,
    SupplierService,
)

# Singleton service instances
_stock_history_service: StockHistoryService | None = None
_inventory_item_service: InventoryItemService | None = None
_supplier_service: SupplierService | None = None
_analytics_service: AnalyticsService | None = None
_auth_service: AuthService | None = None


def _default_uow_factory() -> UnitOfWorkFactory:
    # Lazy import infrastructure to avoid circular imports
    from src.infrastructure.storage.sqlite import sqlite_uow_factory

    return sqlite_uow_factory()


def get_stock_history_service(
    uow_factory: UnitOfWorkFactory | None = None,
) -> StockHistoryService:
    """Get or create StockHistoryService instance."""
    global _stock_history_service

    if _stock_history_service is not None and uow_factory is None:
        return _stock_history_service

    settings = get_settings()
    service = StockHistoryService(
        uow_factory or _default_uow_factory(),
        default_page_size=settings.inventory.default_page_size,
        max_page_size=settings.inventory.max_page_size,
    )
    if uow_factory is None:
        _stock_history_service = service
    return service


def get_inventory_item_service(
    uow_factory: UnitOfWorkFactory | None = None,
) -> InventoryItemService:
    """
    Get or create InventoryItemService instance.

    Args:
        uow_factory: Optional unit-of-work factory override; an override
            builds a fresh, uncached service.
    """
    global _inventory_item_service

    if _inventory_item_service is not None and uow_factory is None:
        return _inventory_item_service

    factory = uow_factory or _default_uow_factory()
    service = InventoryItemService(
        factory,
        history_service=get_stock_history_service(uow_factory),
        default_minimum_quantity=get_settings().inventory.default_minimum_quantity,
    )
    if uow_factory is None:
        _inventory_item_service = service
    return service


def get_supplier_service(uow_factory: UnitOfWorkFactory | None = None) -> SupplierService:
    global _supplier_service

    if _supplier_service is not None and uow_factory is None:
        return _supplier_service

    service = SupplierService(uow_factory or _default_uow_factory())
    if uow_factory is None:
        _supplier_service = service
    return service


def get_analytics_service(uow_factory: UnitOfWorkFactory | None = None) -> AnalyticsService:
    global _analytics_service

    if _analytics_service is not None and uow_factory is None:
        return _analytics_service

    service = AnalyticsService(
        uow_factory or _default_uow_factory(),
        default_window_days=get_settings().inventory.analytics_default_window_days,
    )
    if uow_factory is None:
        _analytics_service = service
    return service


def get_auth_service(uow_factory: UnitOfWorkFactory | None = None) -> AuthService:
    global _auth_service

    if _auth_service is not None and uow_factory is None:
        return _auth_service

    service = AuthService(
        uow_factory or _default_uow_factory(),
        admin_emails=get_settings().auth.admin_emails,
    )
    if uow_factory is None:
        _auth_service = service
    return service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _stock_history_service, _inventory_item_service, _supplier_service
    global _analytics_service, _auth_service

    _stock_history_service = None
    _inventory_item_service = None
    _supplier_service = None
    _analytics_service = None
    _auth_service = None
