"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/validation/*
- src/core/exceptions.py

NO infrastructure imports. The unit-of-work factory is injected via constructor.
"""

from src.core.services.analytics_service import AnalyticsService
from src.core.services.auth_service import AuthService
from src.core.services.inventory_item_service import InventoryItemService
from src.core.services.stock_history_service import StockHistoryService
from src.core.services.supplier_service import SupplierService

__all__ = [
    "AnalyticsService",
    "AuthService",
    "InventoryItemService",
    "StockHistoryService",
    "SupplierService",
]
