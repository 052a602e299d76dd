"""Core domain entities."""

from src.core.entities.analytics import (
    FinancialSummary,
    ItemUpdateFrequency,
    LowStockItem,
    MonthlyStockMovement,
    PricePoint,
    StockPerSupplier,
    StockUpdateFilter,
    StockUpdateRow,
    StockValuePoint,
)
from src.core.entities.common import as_naive_utc, new_id, utc_now
from src.core.entities.inventory import (
    DEFAULT_MINIMUM_QUANTITY,
    InventoryItem,
    ItemDraft,
    Supplier,
    SupplierDraft,
)
from src.core.entities.pagination import Page
from src.core.entities.stock_history import (
    DELETION_REASONS,
    NON_ADJUSTMENT_REASONS,
    StockChange,
    StockChangeReason,
    StockEvent,
    StockHistory,
)
from src.core.entities.user import Actor, AppUser, Role

__all__ = [
    # Inventory
    "InventoryItem",
    "ItemDraft",
    "Supplier",
    "SupplierDraft",
    "DEFAULT_MINIMUM_QUANTITY",
    # Audit trail
    "StockHistory",
    "StockChange",
    "StockChangeReason",
    "StockEvent",
    "DELETION_REASONS",
    "NON_ADJUSTMENT_REASONS",
    # Users
    "AppUser",
    "Actor",
    "Role",
    # Analytics
    "FinancialSummary",
    "ItemUpdateFrequency",
    "LowStockItem",
    "MonthlyStockMovement",
    "PricePoint",
    "StockPerSupplier",
    "StockUpdateFilter",
    "StockUpdateRow",
    "StockValuePoint",
    # Misc
    "Page",
    "as_naive_utc",
    "new_id",
    "utc_now",
]
