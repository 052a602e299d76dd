"""SQLite persistence: connection pool, stores and unit of work."""

from src.infrastructure.storage.sqlite.connection import ConnectionPool, close_pool, get_pool
from src.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryItemStore
from src.infrastructure.storage.sqlite.stock_history_store import SQLiteStockHistoryStore
from src.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from src.infrastructure.storage.sqlite.unit_of_work import (
    SQLiteUnitOfWork,
    sqlite_uow_factory,
)
from src.infrastructure.storage.sqlite.user_store import SQLiteUserStore

__all__ = [
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "SQLiteInventoryItemStore",
    "SQLiteSupplierStore",
    "SQLiteStockHistoryStore",
    "SQLiteUserStore",
    "SQLiteUnitOfWork",
    "sqlite_uow_factory",
]
