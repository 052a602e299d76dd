"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.inventory_store import IInventoryItemStore
from src.core.interfaces.stock_history_store import IStockHistoryStore
from src.core.interfaces.supplier_store import ISupplierStore
from src.core.interfaces.unit_of_work import IUnitOfWork, UnitOfWorkFactory
from src.core.interfaces.user_store import IUserStore

__all__ = [
    # Storage interfaces
    "IInventoryItemStore",
    "ISupplierStore",
    "IStockHistoryStore",
    "IUserStore",
    # Transactions
    "IUnitOfWork",
    "UnitOfWorkFactory",
]
