"""Abstract interface for the append-only stock history."""

from abc import ABC, abstractmethod
from datetime import datetime

from src.core.entities.analytics import MonthlyStockMovement, PricePoint, StockUpdateRow
from src.core.entities.pagination import Page
from src.core.entities.stock_history import StockChangeReason, StockEvent, StockHistory


class IStockHistoryStore(ABC):
    """
    Interface for stock history persistence.

    Rows are written once; the contract has no update or delete.
    """

    @abstractmethod
    async def append(self, entry: StockHistory) -> StockHistory:
        pass

    @abstractmethod
    async def list_all(self) -> list[StockHistory]:
        """All rows, newest first."""
        pass

    @abstractmethod
    async def list_by_item(self, item_id: str) -> list[StockHistory]:
        """Rows for one item, newest first."""
        pass

    @abstractmethod
    async def list_by_reason(self, reason: StockChangeReason) -> list[StockHistory]:
        """Rows with one reason, newest first."""
        pass

    @abstractmethod
    async def find_filtered(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        item_name: str | None = None,
        supplier_id: str | None = None,
        page: int = 0,
        size: int = 50,
    ) -> Page[StockHistory]:
        """Filter by inclusive timestamp bounds, item name substring and supplier."""
        pass

    @abstractmethod
    async def price_trend(
        self, item_id: str, start: datetime, end: datetime
    ) -> list[PricePoint]:
        """Non-null price snapshots for an item, oldest first."""
        pass

    @abstractmethod
    async def events_until(
        self,
        end: datetime,
        supplier_id: str | None = None,
        include_price_changes: bool = False,
    ) -> list[StockEvent]:
        """Every non-zero movement up to `end`, oldest first.

        With `include_price_changes` the zero-quantity PRICE_CHANGE rows are
        returned as well.
        """
        pass

    @abstractmethod
    async def monthly_movement(
        self, start: datetime, end: datetime, supplier_id: str | None = None
    ) -> list[MonthlyStockMovement]:
        pass

    @abstractmethod
    async def search_updates(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        item_name: str | None = None,
        supplier_id: str | None = None,
        created_by: str | None = None,
        min_change: int | None = None,
        max_change: int | None = None,
    ) -> list[StockUpdateRow]:
        """
        Audit rows with item and supplier names, newest first.

        `item_name` is a case-insensitive substring, `created_by` an exact
        case-insensitive match and the change bounds are inclusive.
        """
        pass
