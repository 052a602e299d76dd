"""Read-only analytics projections."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.entities.stock_history import StockChangeReason


class LowStockItem(BaseModel):
    item_id: str
    item_name: str
    quantity: int
    minimum_quantity: int


class StockPerSupplier(BaseModel):
    supplier_id: str
    supplier_name: str
    total_quantity: int


class ItemUpdateFrequency(BaseModel):
    item_id: str
    item_name: str
    update_count: int


class PricePoint(BaseModel):
    timestamp: datetime
    price: Decimal


class MonthlyStockMovement(BaseModel):
    month: str  # YYYY-MM
    stock_in: int = 0
    stock_out: int = 0


class FinancialSummary(BaseModel):
    """
    Weighted-average-cost summary for a date window.

    opening_value + purchases_cost + returns_in_cost
        - cogs_cost - write_off_cost == ending_value
    (up to rounding of the running average cost).
    """

    method: str = "WAC"
    from_date: date
    to_date: date
    opening_qty: int = 0
    opening_value: Decimal = Field(default_factory=Decimal)
    purchases_qty: int = 0
    purchases_cost: Decimal = Field(default_factory=Decimal)
    returns_in_qty: int = 0
    returns_in_cost: Decimal = Field(default_factory=Decimal)
    cogs_qty: int = 0
    cogs_cost: Decimal = Field(default_factory=Decimal)
    write_off_qty: int = 0
    write_off_cost: Decimal = Field(default_factory=Decimal)
    ending_qty: int = 0
    ending_value: Decimal = Field(default_factory=Decimal)


class StockValuePoint(BaseModel):
    """Closing value of on-hand stock for one day."""

    day: date
    total_value: Decimal


class StockUpdateFilter(BaseModel):
    """Criteria for the stock update report. Every field is optional."""

    start_date: datetime | None = None
    end_date: datetime | None = None
    item_name: str | None = None
    supplier_id: str | None = None
    created_by: str | None = None
    min_change: int | None = None
    max_change: int | None = None


class StockUpdateRow(BaseModel):
    """One audit row joined with item and supplier names."""

    history_id: str
    item_id: str
    item_name: str | None = None  # None once the item is deleted
    supplier_id: str | None = None
    supplier_name: str | None = None
    change: int
    reason: StockChangeReason
    created_by: str
    timestamp: datetime
