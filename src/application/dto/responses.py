"""Response DTOs for API endpoints.

Pydantic v2 models serialized with camelCase aliases.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from src.core.entities.inventory import InventoryItem, Supplier
from src.core.entities.pagination import Page
from src.core.entities.stock_history import StockChangeReason, StockHistory
from src.core.entities.user import AppUser

# Decimals go out as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

T = TypeVar("T")


class CamelResponse(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- Inventory ---


class InventoryItemResponse(CamelResponse):
    id: str
    name: str
    quantity: int
    price: Money
    supplier_id: str
    minimum_quantity: int
    created_by: str
    created_at: datetime
    low_stock: bool
    total_value: Money

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            price=item.price,
            supplier_id=item.supplier_id,
            minimum_quantity=item.minimum_quantity,
            created_by=item.created_by,
            created_at=item.created_at,
            low_stock=item.low_stock,
            total_value=item.total_value,
        )


class SupplierResponse(CamelResponse):
    id: str
    name: str
    contact_name: str | None = None
    phone: str | None = None
    email: str | None = None
    created_by: str
    created_at: datetime

    @classmethod
    def from_entity(cls, supplier: Supplier) -> "SupplierResponse":
        return cls.model_validate(supplier)


class StockHistoryResponse(CamelResponse):
    id: str
    item_id: str
    supplier_id: str | None = None
    change: int
    reason: str
    created_by: str
    price_at_change: Money | None = None
    timestamp: datetime

    @classmethod
    def from_entity(cls, entry: StockHistory) -> "StockHistoryResponse":
        return cls(
            id=entry.id,
            item_id=entry.item_id,
            supplier_id=entry.supplier_id,
            change=entry.change,
            reason=entry.reason.value,
            created_by=entry.created_by,
            price_at_change=entry.price_at_change,
            timestamp=entry.timestamp,
        )


class PageResponse(CamelResponse, Generic[T]):
    """One page of results."""

    items: list[T]
    page: int
    size: int
    total: int
    total_pages: int


def to_page_response(page: Page, item_type, convert) -> PageResponse:
    return PageResponse[item_type](
        items=[convert(i) for i in page.items],
        page=page.page,
        size=page.size,
        total=page.total,
        total_pages=page.total_pages,
    )


# --- Users ---


class AppUserResponse(CamelResponse):
    id: str
    email: str
    name: str
    role: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: AppUser) -> "AppUserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role.value,
            created_at=user.created_at,
        )


# --- Analytics ---


class LowStockItemResponse(CamelResponse):
    item_id: str
    item_name: str
    quantity: int
    minimum_quantity: int


class StockPerSupplierResponse(CamelResponse):
    supplier_id: str
    supplier_name: str
    total_quantity: int


class ItemUpdateFrequencyResponse(CamelResponse):
    item_id: str
    item_name: str
    update_count: int


class PricePointResponse(CamelResponse):
    timestamp: datetime
    price: Money


class MonthlyStockMovementResponse(CamelResponse):
    month: str
    stock_in: int
    stock_out: int


class StockValuePointResponse(CamelResponse):
    day: date
    total_value: Money


class StockUpdateResponse(CamelResponse):
    """One row of the stock update report."""

    history_id: str
    item_id: str
    item_name: str | None = None
    supplier_id: str | None = None
    supplier_name: str | None = None
    change: int
    reason: StockChangeReason
    created_by: str
    timestamp: datetime


class FinancialSummaryResponse(CamelResponse):
    """WAC valuation for a window."""

    method: str
    from_date: date
    to_date: date
    opening_qty: int
    opening_value: Money
    purchases_qty: int
    purchases_cost: Money
    returns_in_qty: int
    returns_in_cost: Money
    cogs_qty: int
    cogs_cost: Money
    write_off_qty: int
    write_off_cost: Money
    ending_qty: int
    ending_value: Money


# --- System ---


class ComponentHealthResponse(BaseModel):
    """Health of one dependency."""

    status: str
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
