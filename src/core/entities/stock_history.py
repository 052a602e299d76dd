"""Stock history (audit trail) entities."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities.common import new_id, utc_now


class StockChangeReason(str, Enum):
    """Business reason attached to every stock movement."""

    INITIAL_STOCK = "INITIAL_STOCK"
    MANUAL_UPDATE = "MANUAL_UPDATE"
    SOLD = "SOLD"
    SCRAPPED = "SCRAPPED"
    DESTROYED = "DESTROYED"
    DAMAGED = "DAMAGED"
    EXPIRED = "EXPIRED"
    LOST = "LOST"
    RETURNED_TO_SUPPLIER = "RETURNED_TO_SUPPLIER"
    RETURNED_BY_CUSTOMER = "RETURNED_BY_CUSTOMER"
    PRICE_CHANGE = "PRICE_CHANGE"


# Reasons accepted when an item is removed from the catalogue
DELETION_REASONS: frozenset[StockChangeReason] = frozenset(
    {
        StockChangeReason.SCRAPPED,
        StockChangeReason.DESTROYED,
        StockChangeReason.DAMAGED,
        StockChangeReason.EXPIRED,
        StockChangeReason.LOST,
        StockChangeReason.RETURNED_TO_SUPPLIER,
    }
)

# Reasons that cannot be supplied by a caller adjusting quantity
NON_ADJUSTMENT_REASONS: frozenset[StockChangeReason] = frozenset(
    {StockChangeReason.INITIAL_STOCK, StockChangeReason.PRICE_CHANGE}
)


@dataclass
class StockChange:
    """Unvalidated description of a stock movement about to be logged."""

    item_id: str | None
    change: int
    reason: str | StockChangeReason | None
    created_by: str | None
    price_at_change: Decimal | None = None


class StockHistory(BaseModel):
    """One immutable row of the audit trail."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    item_id: str
    supplier_id: str | None = None  # denormalized from the item at write time
    change: int
    reason: StockChangeReason
    created_by: str
    price_at_change: Decimal | None = None
    timestamp: datetime = Field(default_factory=utc_now)


class StockEvent(BaseModel):
    """Lightweight projection of a history row used by analytics replays."""

    item_id: str
    change: int
    reason: StockChangeReason
    price_at_change: Decimal | None = None
    timestamp: datetime
