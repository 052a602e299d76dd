"""Inventory domain entities."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.entities.common import new_id, utc_now

DEFAULT_MINIMUM_QUANTITY = 10


class Supplier(BaseModel):
    """A vendor that inventory items are sourced from."""

    id: str = Field(default_factory=new_id)
    name: str
    contact_name: str | None = None
    phone: str | None = None
    email: str | None = None
    created_by: str = "system"
    created_at: datetime = Field(default_factory=utc_now)


class InventoryItem(BaseModel):
    """Tracks stock level, unit price and reorder threshold for one product."""

    id: str = Field(default_factory=new_id)
    name: str
    quantity: int = 0
    price: Decimal
    supplier_id: str  # FK → suppliers.id
    minimum_quantity: int = DEFAULT_MINIMUM_QUANTITY
    created_by: str = "system"
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def low_stock(self) -> bool:
        """True when stock has fallen under the reorder threshold."""
        return self.quantity < self.minimum_quantity

    @property
    def total_value(self) -> Decimal:
        """Inventory value = quantity * unit price."""
        return self.price * self.quantity


@dataclass
class ItemDraft:
    """Caller-supplied item fields before they become an InventoryItem."""

    name: str | None = None
    quantity: int | None = None
    price: Decimal | None = None
    supplier_id: str | None = None
    minimum_quantity: int | None = None
    id: str | None = None
    created_by: str | None = None


@dataclass
class SupplierDraft:
    name: str | None = None
    contact_name: str | None = None
    phone: str | None = None
    email: str | None = None
    id: str | None = None
