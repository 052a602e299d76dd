"""Request DTOs for API endpoints.

Pydantic v2 models with camelCase aliases. Business fields are optional at
this layer so that a missing value reaches the validators and is reported
as a 400 naming the field, rather than a generic 422.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.entities.analytics import StockUpdateFilter
from src.core.entities.inventory import ItemDraft, SupplierDraft


class CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InventoryItemRequest(CamelRequest):
    """Body of POST /api/inventory and PUT /api/inventory/{id}."""

    id: str | None = Field(default=None, description="Optional client-supplied id on create")
    name: str | None = Field(default=None, examples=["Widget"])
    quantity: int | None = Field(default=None, examples=[10])
    price: Decimal | None = Field(default=None, examples=["5.00"])
    supplier_id: str | None = Field(default=None, description="Existing supplier id")
    minimum_quantity: int | None = Field(
        default=None, description="Reorder threshold; defaults to 10 when not positive"
    )

    def to_draft(self) -> ItemDraft:
        return ItemDraft(
            id=self.id,
            name=self.name,
            quantity=self.quantity,
            price=self.price,
            supplier_id=self.supplier_id,
            minimum_quantity=self.minimum_quantity,
        )


class SupplierRequest(CamelRequest):
    """Body of POST /api/suppliers and PUT /api/suppliers/{id}."""

    id: str | None = Field(default=None, description="Must be absent on create")
    name: str | None = Field(default=None, examples=["Acme Components"])
    contact_name: str | None = None
    phone: str | None = None
    email: str | None = None

    def to_draft(self) -> SupplierDraft:
        return SupplierDraft(
            id=self.id,
            name=self.name,
            contact_name=self.contact_name,
            phone=self.phone,
            email=self.email,
        )


class LoginRequest(CamelRequest):
    """Identity asserted by the upstream OAuth2 provider after a successful login."""

    email: str = Field(..., examples=["jane@example.com"])
    name: str | None = None


class StockUpdateQueryRequest(CamelRequest):
    """Body of POST /api/analytics/stock-updates/query."""

    start_date: datetime | None = None
    end_date: datetime | None = None
    item_name: str | None = Field(default=None, description="Case-insensitive substring")
    supplier_id: str | None = None
    created_by: str | None = Field(default=None, description="Exact email, any case")
    min_change: int | None = None
    max_change: int | None = None

    def to_filter(self) -> StockUpdateFilter:
        return StockUpdateFilter(**self.model_dump())
