"""Supplier payload, uniqueness and deletion rules."""

from src.core.exceptions import (
    DuplicateResourceError,
    IllegalStateError,
    InvalidRequestError,
)
from src.core.interfaces.inventory_store import IInventoryItemStore
from src.core.interfaces.supplier_store import ISupplierStore
from src.core.validation._types import SupplierFields, is_blank


def validate_base(supplier: SupplierFields | None) -> None:
    if supplier is None:
        raise InvalidRequestError("Supplier payload must not be null")
    if is_blank(supplier.name):
        raise InvalidRequestError("Supplier name must not be blank")


async def assert_unique_name(
    store: ISupplierStore, name: str | None, exclude_id: str | None = None
) -> None:
    """Raise if a different supplier already holds `name` (case-insensitive)."""
    if is_blank(name):
        return
    existing = await store.get_by_name(name.strip())
    if existing is not None and existing.id != exclude_id:
        raise DuplicateResourceError("Supplier", name.strip())


async def validate_deletable(supplier_id: str | None, items: IInventoryItemStore) -> None:
    if is_blank(supplier_id):
        raise InvalidRequestError("Supplier id must be provided for deletion")
    if await items.exists_active_stock_for_supplier(supplier_id, 0):
        raise IllegalStateError(
            "Cannot delete supplier with linked items",
            details={"supplier_id": supplier_id},
        )
