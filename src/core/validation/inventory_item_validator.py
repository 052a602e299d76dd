"""Field and existence checks for inventory items."""

from decimal import Decimal

from src.core.entities.inventory import InventoryItem
from src.core.exceptions import (
    DuplicateResourceError,
    InvalidArgumentError,
    ItemNotFoundError,
)
from src.core.interfaces.inventory_store import IInventoryItemStore
from src.core.validation._types import ItemFields, is_blank


def validate_base(item: ItemFields) -> None:
    """
    Check required item fields in a fixed order.

    Raises:
        InvalidArgumentError: naming the first field that fails.
    """
    if is_blank(item.name):
        raise InvalidArgumentError("name", "Product name cannot be null or empty", item.name)
    if item.quantity is None or item.quantity < 0:
        raise InvalidArgumentError("quantity", "Quantity cannot be negative", item.quantity)
    if item.price is None or item.price <= 0:
        raise InvalidArgumentError("price", "Price must be positive or greater than zero", item.price)
    if is_blank(item.supplier_id):
        raise InvalidArgumentError("supplier_id", "Supplier ID must be provided", item.supplier_id)
    if is_blank(item.created_by):
        raise InvalidArgumentError("created_by", "CreatedBy must be provided", item.created_by)


def validate_price(price: Decimal | None) -> None:
    if price is None or price <= 0:
        raise InvalidArgumentError("price", "Price must be positive or greater than zero", price)


async def validate_inventory_item_not_exists(
    name: str, store: IInventoryItemStore
) -> None:
    """Reject a create whose name is already taken (case-insensitive)."""
    if await store.exists_by_name(name.strip()):
        raise DuplicateResourceError("Inventory item", name)


async def validate_exists(item_id: str, store: IInventoryItemStore) -> InventoryItem:
    item = await store.get(item_id)
    if item is None:
        raise ItemNotFoundError(item_id)
    return item
