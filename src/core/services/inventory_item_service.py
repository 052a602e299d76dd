"""
Inventory item service.

Every mutation follows the same sequence inside one unit of work:
fetch, permission check, field validation, apply, append one audit row,
commit. A failure at any step rolls back the whole unit.
"""

from decimal import Decimal

from src.config import get_logger
from src.core.entities.inventory import (
    DEFAULT_MINIMUM_QUANTITY,
    InventoryItem,
    ItemDraft,
)
from src.core.entities.pagination import Page
from src.core.entities.stock_history import (
    DELETION_REASONS,
    NON_ADJUSTMENT_REASONS,
    StockChangeReason,
)
from src.core.entities.user import Actor
from src.core.exceptions import (
    DuplicateResourceError,
    ForbiddenError,
    InsufficientStockError,
    InvalidArgumentError,
    InvalidRequestError,
    SupplierNotFoundError,
    UnauthorizedError,
)
from src.core.interfaces.unit_of_work import IUnitOfWork, UnitOfWorkFactory
from src.core.services.stock_history_service import StockHistoryService
from src.core.validation import (
    inventory_item_validator,
    security_validator,
    stock_history_validator,
)

logger = get_logger(__name__)

SYSTEM_USER = "system"


def _require_actor(actor: Actor | None) -> Actor:
    if actor is None:
        raise UnauthorizedError()
    return actor


def _require_admin(actor: Actor | None, operation: str) -> Actor:
    actor = _require_actor(actor)
    if not actor.is_admin:
        raise ForbiddenError(
            f"Only administrators may {operation} inventory items",
            role=actor.role.value,
        )
    return actor


class InventoryItemService:
    """Reads and validated mutations of inventory items."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        history_service: StockHistoryService,
        default_minimum_quantity: int = DEFAULT_MINIMUM_QUANTITY,
    ) -> None:
        self._uow_factory = uow_factory
        self._history = history_service
        self._default_minimum_quantity = default_minimum_quantity

    # ------------------------------------------------------------------ reads

    async def get(self, item_id: str) -> InventoryItem:
        async with self._uow_factory(read_only=True) as uow:
            return await inventory_item_validator.validate_exists(item_id, uow.items)

    async def list_all(self, supplier_id: str | None = None) -> list[InventoryItem]:
        async with self._uow_factory(read_only=True) as uow:
            return await uow.items.list_all(supplier_id=supplier_id or None)

    async def count(self) -> int:
        async with self._uow_factory(read_only=True) as uow:
            return await uow.items.count()

    async def search(self, name: str, page: int = 0, size: int = 50) -> Page[InventoryItem]:
        """Name substring search, cheapest first."""
        if page < 0 or size <= 0:
            raise InvalidRequestError(
                "page must be >= 0 and size > 0", details={"page": page, "size": size}
            )
        async with self._uow_factory(read_only=True) as uow:
            return await uow.items.search_by_name((name or "").strip(), page, size)

    # -------------------------------------------------------------- mutations

    async def create(self, draft: ItemDraft, actor: Actor | None) -> InventoryItem:
        """
        Create an item and log its opening stock.

        A non-zero opening quantity is logged as INITIAL_STOCK with the
        creation price. A zero quantity creates the item with no audit row.
        """
        actor = _require_admin(actor, "create")
        draft.created_by = actor.email or SYSTEM_USER
        inventory_item_validator.validate_base(draft)

        async with self._uow_factory() as uow:
            await inventory_item_validator.validate_inventory_item_not_exists(
                draft.name, uow.items
            )
            await self._ensure_supplier(uow, draft.supplier_id)

            item = InventoryItem(
                name=draft.name.strip(),
                quantity=draft.quantity,
                price=draft.price,
                supplier_id=draft.supplier_id.strip(),
                minimum_quantity=self._minimum_quantity(draft.minimum_quantity),
                created_by=draft.created_by,
            )
            if draft.id and draft.id.strip():
                item.id = draft.id.strip()

            item = await uow.items.add(item)
            if item.quantity > 0:
                await self._history.record(
                    uow.history,
                    item,
                    item.quantity,
                    StockChangeReason.INITIAL_STOCK,
                    actor.email,
                    item.price,
                )

        logger.info(
            "inventory_item_created",
            item_id=item.id,
            name=item.name,
            quantity=item.quantity,
            created_by=item.created_by,
        )
        return item

    async def update(
        self, item_id: str, draft: ItemDraft, actor: Actor | None
    ) -> InventoryItem:
        """
        Replace the mutable fields of an item.

        USER callers may only change quantity and price. One audit row is
        written: MANUAL_UPDATE when quantity moved, PRICE_CHANGE when only the
        price moved, nothing otherwise.
        """
        actor = _require_actor(actor)
        if draft.id and draft.id != item_id:
            raise InvalidRequestError(
                "Path id and body id do not match",
                details={"path_id": item_id, "body_id": draft.id},
            )

        async with self._uow_factory() as uow:
            existing = await inventory_item_validator.validate_exists(item_id, uow.items)
            security_validator.validate_update_permissions(actor, existing, draft)

            draft.created_by = existing.created_by
            inventory_item_validator.validate_base(draft)

            name = draft.name.strip()
            supplier_id = draft.supplier_id.strip()
            if name.lower() != existing.name.lower() and await uow.items.exists_by_name(
                name, exclude_id=item_id
            ):
                raise DuplicateResourceError("Inventory item", name)
            if supplier_id != existing.supplier_id:
                await self._ensure_supplier(uow, supplier_id)

            delta = draft.quantity - existing.quantity
            price_changed = draft.price != existing.price

            updated = existing.model_copy(
                update={
                    "name": name,
                    "quantity": draft.quantity,
                    "price": draft.price,
                    "supplier_id": supplier_id,
                    "minimum_quantity": (
                        existing.minimum_quantity
                        if draft.minimum_quantity is None
                        else self._minimum_quantity(draft.minimum_quantity)
                    ),
                }
            )
            updated = await uow.items.update(updated)

            if delta != 0:
                await self._history.record(
                    uow.history,
                    updated,
                    delta,
                    StockChangeReason.MANUAL_UPDATE,
                    actor.email,
                    updated.price,
                )
            elif price_changed:
                await self._history.record(
                    uow.history,
                    updated,
                    0,
                    StockChangeReason.PRICE_CHANGE,
                    actor.email,
                    updated.price,
                )

        logger.info(
            "inventory_item_updated",
            item_id=item_id,
            delta=delta,
            price_changed=price_changed,
            updated_by=actor.email,
        )
        return updated

    async def adjust_quantity(
        self,
        item_id: str,
        delta: int,
        reason: StockChangeReason | str | None,
        actor: Actor | None,
    ) -> InventoryItem:
        """Apply a signed quantity delta and log it with the caller's reason."""
        actor = _require_actor(actor)
        if delta == 0:
            raise InvalidArgumentError("delta", "Quantity change must be non-zero", delta)

        if reason is None or (isinstance(reason, str) and not reason.strip()):
            parsed_reason = StockChangeReason.MANUAL_UPDATE
        else:
            parsed = stock_history_validator.parse_reason(reason)
            if not parsed.ok:
                raise InvalidRequestError(parsed.error, details={"reason": str(reason)})
            parsed_reason = parsed.reason
        if parsed_reason in NON_ADJUSTMENT_REASONS:
            raise InvalidRequestError(
                f"Reason {parsed_reason.value} cannot be used for quantity adjustments",
                details={"reason": parsed_reason.value},
            )

        async with self._uow_factory() as uow:
            item = await inventory_item_validator.validate_exists(item_id, uow.items)
            new_quantity = item.quantity + delta
            if new_quantity < 0:
                raise InsufficientStockError(item_id, delta, item.quantity)

            item = await uow.items.update(item.model_copy(update={"quantity": new_quantity}))
            await self._history.record(
                uow.history, item, delta, parsed_reason, actor.email, item.price
            )

        logger.info(
            "inventory_quantity_adjusted",
            item_id=item_id,
            delta=delta,
            new_quantity=item.quantity,
            reason=parsed_reason.value,
        )
        return item

    async def change_price(
        self, item_id: str, price: Decimal | None, actor: Actor | None
    ) -> InventoryItem:
        """Set a new unit price and log a zero-delta PRICE_CHANGE row."""
        actor = _require_actor(actor)
        inventory_item_validator.validate_price(price)

        async with self._uow_factory() as uow:
            item = await inventory_item_validator.validate_exists(item_id, uow.items)
            old_price = item.price
            item = await uow.items.update(item.model_copy(update={"price": price}))
            await self._history.record(
                uow.history, item, 0, StockChangeReason.PRICE_CHANGE, actor.email, price
            )

        logger.info(
            "inventory_price_changed",
            item_id=item_id,
            old_price=str(old_price),
            new_price=str(price),
        )
        return item

    async def delete(
        self,
        item_id: str,
        reason: StockChangeReason | str | None,
        actor: Actor | None,
    ) -> None:
        """Remove an item, logging the outgoing stock with a deletion reason."""
        actor = _require_admin(actor, "delete")
        parsed = stock_history_validator.parse_reason(reason)
        if not parsed.ok:
            raise InvalidRequestError(parsed.error, details={"reason": str(reason)})
        if parsed.reason not in DELETION_REASONS:
            raise InvalidRequestError(
                f"Reason {parsed.reason.value} is not valid for deletion",
                details={
                    "reason": parsed.reason.value,
                    "allowed": sorted(r.value for r in DELETION_REASONS),
                },
            )

        async with self._uow_factory() as uow:
            item = await inventory_item_validator.validate_exists(item_id, uow.items)
            if item.quantity > 0:
                await self._history.record(
                    uow.history,
                    item,
                    -item.quantity,
                    parsed.reason,
                    actor.email,
                    item.price,
                )
            await uow.items.delete(item_id)

        logger.info(
            "inventory_item_deleted",
            item_id=item_id,
            reason=parsed.reason.value,
            removed_quantity=item.quantity,
        )

    # --------------------------------------------------------------- helpers

    def _minimum_quantity(self, value: int | None) -> int:
        if value is None or value <= 0:
            return self._default_minimum_quantity
        return value

    @staticmethod
    async def _ensure_supplier(uow: IUnitOfWork, supplier_id: str) -> None:
        if not await uow.suppliers.exists(supplier_id.strip()):
            raise SupplierNotFoundError(supplier_id)
