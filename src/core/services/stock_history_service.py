"""
Stock history service.

Owns every write to the audit trail. Item mutations call `record()` with the
history store of their own unit of work so the item change and its audit row
commit together.
"""

from datetime import datetime
from decimal import Decimal

from src.config import get_logger
from src.core.entities.common import as_naive_utc
from src.core.entities.inventory import InventoryItem
from src.core.entities.pagination import Page
from src.core.entities.stock_history import StockChange, StockChangeReason, StockHistory
from src.core.exceptions import InvalidRequestError
from src.core.interfaces.stock_history_store import IStockHistoryStore
from src.core.interfaces.unit_of_work import UnitOfWorkFactory
from src.core.validation import stock_history_validator

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


class StockHistoryService:
    """Append-only audit trail writer plus history queries."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._uow_factory = uow_factory
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    async def record(
        self,
        history: IStockHistoryStore,
        item: InventoryItem,
        change: int,
        reason: StockChangeReason | str | None,
        created_by: str | None,
        price_at_change: Decimal | None = None,
    ) -> StockHistory:
        """
        Validate and append one row for `item` using the caller's transaction.

        The supplier id is copied from the item at write time.
        """
        parsed = stock_history_validator.validate(
            StockChange(
                item_id=item.id,
                change=change,
                reason=reason,
                created_by=created_by,
                price_at_change=price_at_change,
            )
        )
        entry = StockHistory(
            item_id=item.id,
            supplier_id=item.supplier_id,
            change=change,
            reason=parsed,
            created_by=created_by.strip(),
            price_at_change=price_at_change,
        )
        entry = await history.append(entry)

        logger.info(
            "stock_change_logged",
            history_id=entry.id,
            item_id=item.id,
            change=change,
            reason=parsed.value,
            created_by=entry.created_by,
        )
        return entry

    async def list_all(self) -> list[StockHistory]:
        async with self._uow_factory(read_only=True) as uow:
            return await uow.history.list_all()

    async def list_by_item(self, item_id: str) -> list[StockHistory]:
        async with self._uow_factory(read_only=True) as uow:
            return await uow.history.list_by_item(item_id)

    async def list_by_reason(self, reason: StockChangeReason | str) -> list[StockHistory]:
        parsed = stock_history_validator.parse_reason(reason)
        if not parsed.ok:
            raise InvalidRequestError(parsed.error, details={"reason": str(reason)})
        async with self._uow_factory(read_only=True) as uow:
            return await uow.history.list_by_reason(parsed.reason)

    async def find_filtered(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        item_name: str | None = None,
        supplier_id: str | None = None,
        page: int = 0,
        size: int | None = None,
    ) -> Page[StockHistory]:
        """
        Search the trail with optional inclusive bounds and filters.

        Page size defaults to 50 and is capped at 200. Offset-aware bounds are
        shifted to UTC, naive bounds are taken as UTC.
        """
        start = as_naive_utc(start) if start is not None else None
        end = as_naive_utc(end) if end is not None else None
        if start is not None and end is not None and end < start:
            raise InvalidRequestError(
                "endDate must be >= startDate",
                details={"start": start.isoformat(), "end": end.isoformat()},
            )
        if page < 0:
            raise InvalidRequestError("page must be >= 0", details={"page": page})

        size = self._default_page_size if size is None or size <= 0 else size
        size = min(size, self._max_page_size)

        async with self._uow_factory(read_only=True) as uow:
            return await uow.history.find_filtered(
                start=start,
                end=end,
                item_name=(item_name or "").strip() or None,
                supplier_id=(supplier_id or "").strip() or None,
                page=page,
                size=size,
            )
