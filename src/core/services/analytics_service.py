"""
Analytics Service.

Read-only aggregations over items and the stock history, including a
weighted-average-cost (WAC) financial summary replayed from the audit trail.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from src.config import get_logger
from src.core.entities.analytics import (
    FinancialSummary,
    ItemUpdateFrequency,
    LowStockItem,
    MonthlyStockMovement,
    PricePoint,
    StockPerSupplier,
    StockUpdateFilter,
    StockUpdateRow,
    StockValuePoint,
)
from src.core.entities.common import as_naive_utc, utc_now
from src.core.entities.stock_history import StockChangeReason, StockEvent
from src.core.exceptions import InvalidArgumentError, InvalidRequestError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory

logger = get_logger(__name__)

RETURNS_IN = frozenset({StockChangeReason.RETURNED_BY_CUSTOMER})
WRITE_OFFS = frozenset(
    {
        StockChangeReason.DAMAGED,
        StockChangeReason.DESTROYED,
        StockChangeReason.SCRAPPED,
        StockChangeReason.EXPIRED,
        StockChangeReason.LOST,
    }
)
RETURNS_TO_SUPPLIER = frozenset({StockChangeReason.RETURNED_TO_SUPPLIER})

_COST_PLACES = Decimal("0.0001")


@dataclass(frozen=True)
class _WacState:
    qty: int = 0
    avg_cost: Decimal = Decimal("0")


def _apply_inbound(state: _WacState | None, qty_in: int, unit_cost: Decimal) -> _WacState:
    """newWAC = (q0 * c0 + qty_in * unit_cost) / (q0 + qty_in)"""
    state = state or _WacState()
    q1 = state.qty + qty_in
    if q1 == 0:
        return _WacState(0, Decimal("0"))
    value = state.avg_cost * state.qty + unit_cost * qty_in
    avg = (value / q1).quantize(_COST_PLACES, rounding=ROUND_HALF_UP)
    return _WacState(q1, avg)


def _issue(state: _WacState | None, qty_out: int) -> tuple[_WacState, Decimal]:
    # Quantity never drops below zero; average cost is unchanged by issues.
    state = state or _WacState()
    cost = state.avg_cost * qty_out
    return _WacState(max(0, state.qty - qty_out), state.avg_cost), cost


def _inbound_unit_cost(event: StockEvent, state: _WacState | None) -> Decimal:
    if event.price_at_change is not None:
        return event.price_at_change
    return state.avg_cost if state else Decimal("0")


def _totals(states: Iterable[_WacState]) -> tuple[int, Decimal]:
    qty = 0
    value = Decimal("0")
    for st in states:
        qty += st.qty
        value += st.avg_cost * st.qty
    return qty, value


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


class AnalyticsService:
    """Stock, movement and valuation reports."""

    def __init__(self, uow_factory: UnitOfWorkFactory, default_window_days: int = 30) -> None:
        self._uow_factory = uow_factory
        self._window_days = default_window_days

    def resolve_window(
        self, start: date | None, end: date | None
    ) -> tuple[date, date]:
        """Fill missing bounds with the default trailing window and check order."""
        if end is None:
            end = (start + timedelta(days=self._window_days)) if start else utc_now().date()
        if start is None:
            start = end - timedelta(days=self._window_days)
        if start > end:
            raise InvalidRequestError(
                "start must be on or before end",
                details={"start": start.isoformat(), "end": end.isoformat()},
            )
        return start, end

    @staticmethod
    def _bounds(start: date, end: date) -> tuple[datetime, datetime]:
        return datetime.combine(start, time.min), datetime.combine(end, time.max)

    async def low_stock_items(self, supplier_id: str | None = None) -> list[LowStockItem]:
        async with self._uow_factory(read_only=True) as uow:
            items = await uow.items.find_below_minimum_stock(_blank_to_none(supplier_id))
        return [
            LowStockItem(
                item_id=i.id,
                item_name=i.name,
                quantity=i.quantity,
                minimum_quantity=i.minimum_quantity,
            )
            for i in items
        ]

    async def low_stock_count(self, supplier_id: str | None = None) -> int:
        async with self._uow_factory(read_only=True) as uow:
            return await uow.items.count_below_minimum_stock(_blank_to_none(supplier_id))

    async def stock_per_supplier(self) -> list[StockPerSupplier]:
        async with self._uow_factory(read_only=True) as uow:
            rows = await uow.items.total_stock_by_supplier()
        return [
            StockPerSupplier(supplier_id=sid, supplier_name=name, total_quantity=qty)
            for sid, name, qty in rows
        ]

    async def item_update_frequency(
        self, supplier_id: str | None = None
    ) -> list[ItemUpdateFrequency]:
        async with self._uow_factory(read_only=True) as uow:
            rows = await uow.items.update_count_by_item(_blank_to_none(supplier_id))
        return [
            ItemUpdateFrequency(item_id=iid, item_name=name, update_count=count)
            for iid, name, count in rows
        ]

    async def price_trend(
        self, item_id: str | None, start: date | None = None, end: date | None = None
    ) -> list[PricePoint]:
        if item_id is None or not item_id.strip():
            raise InvalidArgumentError("item_id", "Item ID must be provided", item_id)
        start, end = self.resolve_window(start, end)
        lo, hi = self._bounds(start, end)
        async with self._uow_factory(read_only=True) as uow:
            return await uow.history.price_trend(item_id.strip(), lo, hi)

    async def monthly_stock_movement(
        self,
        start: date | None = None,
        end: date | None = None,
        supplier_id: str | None = None,
    ) -> list[MonthlyStockMovement]:
        start, end = self.resolve_window(start, end)
        lo, hi = self._bounds(start, end)
        async with self._uow_factory(read_only=True) as uow:
            return await uow.history.monthly_movement(lo, hi, _blank_to_none(supplier_id))

    async def stock_value_over_time(
        self,
        start: date | None = None,
        end: date | None = None,
        supplier_id: str | None = None,
    ) -> list[StockValuePoint]:
        """
        Closing stock value for every day of the window.

        Quantities are replayed from the whole trail. Each item is valued at
        its latest recorded price as of that day, falling back to its current
        catalogue price when no row carries one.
        """
        start, end = self.resolve_window(start, end)
        _, hi = self._bounds(start, end)
        supplier_id = _blank_to_none(supplier_id)

        async with self._uow_factory(read_only=True) as uow:
            events = await uow.history.events_until(
                hi, supplier_id, include_price_changes=True
            )
            catalogue = {i.id: i.price for i in await uow.items.list_all(supplier_id)}

        qty: dict[str, int] = {}
        price: dict[str, Decimal] = {}
        points: list[StockValuePoint] = []
        pending = iter(events)
        event = next(pending, None)

        day = start
        while day <= end:
            close = datetime.combine(day, time.max)
            while event is not None and event.timestamp <= close:
                if event.change:
                    qty[event.item_id] = max(0, qty.get(event.item_id, 0) + event.change)
                if event.price_at_change is not None:
                    price[event.item_id] = event.price_at_change
                event = next(pending, None)

            total = Decimal("0")
            for item_id, on_hand in qty.items():
                unit = price.get(item_id, catalogue.get(item_id, Decimal("0")))
                total += unit * on_hand
            points.append(StockValuePoint(day=day, total_value=total))
            day += timedelta(days=1)

        return points

    async def stock_updates(self, criteria: StockUpdateFilter) -> list[StockUpdateRow]:
        """
        Filtered audit rows for reporting, newest first.

        With neither date given the report covers the trailing default window.
        """
        start = as_naive_utc(criteria.start_date) if criteria.start_date else None
        end = as_naive_utc(criteria.end_date) if criteria.end_date else None
        if start is None and end is None:
            end = utc_now()
            start = end - timedelta(days=self._window_days)
        if start is not None and end is not None and start > end:
            raise InvalidRequestError(
                "startDate must be on or before endDate",
                details={"startDate": start.isoformat(), "endDate": end.isoformat()},
            )
        if (
            criteria.min_change is not None
            and criteria.max_change is not None
            and criteria.min_change > criteria.max_change
        ):
            raise InvalidRequestError(
                "minChange must be <= maxChange",
                details={"minChange": criteria.min_change, "maxChange": criteria.max_change},
            )

        async with self._uow_factory(read_only=True) as uow:
            return await uow.history.search_updates(
                start=start,
                end=end,
                item_name=_blank_to_none(criteria.item_name),
                supplier_id=_blank_to_none(criteria.supplier_id),
                created_by=_blank_to_none(criteria.created_by),
                min_change=criteria.min_change,
                max_change=criteria.max_change,
            )

    async def financial_summary(
        self,
        start: date | None = None,
        end: date | None = None,
        supplier_id: str | None = None,
    ) -> FinancialSummary:
        """
        Replay the audit trail with weighted average cost.

        Events before `start` build the opening position per item. Events in
        the window are bucketed:
            - inbound RETURNED_BY_CUSTOMER -> customer returns
            - other inbound with a price, or INITIAL_STOCK -> purchases
            - outbound RETURNED_TO_SUPPLIER -> negative purchases
            - outbound write-off reasons -> write-offs
            - any other outbound -> cost of goods sold
        Outbound quantities are costed at the item's running average.
        """
        start, end = self.resolve_window(start, end)
        lo, hi = self._bounds(start, end)

        async with self._uow_factory(read_only=True) as uow:
            events = await uow.history.events_until(hi, _blank_to_none(supplier_id))

        summary = FinancialSummary(from_date=start, to_date=end)
        state: dict[str, _WacState] = {}

        for e in events:
            if e.timestamp >= lo:
                continue
            st = state.get(e.item_id)
            if e.change > 0:
                state[e.item_id] = _apply_inbound(st, e.change, _inbound_unit_cost(e, st))
            elif e.change < 0:
                state[e.item_id], _ = _issue(st, -e.change)

        summary.opening_qty, summary.opening_value = _totals(state.values())

        for e in events:
            if e.timestamp < lo:
                continue
            st = state.get(e.item_id)

            if e.change > 0:
                unit = _inbound_unit_cost(e, st)
                state[e.item_id] = _apply_inbound(st, e.change, unit)
                if e.reason in RETURNS_IN:
                    summary.returns_in_qty += e.change
                    summary.returns_in_cost += unit * e.change
                elif e.price_at_change is not None or e.reason == StockChangeReason.INITIAL_STOCK:
                    summary.purchases_qty += e.change
                    summary.purchases_cost += unit * e.change

            elif e.change < 0:
                out = -e.change
                state[e.item_id], cost = _issue(st, out)
                if e.reason in RETURNS_TO_SUPPLIER:
                    summary.purchases_qty -= out
                    summary.purchases_cost -= cost
                elif e.reason in WRITE_OFFS:
                    summary.write_off_qty += out
                    summary.write_off_cost += cost
                else:
                    summary.cogs_qty += out
                    summary.cogs_cost += cost

        summary.ending_qty, summary.ending_value = _totals(state.values())

        logger.info(
            "financial_summary_computed",
            start=start.isoformat(),
            end=end.isoformat(),
            supplier_id=supplier_id,
            events=len(events),
        )
        return summary
