"""Unit tests for AnalyticsService, including the WAC replay."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from src.core.entities import InventoryItem, StockChangeReason, StockEvent, StockUpdateFilter
from src.core.entities.common import utc_now
from src.core.exceptions import InvalidArgumentError, InvalidRequestError
from src.core.services import AnalyticsService


@pytest.fixture
def service(uow) -> AnalyticsService:
    return AnalyticsService(uow.factory, default_window_days=30)


def _event(day: date, change: int, reason: StockChangeReason, price: str | None = None, item="A"):
    return StockEvent(
        item_id=item,
        change=change,
        reason=reason,
        price_at_change=Decimal(price) if price is not None else None,
        timestamp=datetime.combine(day, datetime.min.time()).replace(hour=12),
    )


class TestResolveWindow:
    def test_both_missing_uses_trailing_window(self, service):
        start, end = service.resolve_window(None, None)
        assert end == utc_now().date()
        assert end - start == timedelta(days=30)

    def test_start_only(self, service):
        start, end = service.resolve_window(date(2024, 1, 1), None)
        assert end == date(2024, 1, 31)

    def test_end_only(self, service):
        start, _ = service.resolve_window(None, date(2024, 3, 31))
        assert start == date(2024, 3, 1)

    def test_inverted(self, service):
        with pytest.raises(InvalidRequestError):
            service.resolve_window(date(2024, 2, 1), date(2024, 1, 1))


class TestFinancialSummary:
    async def test_wac_buckets(self, service, uow):
        uow.history.events_until.return_value = [
            _event(date(2024, 2, 10), 10, StockChangeReason.INITIAL_STOCK, "5"),
            _event(date(2024, 3, 5), 10, StockChangeReason.MANUAL_UPDATE, "7"),
            _event(date(2024, 3, 10), -4, StockChangeReason.SOLD, "7"),
            _event(date(2024, 3, 12), -2, StockChangeReason.DAMAGED, "7"),
            _event(date(2024, 3, 15), 1, StockChangeReason.RETURNED_BY_CUSTOMER, "6"),
            _event(date(2024, 3, 20), -3, StockChangeReason.RETURNED_TO_SUPPLIER, "7"),
        ]

        summary = await service.financial_summary(date(2024, 3, 1), date(2024, 3, 31))

        assert summary.method == "WAC"
        assert (summary.opening_qty, summary.opening_value) == (10, Decimal("50"))
        assert (summary.purchases_qty, summary.purchases_cost) == (7, Decimal("52"))
        assert (summary.returns_in_qty, summary.returns_in_cost) == (1, Decimal("6"))
        assert (summary.cogs_qty, summary.cogs_cost) == (4, Decimal("24"))
        assert (summary.write_off_qty, summary.write_off_cost) == (2, Decimal("12"))
        assert (summary.ending_qty, summary.ending_value) == (12, Decimal("72"))
        assert (
            summary.opening_value
            + summary.purchases_cost
            + summary.returns_in_cost
            - summary.cogs_cost
            - summary.write_off_cost
            == summary.ending_value
        )

    async def test_items_tracked_separately(self, service, uow):
        uow.history.events_until.return_value = [
            _event(date(2024, 3, 2), 2, StockChangeReason.INITIAL_STOCK, "10", item="A"),
            _event(date(2024, 3, 2), 2, StockChangeReason.INITIAL_STOCK, "1", item="B"),
            _event(date(2024, 3, 3), -1, StockChangeReason.SOLD, item="B"),
        ]

        summary = await service.financial_summary(date(2024, 3, 1), date(2024, 3, 31))

        assert summary.cogs_cost == Decimal("1")
        assert summary.ending_value == Decimal("21")

    async def test_inbound_without_price_uses_running_average(self, service, uow):
        uow.history.events_until.return_value = [
            _event(date(2024, 3, 2), 4, StockChangeReason.INITIAL_STOCK, "3"),
            _event(date(2024, 3, 3), 2, StockChangeReason.MANUAL_UPDATE),
        ]

        summary = await service.financial_summary(date(2024, 3, 1), date(2024, 3, 31))

        # An unpriced inbound row is not a purchase but still adds stock
        assert summary.purchases_qty == 4
        assert summary.ending_qty == 6
        assert summary.ending_value == Decimal("18")

    async def test_supplier_filter_forwarded(self, service, uow):
        uow.history.events_until.return_value = []
        await service.financial_summary(date(2024, 3, 1), date(2024, 3, 31), supplier_id=" s-1 ")
        assert uow.history.events_until.await_args.args[1] == "s-1"


class TestOtherReports:
    async def test_price_trend_requires_item(self, service):
        with pytest.raises(InvalidArgumentError):
            await service.price_trend(" ")

    async def test_low_stock_items(self, service, uow):
        uow.items.find_below_minimum_stock.return_value = [
            InventoryItem(
                id="i-1", name="Bolt", quantity=2, price=Decimal("1"), supplier_id="s-1"
            )
        ]
        (low,) = await service.low_stock_items()
        assert low.item_name == "Bolt"
        assert low.minimum_quantity == 10
        uow.items.find_below_minimum_stock.assert_awaited_once_with(None)

    async def test_stock_per_supplier(self, service, uow):
        uow.items.total_stock_by_supplier.return_value = [("s-1", "Acme", 42)]
        (row,) = await service.stock_per_supplier()
        assert (row.supplier_name, row.total_quantity) == ("Acme", 42)


class TestStockValueOverTime:
    async def test_daily_closing_value(self, service, uow):
        uow.history.events_until.return_value = [
            _event(date(2024, 3, 1), 10, StockChangeReason.INITIAL_STOCK, "5"),
            _event(date(2024, 3, 2), 0, StockChangeReason.PRICE_CHANGE, "6"),
            _event(date(2024, 3, 2), 2, StockChangeReason.INITIAL_STOCK, item="B"),
            _event(date(2024, 3, 3), -4, StockChangeReason.SOLD),
        ]
        uow.items.list_all.return_value = [
            InventoryItem(id="B", name="Bolt", quantity=2, price=Decimal("3"), supplier_id="s-1")
        ]

        points = await service.stock_value_over_time(date(2024, 3, 1), date(2024, 3, 4))

        assert [p.day for p in points] == [date(2024, 3, d) for d in range(1, 5)]
        # A at its latest recorded price, B at its catalogue price
        assert [p.total_value for p in points] == [
            Decimal("50"),
            Decimal("66"),
            Decimal("42"),
            Decimal("42"),
        ]

    async def test_events_before_window_open_the_position(self, service, uow):
        uow.history.events_until.return_value = [
            _event(date(2024, 1, 15), 4, StockChangeReason.INITIAL_STOCK, "2.50"),
        ]
        uow.items.list_all.return_value = []
        (point,) = await service.stock_value_over_time(date(2024, 3, 1), date(2024, 3, 1))
        assert point.total_value == Decimal("10.00")

    async def test_includes_price_changes_and_supplier(self, service, uow):
        uow.history.events_until.return_value = []
        uow.items.list_all.return_value = []
        await service.stock_value_over_time(date(2024, 3, 1), date(2024, 3, 2), " s-1 ")
        call = uow.history.events_until.await_args
        assert call.args[1] == "s-1"
        assert call.kwargs["include_price_changes"] is True
        uow.items.list_all.assert_awaited_once_with("s-1")

    async def test_inverted_window(self, service):
        with pytest.raises(InvalidRequestError):
            await service.stock_value_over_time(date(2024, 3, 2), date(2024, 3, 1))


class TestStockUpdates:
    @pytest.fixture(autouse=True)
    def no_rows(self, uow):
        uow.history.search_updates.return_value = []

    async def test_blank_filters_become_none(self, service, uow):
        await service.stock_updates(
            StockUpdateFilter(item_name="   ", supplier_id=" ", created_by="")
        )
        kwargs = uow.history.search_updates.await_args.kwargs
        assert kwargs["item_name"] is None
        assert kwargs["supplier_id"] is None
        assert kwargs["created_by"] is None
        assert kwargs["min_change"] is None

    async def test_no_dates_uses_trailing_window(self, service, uow):
        await service.stock_updates(StockUpdateFilter())
        kwargs = uow.history.search_updates.await_args.kwargs
        assert kwargs["end"] - kwargs["start"] == timedelta(days=30)

    async def test_single_bound_left_open(self, service, uow):
        await service.stock_updates(StockUpdateFilter(start_date=datetime(2024, 2, 1)))
        kwargs = uow.history.search_updates.await_args.kwargs
        assert kwargs["start"] == datetime(2024, 2, 1)
        assert kwargs["end"] is None

    async def test_offset_dates_shifted_to_utc(self, service, uow):
        minus_twelve = timezone(timedelta(hours=-12))
        await service.stock_updates(
            StockUpdateFilter(
                start_date=datetime(2024, 2, 1, tzinfo=minus_twelve),
                end_date=datetime(2024, 2, 2),
            )
        )
        assert uow.history.search_updates.await_args.kwargs["start"] == datetime(2024, 2, 1, 12)

    async def test_inverted_dates(self, service, uow):
        with pytest.raises(InvalidRequestError, match="startDate"):
            await service.stock_updates(
                StockUpdateFilter(start_date=datetime(2024, 2, 10), end_date=datetime(2024, 2, 1))
            )
        uow.history.search_updates.assert_not_awaited()

    async def test_min_above_max(self, service, uow):
        with pytest.raises(InvalidRequestError, match="minChange"):
            await service.stock_updates(StockUpdateFilter(min_change=10, max_change=5))
        uow.history.search_updates.assert_not_awaited()
