"""Tests for inventory, stock history and user entities."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.entities import (
    DELETION_REASONS,
    NON_ADJUSTMENT_REASONS,
    Actor,
    AppUser,
    InventoryItem,
    Page,
    Role,
    StockChangeReason,
    StockHistory,
    Supplier,
)


class TestInventoryItem:
    def _item(self, quantity: int, minimum: int = 10) -> InventoryItem:
        return InventoryItem(
            name="Widget",
            quantity=quantity,
            price=Decimal("2.50"),
            supplier_id="s-1",
            minimum_quantity=minimum,
        )

    def test_defaults(self):
        item = InventoryItem(name="Widget", price=Decimal("1"), supplier_id="s-1")
        assert item.id
        assert item.quantity == 0
        assert item.minimum_quantity == 10
        assert item.created_at.tzinfo is None

    def test_ids_are_unique(self):
        assert self._item(1).id != self._item(1).id

    def test_low_stock_below_minimum(self):
        assert self._item(9).low_stock is True

    def test_not_low_stock_at_minimum(self):
        assert self._item(10).low_stock is False

    def test_total_value(self):
        assert self._item(4).total_value == Decimal("10.00")


class TestSupplier:
    def test_optional_contact_fields(self):
        supplier = Supplier(name="Acme")
        assert supplier.contact_name is None
        assert supplier.email is None
        assert supplier.created_by == "system"


class TestStockHistory:
    def test_is_immutable(self):
        entry = StockHistory(
            item_id="i-1",
            change=5,
            reason=StockChangeReason.SOLD,
            created_by="admin@example.com",
        )
        with pytest.raises(ValidationError):
            entry.change = 10

    def test_reason_coerced_from_string(self):
        entry = StockHistory(item_id="i-1", change=-1, reason="LOST", created_by="a")
        assert entry.reason is StockChangeReason.LOST

    def test_reason_values(self):
        assert len(StockChangeReason) == 11
        assert StockChangeReason("RETURNED_BY_CUSTOMER") is StockChangeReason.RETURNED_BY_CUSTOMER

    def test_deletion_reasons(self):
        assert StockChangeReason.SOLD not in DELETION_REASONS
        assert StockChangeReason.RETURNED_TO_SUPPLIER in DELETION_REASONS
        assert NON_ADJUSTMENT_REASONS == {
            StockChangeReason.INITIAL_STOCK,
            StockChangeReason.PRICE_CHANGE,
        }


class TestActor:
    def test_from_user(self):
        user = AppUser(email="jane@example.com", name="Jane", role=Role.ADMIN)
        actor = Actor.from_user(user)
        assert actor.id == user.id
        assert actor.email == "jane@example.com"
        assert actor.is_admin

    def test_user_is_not_admin(self):
        assert not Actor(id="u", email="u@example.com", role=Role.USER).is_admin

    def test_is_frozen(self):
        actor = Actor(id="u", email="u@example.com", role=Role.USER)
        with pytest.raises(ValidationError):
            actor.role = Role.ADMIN


class TestPage:
    @pytest.mark.parametrize(
        ("total", "size", "pages"),
        [(0, 50, 0), (1, 50, 1), (50, 50, 1), (51, 50, 2), (10, 0, 0)],
    )
    def test_total_pages(self, total, size, pages):
        assert Page[int](items=[], page=0, size=size, total=total).total_pages == pages
