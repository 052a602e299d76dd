"""Pytest configuration for unit service tests.

Services run against a fake unit of work whose stores are AsyncMocks, so
these tests never touch SQLite.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.core.entities import InventoryItem


class FakeUnitOfWork:
    """Records whether the block committed or rolled back."""

    def __init__(self):
        self.items = AsyncMock()
        self.suppliers = AsyncMock()
        self.history = AsyncMock()
        self.users = AsyncMock()
        self.read_only_calls: list[bool] = []
        self.committed = 0
        self.rolled_back = 0

        # Writes echo their argument back, like the SQLite stores
        self.items.add.side_effect = lambda item: item
        self.items.update.side_effect = lambda item: item
        self.history.append.side_effect = lambda entry: entry
        self.suppliers.add.side_effect = lambda supplier: supplier
        self.suppliers.update.side_effect = lambda supplier: supplier
        self.users.add.side_effect = lambda user: user

        self.items.exists_by_name.return_value = False
        self.suppliers.exists.return_value = True
        self.suppliers.get_by_name.return_value = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.committed += 1
        else:
            self.rolled_back += 1

    def factory(self, read_only: bool = False) -> "FakeUnitOfWork":
        self.read_only_calls.append(read_only)
        return self

    def appended(self) -> list:
        return [call.args[0] for call in self.history.append.await_args_list]


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def stored_item(uow: FakeUnitOfWork) -> InventoryItem:
    item = InventoryItem(
        id="item-1",
        name="Widget",
        quantity=10,
        price=Decimal("5.00"),
        supplier_id="sup-1",
        created_by="admin@example.com",
    )
    uow.items.get.return_value = item
    return item
