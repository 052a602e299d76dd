"""Abstract interface for inventory item storage."""

from abc import ABC, abstractmethod

from src.core.entities.inventory import InventoryItem
from src.core.entities.pagination import Page


class IInventoryItemStore(ABC):
    """Interface for inventory item persistence and stock queries."""

    @abstractmethod
    async def get(self, item_id: str) -> InventoryItem | None:
        """Get inventory item by ID."""
        pass

    @abstractmethod
    async def list_all(self, supplier_id: str | None = None) -> list[InventoryItem]:
        """List items ordered by name, optionally for one supplier."""
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def exists_by_name(self, name: str, exclude_id: str | None = None) -> bool:
        """Case-insensitive name check, optionally ignoring one item."""
        pass

    @abstractmethod
    async def search_by_name(
        self, name: str, page: int = 0, size: int = 50
    ) -> Page[InventoryItem]:
        """Substring search on name, sorted by price ascending."""
        pass

    @abstractmethod
    async def add(self, item: InventoryItem) -> InventoryItem:
        """Insert a new item. Raises DuplicateResourceError on name clash."""
        pass

    @abstractmethod
    async def update(self, item: InventoryItem) -> InventoryItem:
        """Persist all mutable fields. Raises DuplicateResourceError on name clash."""
        pass

    @abstractmethod
    async def delete(self, item_id: str) -> bool:
        pass

    @abstractmethod
    async def find_below_minimum_stock(
        self, supplier_id: str | None = None
    ) -> list[InventoryItem]:
        """Items with quantity < minimum_quantity, lowest quantity first."""
        pass

    @abstractmethod
    async def count_below_minimum_stock(self, supplier_id: str | None = None) -> int:
        pass

    @abstractmethod
    async def exists_active_stock_for_supplier(
        self, supplier_id: str, min_quantity: int = 0
    ) -> bool:
        """True if any item of the supplier has quantity > min_quantity."""
        pass

    @abstractmethod
    async def total_stock_by_supplier(self) -> list[tuple[str, str, int]]:
        """(supplier_id, supplier_name, total quantity), largest first."""
        pass

    @abstractmethod
    async def update_count_by_item(
        self, supplier_id: str | None = None
    ) -> list[tuple[str, str, int]]:
        """(item_id, item_name, history row count), most updated first."""
        pass
