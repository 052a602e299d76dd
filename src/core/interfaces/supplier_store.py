"""Abstract interface for supplier storage."""

from abc import ABC, abstractmethod

from src.core.entities.inventory import Supplier


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def get(self, supplier_id: str) -> Supplier | None:
        pass

    @abstractmethod
    async def list_all(self) -> list[Supplier]:
        """List suppliers ordered by name."""
        pass

    @abstractmethod
    async def search_by_name(self, name: str) -> list[Supplier]:
        """Case-insensitive substring match."""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Supplier | None:
        """Case-insensitive exact match."""
        pass

    @abstractmethod
    async def exists(self, supplier_id: str) -> bool:
        pass

    @abstractmethod
    async def add(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def update(self, supplier: Supplier) -> Supplier:
        pass

    @abstractmethod
    async def delete(self, supplier_id: str) -> bool:
        pass
