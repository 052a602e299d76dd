"""Transaction boundary shared by all repositories of one operation."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from types import TracebackType

from src.core.interfaces.inventory_store import IInventoryItemStore
from src.core.interfaces.stock_history_store import IStockHistoryStore
from src.core.interfaces.supplier_store import ISupplierStore
from src.core.interfaces.user_store import IUserStore


class IUnitOfWork(ABC):
    """
    Async context manager holding one write transaction.

    Usage:
        async with uow:
            item = await uow.items.get(item_id)
            ...
            await uow.history.append(entry)

    Commits on clean exit, rolls back when the block raises. A read-only
    unit opens a deferred transaction and never takes the write lock.
    """

    items: IInventoryItemStore
    suppliers: ISupplierStore
    history: IStockHistoryStore
    users: IUserStore

    @abstractmethod
    async def __aenter__(self) -> "IUnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        pass


# factory(read_only: bool = False) -> IUnitOfWork
UnitOfWorkFactory = Callable[..., IUnitOfWork]
