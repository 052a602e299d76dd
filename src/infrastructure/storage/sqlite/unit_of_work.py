"""SQLite unit of work: one pooled connection, one explicit transaction."""

from contextlib import AbstractAsyncContextManager
from types import TracebackType

import aiosqlite

from src.core.interfaces.unit_of_work import IUnitOfWork
from src.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool
from src.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryItemStore
from src.infrastructure.storage.sqlite.stock_history_store import SQLiteStockHistoryStore
from src.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from src.infrastructure.storage.sqlite.user_store import SQLiteUserStore


class SQLiteUnitOfWork(IUnitOfWork):
    """
    Binds all stores to a single connection for the duration of a block.

    Write units open with BEGIN IMMEDIATE, so a read-modify-write of an item
    cannot interleave with another writer. Read-only units use a deferred
    BEGIN and see a consistent snapshot under WAL.
    """

    def __init__(self, pool: ConnectionPool | None = None, read_only: bool = False):
        self._pool = pool
        self._read_only = read_only
        self._tx: AbstractAsyncContextManager[aiosqlite.Connection] | None = None

    async def __aenter__(self) -> "SQLiteUnitOfWork":
        pool = self._pool or await get_pool()
        self._tx = pool.transaction(immediate=not self._read_only)
        conn = await self._tx.__aenter__()

        self.items = SQLiteInventoryItemStore(conn)
        self.suppliers = SQLiteSupplierStore(conn)
        self.history = SQLiteStockHistoryStore(conn)
        self.users = SQLiteUserStore(conn)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        tx, self._tx = self._tx, None
        await tx.__aexit__(exc_type, exc, tb)


def sqlite_uow_factory(pool: ConnectionPool | None = None):
    """Build a `UnitOfWorkFactory` bound to `pool` (global pool when None)."""

    def factory(read_only: bool = False) -> SQLiteUnitOfWork:
        return SQLiteUnitOfWork(pool=pool, read_only=read_only)

    return factory
