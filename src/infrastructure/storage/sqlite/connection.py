"""
aiosqlite connection pool.

Pooled connections are opened in autocommit mode (``isolation_level=None``):
the pool never relies on the sqlite3 module's implicit transactions. Units of
work start their own with ``BEGIN IMMEDIATE`` (writers) or ``BEGIN DEFERRED``
(readers).
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

CONNECTION_PRAGMAS = (
    ("journal_mode", "WAL"),
    ("synchronous", "NORMAL"),
    ("foreign_keys", "ON"),
)


class ConnectionPool:
    """Fixed set of connections to one database file, handed out in FIFO order."""

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._connections: list[aiosqlite.Connection] = []
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return bool(self._connections)

    @property
    def available(self) -> int:
        """Connections currently idle in the pool."""
        return self._idle.qsize()

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path, isolation_level=None)
        for pragma, value in CONNECTION_PRAGMAS:
            await conn.execute(f"PRAGMA {pragma}={value}")
        await conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout)}")
        conn.row_factory = aiosqlite.Row
        return conn

    async def initialize(self) -> None:
        async with self._lock:
            if self._connections:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._connections.append(conn)
                self._idle.put_nowait(conn)

        logger.info("connection_pool_initialized", db_path=str(self.db_path), size=self.pool_size)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection, waiting while all of them are in use."""
        if not self._connections:
            await self.initialize()

        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self, immediate: bool = True) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside an explicit transaction.

        ``immediate`` takes the database write lock before the first
        statement. Commits on normal exit and rolls back on any exception,
        including cancellation.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN DEFERRED")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue()
        logger.info("connection_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Process-wide pool over the configured database."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
