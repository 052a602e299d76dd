"""Storage backends. SQLite is the only one."""

from src.infrastructure.storage.sqlite import (
    SQLiteUnitOfWork,
    close_pool,
    get_pool,
    sqlite_uow_factory,
)

__all__ = ["SQLiteUnitOfWork", "sqlite_uow_factory", "get_pool", "close_pool"]
