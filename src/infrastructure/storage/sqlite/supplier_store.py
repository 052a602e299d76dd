"""SQLite implementation of supplier storage."""

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import Supplier
from src.core.exceptions import DatabaseError, DuplicateResourceError
from src.core.interfaces.supplier_store import ISupplierStore
from src.infrastructure.storage.sqlite._codec import (
    from_db_timestamp,
    is_unique_violation,
    like_pattern,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteSupplierStore(ISupplierStore):
    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get(self, supplier_id: str) -> Supplier | None:
        cursor = await self._conn.execute(
            "SELECT * FROM suppliers WHERE id = ?", (supplier_id,)
        )
        row = await cursor.fetchone()
        return self._row_to_supplier(row) if row else None

    async def list_all(self) -> list[Supplier]:
        cursor = await self._conn.execute(
            "SELECT * FROM suppliers ORDER BY name COLLATE NOCASE"
        )
        return [self._row_to_supplier(row) for row in await cursor.fetchall()]

    async def search_by_name(self, name: str) -> list[Supplier]:
        cursor = await self._conn.execute(
            "SELECT * FROM suppliers WHERE name LIKE ? ESCAPE '\\' "
            "ORDER BY name COLLATE NOCASE",
            (like_pattern(name),),
        )
        return [self._row_to_supplier(row) for row in await cursor.fetchall()]

    async def get_by_name(self, name: str) -> Supplier | None:
        cursor = await self._conn.execute(
            "SELECT * FROM suppliers WHERE name = ? COLLATE NOCASE", (name,)
        )
        row = await cursor.fetchone()
        return self._row_to_supplier(row) if row else None

    async def exists(self, supplier_id: str) -> bool:
        cursor = await self._conn.execute(
            "SELECT 1 FROM suppliers WHERE id = ?", (supplier_id,)
        )
        return await cursor.fetchone() is not None

    async def add(self, supplier: Supplier) -> Supplier:
        try:
            await self._conn.execute(
                """
                INSERT INTO suppliers (
                    id, name, contact_name, phone, email, created_by, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    supplier.id,
                    supplier.name,
                    supplier.contact_name,
                    supplier.phone,
                    supplier.email,
                    supplier.created_by,
                    to_db_timestamp(supplier.created_at),
                ),
            )
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, supplier) from e
        return supplier

    async def update(self, supplier: Supplier) -> Supplier:
        try:
            await self._conn.execute(
                """
                UPDATE suppliers SET name = ?, contact_name = ?, phone = ?, email = ?
                WHERE id = ?
                """,
                (
                    supplier.name,
                    supplier.contact_name,
                    supplier.phone,
                    supplier.email,
                    supplier.id,
                ),
            )
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, supplier) from e
        return supplier

    async def delete(self, supplier_id: str) -> bool:
        cursor = await self._conn.execute(
            "DELETE FROM suppliers WHERE id = ?", (supplier_id,)
        )
        return cursor.rowcount > 0

    @staticmethod
    def _integrity_error(error: Exception, supplier: Supplier) -> Exception:
        if is_unique_violation(error):
            return DuplicateResourceError("Supplier", supplier.name)
        return DatabaseError("supplier_write", str(error))

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        return Supplier(
            id=row["id"],
            name=row["name"],
            contact_name=row["contact_name"],
            phone=row["phone"],
            email=row["email"],
            created_by=row["created_by"],
            created_at=from_db_timestamp(row["created_at"]),
        )
