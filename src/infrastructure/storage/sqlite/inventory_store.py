"""SQLite implementation of inventory item storage."""

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import InventoryItem
from src.core.entities.pagination import Page
from src.core.exceptions import DatabaseError, DuplicateResourceError
from src.core.interfaces.inventory_store import IInventoryItemStore
from src.infrastructure.storage.sqlite._codec import (
    from_db_decimal,
    from_db_timestamp,
    is_unique_violation,
    like_pattern,
    to_db_decimal,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteInventoryItemStore(IInventoryItemStore):
    """Inventory items on a connection owned by the current unit of work."""

    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def get(self, item_id: str) -> InventoryItem | None:
        cursor = await self._conn.execute(
            "SELECT * FROM inventory_items WHERE id = ?", (item_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_item(row)

    async def list_all(self, supplier_id: str | None = None) -> list[InventoryItem]:
        if supplier_id:
            cursor = await self._conn.execute(
                "SELECT * FROM inventory_items WHERE supplier_id = ? "
                "ORDER BY name COLLATE NOCASE",
                (supplier_id,),
            )
        else:
            cursor = await self._conn.execute(
                "SELECT * FROM inventory_items ORDER BY name COLLATE NOCASE"
            )
        rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    async def count(self) -> int:
        cursor = await self._conn.execute("SELECT COUNT(*) FROM inventory_items")
        row = await cursor.fetchone()
        return row[0]

    async def exists_by_name(self, name: str, exclude_id: str | None = None) -> bool:
        cursor = await self._conn.execute(
            """
            SELECT 1 FROM inventory_items
            WHERE name = ? COLLATE NOCASE AND (? IS NULL OR id <> ?)
            LIMIT 1
            """,
            (name, exclude_id, exclude_id),
        )
        return await cursor.fetchone() is not None

    async def search_by_name(
        self, name: str, page: int = 0, size: int = 50
    ) -> Page[InventoryItem]:
        pattern = like_pattern(name)
        cursor = await self._conn.execute(
            "SELECT COUNT(*) FROM inventory_items WHERE name LIKE ? ESCAPE '\\'",
            (pattern,),
        )
        total = (await cursor.fetchone())[0]

        cursor = await self._conn.execute(
            """
            SELECT * FROM inventory_items
            WHERE name LIKE ? ESCAPE '\\'
            ORDER BY CAST(price AS REAL) ASC, name COLLATE NOCASE
            LIMIT ? OFFSET ?
            """,
            (pattern, size, page * size),
        )
        rows = await cursor.fetchall()
        return Page[InventoryItem](
            items=[self._row_to_item(row) for row in rows],
            page=page,
            size=size,
            total=total,
        )

    async def add(self, item: InventoryItem) -> InventoryItem:
        try:
            await self._conn.execute(
                """
                INSERT INTO inventory_items (
                    id, name, quantity, price, supplier_id,
                    minimum_quantity, created_by, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.id,
                    item.name,
                    item.quantity,
                    to_db_decimal(item.price),
                    item.supplier_id,
                    item.minimum_quantity,
                    item.created_by,
                    to_db_timestamp(item.created_at),
                ),
            )
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, item) from e
        logger.debug("inventory_item_inserted", item_id=item.id)
        return item

    async def update(self, item: InventoryItem) -> InventoryItem:
        try:
            await self._conn.execute(
                """
                UPDATE inventory_items SET
                    name = ?,
                    quantity = ?,
                    price = ?,
                    supplier_id = ?,
                    minimum_quantity = ?
                WHERE id = ?
                """,
                (
                    item.name,
                    item.quantity,
                    to_db_decimal(item.price),
                    item.supplier_id,
                    item.minimum_quantity,
                    item.id,
                ),
            )
        except aiosqlite.IntegrityError as e:
            raise self._integrity_error(e, item) from e
        logger.debug("inventory_item_row_updated", item_id=item.id)
        return item

    async def delete(self, item_id: str) -> bool:
        cursor = await self._conn.execute(
            "DELETE FROM inventory_items WHERE id = ?", (item_id,)
        )
        return cursor.rowcount > 0

    async def find_below_minimum_stock(
        self, supplier_id: str | None = None
    ) -> list[InventoryItem]:
        cursor = await self._conn.execute(
            """
            SELECT * FROM inventory_items
            WHERE quantity < minimum_quantity
              AND (? IS NULL OR supplier_id = ?)
            ORDER BY quantity ASC, name COLLATE NOCASE
            """,
            (supplier_id, supplier_id),
        )
        rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    async def count_below_minimum_stock(self, supplier_id: str | None = None) -> int:
        cursor = await self._conn.execute(
            """
            SELECT COUNT(*) FROM inventory_items
            WHERE quantity < minimum_quantity
              AND (? IS NULL OR supplier_id = ?)
            """,
            (supplier_id, supplier_id),
        )
        return (await cursor.fetchone())[0]

    async def exists_active_stock_for_supplier(
        self, supplier_id: str, min_quantity: int = 0
    ) -> bool:
        cursor = await self._conn.execute(
            "SELECT 1 FROM inventory_items WHERE supplier_id = ? AND quantity > ? LIMIT 1",
            (supplier_id, min_quantity),
        )
        return await cursor.fetchone() is not None

    async def total_stock_by_supplier(self) -> list[tuple[str, str, int]]:
        cursor = await self._conn.execute(
            """
            SELECT s.id, s.name, SUM(i.quantity) AS total_quantity
            FROM inventory_items i
            JOIN suppliers s ON s.id = i.supplier_id
            GROUP BY s.id, s.name
            ORDER BY total_quantity DESC, s.name COLLATE NOCASE
            """
        )
        rows = await cursor.fetchall()
        return [(row[0], row[1], row[2] or 0) for row in rows]

    async def update_count_by_item(
        self, supplier_id: str | None = None
    ) -> list[tuple[str, str, int]]:
        cursor = await self._conn.execute(
            """
            SELECT i.id, i.name, COUNT(h.id) AS update_count
            FROM inventory_items i
            JOIN stock_history h ON h.item_id = i.id
            WHERE (? IS NULL OR i.supplier_id = ?)
            GROUP BY i.id, i.name
            ORDER BY update_count DESC, i.name COLLATE NOCASE
            """,
            (supplier_id, supplier_id),
        )
        rows = await cursor.fetchall()
        return [(row[0], row[1], row[2]) for row in rows]

    @staticmethod
    def _integrity_error(error: Exception, item: InventoryItem) -> Exception:
        if is_unique_violation(error):
            return DuplicateResourceError("Inventory item", item.name)
        return DatabaseError("inventory_item_write", str(error))

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> InventoryItem:
        return InventoryItem(
            id=row["id"],
            name=row["name"],
            quantity=row["quantity"],
            price=from_db_decimal(row["price"]),
            supplier_id=row["supplier_id"],
            minimum_quantity=row["minimum_quantity"],
            created_by=row["created_by"],
            created_at=from_db_timestamp(row["created_at"]),
        )
