"""SQLite implementation of the append-only stock history."""

from datetime import datetime

import aiosqlite

from src.config import get_logger
from src.core.entities.analytics import MonthlyStockMovement, PricePoint, StockUpdateRow
from src.core.entities.pagination import Page
from src.core.entities.stock_history import StockChangeReason, StockEvent, StockHistory
from src.core.exceptions import DatabaseError
from src.core.interfaces.stock_history_store import IStockHistoryStore
from src.infrastructure.storage.sqlite._codec import (
    from_db_decimal,
    from_db_timestamp,
    like_pattern,
    to_db_decimal,
    to_db_timestamp,
)

logger = get_logger(__name__)

# rowid breaks ties between rows written in the same microsecond
NEWEST_FIRST = "ORDER BY h.created_at DESC, h.rowid DESC"


class SQLiteStockHistoryStore(IStockHistoryStore):
    def __init__(self, conn: aiosqlite.Connection):
        self._conn = conn

    async def append(self, entry: StockHistory) -> StockHistory:
        try:
            await self._conn.execute(
                """
                INSERT INTO stock_history (
                    id, item_id, supplier_id, quantity_change, reason,
                    created_by, price_at_change, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.item_id,
                    entry.supplier_id,
                    entry.change,
                    entry.reason.value,
                    entry.created_by,
                    to_db_decimal(entry.price_at_change),
                    to_db_timestamp(entry.timestamp),
                ),
            )
        except aiosqlite.IntegrityError as e:
            raise DatabaseError("stock_history_append", str(e)) from e
        return entry

    async def list_all(self) -> list[StockHistory]:
        return await self._select("", ())

    async def list_by_item(self, item_id: str) -> list[StockHistory]:
        return await self._select("WHERE h.item_id = ?", (item_id,))

    async def list_by_reason(self, reason: StockChangeReason) -> list[StockHistory]:
        return await self._select("WHERE h.reason = ?", (reason.value,))

    async def find_filtered(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        item_name: str | None = None,
        supplier_id: str | None = None,
        page: int = 0,
        size: int = 50,
    ) -> Page[StockHistory]:
        clauses: list[str] = []
        params: list = []
        if start is not None:
            clauses.append("h.created_at >= ?")
            params.append(to_db_timestamp(start))
        if end is not None:
            clauses.append("h.created_at <= ?")
            params.append(to_db_timestamp(end))
        if item_name:
            clauses.append("i.name LIKE ? ESCAPE '\\'")
            params.append(like_pattern(item_name))
        if supplier_id:
            clauses.append("h.supplier_id = ?")
            params.append(supplier_id)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        cursor = await self._conn.execute(
            f"""
            SELECT COUNT(*) FROM stock_history h
            LEFT JOIN inventory_items i ON i.id = h.item_id
            {where}
            """,
            params,
        )
        total = (await cursor.fetchone())[0]

        items = await self._select(
            where, params, join_items=True, limit=size, offset=page * size
        )
        return Page[StockHistory](items=items, page=page, size=size, total=total)

    async def price_trend(
        self, item_id: str, start: datetime, end: datetime
    ) -> list[PricePoint]:
        cursor = await self._conn.execute(
            """
            SELECT created_at, price_at_change FROM stock_history
            WHERE item_id = ?
              AND price_at_change IS NOT NULL
              AND created_at >= ? AND created_at <= ?
            ORDER BY created_at ASC, CAST(price_at_change AS REAL) ASC
            """,
            (item_id, to_db_timestamp(start), to_db_timestamp(end)),
        )
        return [
            PricePoint(
                timestamp=from_db_timestamp(row["created_at"]),
                price=from_db_decimal(row["price_at_change"]),
            )
            for row in await cursor.fetchall()
        ]

    async def events_until(
        self,
        end: datetime,
        supplier_id: str | None = None,
        include_price_changes: bool = False,
    ) -> list[StockEvent]:
        cursor = await self._conn.execute(
            """
            SELECT item_id, quantity_change, reason, price_at_change, created_at
            FROM stock_history
            WHERE created_at <= ?
              AND (quantity_change <> 0 OR ?)
              AND (? IS NULL OR supplier_id = ?)
            ORDER BY created_at ASC, rowid ASC
            """,
            (to_db_timestamp(end), int(include_price_changes), supplier_id, supplier_id),
        )
        return [
            StockEvent(
                item_id=row["item_id"],
                change=row["quantity_change"],
                reason=StockChangeReason(row["reason"]),
                price_at_change=from_db_decimal(row["price_at_change"]),
                timestamp=from_db_timestamp(row["created_at"]),
            )
            for row in await cursor.fetchall()
        ]

    async def monthly_movement(
        self, start: datetime, end: datetime, supplier_id: str | None = None
    ) -> list[MonthlyStockMovement]:
        cursor = await self._conn.execute(
            """
            SELECT
                substr(created_at, 1, 7) AS month,
                SUM(CASE WHEN quantity_change > 0 THEN quantity_change ELSE 0 END) AS stock_in,
                SUM(CASE WHEN quantity_change < 0 THEN -quantity_change ELSE 0 END) AS stock_out
            FROM stock_history
            WHERE created_at >= ? AND created_at <= ?
              AND (? IS NULL OR supplier_id = ?)
            GROUP BY month
            ORDER BY month
            """,
            (to_db_timestamp(start), to_db_timestamp(end), supplier_id, supplier_id),
        )
        return [
            MonthlyStockMovement(
                month=row["month"],
                stock_in=row["stock_in"] or 0,
                stock_out=row["stock_out"] or 0,
            )
            for row in await cursor.fetchall()
        ]

    async def search_updates(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        item_name: str | None = None,
        supplier_id: str | None = None,
        created_by: str | None = None,
        min_change: int | None = None,
        max_change: int | None = None,
    ) -> list[StockUpdateRow]:
        clauses: list[str] = []
        params: list = []
        if start is not None:
            clauses.append("h.created_at >= ?")
            params.append(to_db_timestamp(start))
        if end is not None:
            clauses.append("h.created_at <= ?")
            params.append(to_db_timestamp(end))
        if item_name:
            clauses.append("i.name LIKE ? ESCAPE '\\'")
            params.append(like_pattern(item_name))
        if supplier_id:
            clauses.append("h.supplier_id = ?")
            params.append(supplier_id)
        if created_by:
            clauses.append("lower(h.created_by) = lower(?)")
            params.append(created_by)
        if min_change is not None:
            clauses.append("h.quantity_change >= ?")
            params.append(min_change)
        if max_change is not None:
            clauses.append("h.quantity_change <= ?")
            params.append(max_change)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        cursor = await self._conn.execute(
            f"""
            SELECT h.id, h.item_id, i.name AS item_name, h.supplier_id,
                   s.name AS supplier_name, h.quantity_change, h.reason,
                   h.created_by, h.created_at
            FROM stock_history h
            LEFT JOIN inventory_items i ON i.id = h.item_id
            LEFT JOIN suppliers s ON s.id = h.supplier_id
            {where}
            {NEWEST_FIRST}
            """,
            params,
        )
        return [
            StockUpdateRow(
                history_id=row["id"],
                item_id=row["item_id"],
                item_name=row["item_name"],
                supplier_id=row["supplier_id"],
                supplier_name=row["supplier_name"],
                change=row["quantity_change"],
                reason=StockChangeReason(row["reason"]),
                created_by=row["created_by"],
                timestamp=from_db_timestamp(row["created_at"]),
            )
            for row in await cursor.fetchall()
        ]

    async def _select(
        self,
        where: str,
        params,
        join_items: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[StockHistory]:
        join = "LEFT JOIN inventory_items i ON i.id = h.item_id" if join_items else ""
        sql = f"SELECT h.* FROM stock_history h {join} {where} {NEWEST_FIRST}"
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params = [*params, limit, offset]
        cursor = await self._conn.execute(sql, params)
        return [self._row_to_history(row) for row in await cursor.fetchall()]

    @staticmethod
    def _row_to_history(row: aiosqlite.Row) -> StockHistory:
        return StockHistory(
            id=row["id"],
            item_id=row["item_id"],
            supplier_id=row["supplier_id"],
            change=row["quantity_change"],
            reason=StockChangeReason(row["reason"]),
            created_by=row["created_by"],
            price_at_change=from_db_decimal(row["price_at_change"]),
            timestamp=from_db_timestamp(row["created_at"]),
        )
