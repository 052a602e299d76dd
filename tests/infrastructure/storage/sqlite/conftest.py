"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiosqlite
import pytest

from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Temporary database with every migration applied."""
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
async def conn(initialized_db: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """Autocommit connection to the migrated database, for direct store tests."""
    async with aiosqlite.connect(initialized_db, isolation_level=None) as conn:
        await conn.execute("PRAGMA foreign_keys=ON")
        conn.row_factory = aiosqlite.Row
        yield conn


@pytest.fixture
async def seeded(conn: aiosqlite.Connection) -> aiosqlite.Connection:
    """Two suppliers and three items."""
    now = "2024-01-01T00:00:00.000000"
    await conn.executemany(
        "INSERT INTO suppliers (id, name, created_by, created_at) VALUES (?, ?, 'seed', ?)",
        [("s-1", "Acme", now), ("s-2", "Globex", now)],
    )
    await conn.executemany(
        """
        INSERT INTO inventory_items
            (id, name, quantity, price, supplier_id, minimum_quantity, created_by, created_at)
        VALUES (?, ?, ?, ?, ?, ?, 'seed', ?)
        """,
        [
            ("i-1", "Widget", 10, "5.00", "s-1", 10, now),
            ("i-2", "Bolt 10_mm", 2, "0.25", "s-1", 10, now),
            ("i-3", "Gear", 0, "12.50", "s-2", 5, now),
        ],
    )
    return conn
