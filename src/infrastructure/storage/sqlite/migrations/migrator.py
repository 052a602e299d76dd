"""
Versioned schema migrations for the inventory database.

Migration files live next to this module as ``vNNN_<name>.sql``. Each applied
file is recorded in ``schema_migrations`` with a short checksum; an edited
file that was already applied stops the run instead of silently diverging.

Usage:
    python -m src.infrastructure.storage.sqlite.migrations.migrator [--status | --verify]
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
FILENAME_PATTERN = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "app_users",
    "inventory_items",
    "schema_migrations",
    "stock_history",
    "suppliers",
)
APPEND_ONLY_TRIGGERS = ("trg_stock_history_no_update", "trg_stock_history_no_delete")


@dataclass
class MigrationInfo:
    """One migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = FILENAME_PATTERN.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=digest[:16])


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration scripts in ``directory`` ordered by version."""
    found: list[MigrationInfo] = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum; empty before the first migration."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied, key=int) if applied else None


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside before migrating."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


@dataclass
class SchemaMigrator:
    """Applies pending migrations to one database file."""

    db_path: Path
    migrations: list[MigrationInfo] = field(default_factory=discover_migrations)

    async def _apply(self, conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
        logger.info("applying_migration", version=migration.version, name=migration.name)
        started = time.perf_counter()
        try:
            await conn.executescript(migration.path.read_text(encoding="utf-8"))
            elapsed = int((time.perf_counter() - started) * 1000)
            await conn.execute(
                "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
                "VALUES (?, ?, ?, ?)",
                (migration.version, migration.name, migration.checksum, elapsed),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            logger.error("migration_failed", version=migration.version, error=str(e))
            return MigrationResult(
                migration.version,
                migration.name,
                success=False,
                execution_time_ms=int((time.perf_counter() - started) * 1000),
                error=str(e),
            )

        logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
        return MigrationResult(migration.version, migration.name, True, elapsed)

    async def migrate(self, backup: bool = True) -> list[MigrationResult]:
        """
        Apply every pending migration in order.

        Stops at the first failure or at an applied migration whose file has
        changed. When ``backup`` is set and the file already exists, a copy is
        taken first and restored if the run raises.
        """
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        backup_path = create_backup(self.db_path) if backup and self.db_path.exists() else None

        results: list[MigrationResult] = []
        try:
            async with aiosqlite.connect(self.db_path) as conn:
                await conn.execute("PRAGMA journal_mode=WAL")
                applied = await get_applied_migrations(conn)

                for migration in self.migrations:
                    recorded = applied.get(migration.version)
                    if recorded is not None:
                        if recorded != migration.checksum:
                            logger.error("migration_checksum_changed", version=migration.version)
                            break
                        continue

                    result = await self._apply(conn, migration)
                    results.append(result)
                    if not result.success:
                        break
        except Exception as e:
            logger.error("database_initialization_failed", error=str(e))
            if backup_path and backup_path.exists():
                restore_backup(self.db_path, backup_path)
            raise

        if backup_path and all(r.success for r in results):
            backup_path.unlink()

        logger.info("database_migrated", db_path=str(self.db_path), applied=len(results))
        return results

    async def status(self) -> dict:
        if not self.db_path.exists():
            return {
                "exists": False,
                "current_version": None,
                "applied_migrations": [],
                "pending_migrations": [m.version for m in self.migrations],
            }

        async with aiosqlite.connect(self.db_path) as conn:
            applied = await get_applied_migrations(conn)

        return {
            "exists": True,
            "current_version": max(applied, key=int) if applied else None,
            "applied_migrations": sorted(applied, key=int),
            "pending_migrations": [m.version for m in self.migrations if m.version not in applied],
        }

    async def verify(self) -> list[dict]:
        """Integrity, foreign key, table and audit-trigger checks."""
        async with aiosqlite.connect(self.db_path) as conn:
            fk_violations = await (await conn.execute("PRAGMA foreign_key_check")).fetchall()
            (integrity,) = await (await conn.execute("PRAGMA integrity_check")).fetchone()
            cursor = await conn.execute("SELECT type, name FROM sqlite_master")
            objects = {(kind, name) for kind, name in await cursor.fetchall()}

        missing_tables = [t for t in REQUIRED_TABLES if ("table", t) not in objects]
        missing_triggers = [t for t in APPEND_ONLY_TRIGGERS if ("trigger", t) not in objects]

        def check(name: str, ok: bool, **extra) -> dict:
            return {"check": name, "status": "PASS" if ok else "FAIL", **extra}

        return [
            check("foreign_keys", not fk_violations, violations=len(fk_violations)),
            check("integrity", integrity == "ok", result=integrity),
            check("required_tables", not missing_tables, missing=missing_tables),
            check("append_only_triggers", not missing_triggers, missing=missing_triggers),
        ]


def _migrator(db_path: Path | None) -> SchemaMigrator:
    return SchemaMigrator(db_path or get_settings().storage.db_path)


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """Apply pending migrations to ``db_path`` (default from settings)."""
    return await _migrator(db_path).migrate(backup=create_backup_before)


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    return await _migrator(db_path).status()


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    return await _migrator(db_path).verify()


def main() -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Inventory database migrations")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="Show applied and pending versions")
    mode.add_argument("--verify", action="store_true", help="Check schema integrity")
    parser.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    args = parser.parse_args()

    migrator = _migrator(args.db_path)

    if args.status:
        status = asyncio.run(migrator.status())
        print(f"Current version: {status['current_version'] or '-'}")
        print(f"Applied: {', '.join(status['applied_migrations']) or '-'}")
        print(f"Pending: {', '.join(status['pending_migrations']) or '-'}")
    elif args.verify:
        for result in asyncio.run(migrator.verify()):
            print(f"[{result['status']}] {result['check']}")
    else:
        for result in asyncio.run(migrator.migrate(backup=not args.no_backup)):
            outcome = "OK" if result.success else f"FAILED: {result.error}"
            print(f"v{result.version} {result.name} ({result.execution_time_ms}ms) {outcome}")


if __name__ == "__main__":
    main()
