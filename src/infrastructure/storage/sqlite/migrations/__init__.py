"""Versioned SQL migrations for the inventory schema."""

from src.infrastructure.storage.sqlite.migrations.migrator import (
    SchemaMigrator,
    get_migration_status,
    initialize_database,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "SchemaMigrator",
    "get_migration_status",
    "initialize_database",
    "run_migrations",
    "verify_schema_integrity",
]
