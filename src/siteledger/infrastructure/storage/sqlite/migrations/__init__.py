"""Database migrations."""

from siteledger.infrastructure.storage.sqlite.migrations.migrator import (
    Migration,
    load_migrations,
    migrate,
    migration_status,
    run_migrations,
    verify_ledger_schema,
)

__all__ = [
    "Migration",
    "load_migrations",
    "migrate",
    "migration_status",
    "run_migrations",
    "verify_ledger_schema",
]
