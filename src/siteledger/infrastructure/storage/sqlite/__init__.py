"""SQLite storage implementations."""

from siteledger.infrastructure.storage.sqlite.connection import ConnectionPool
from siteledger.infrastructure.storage.sqlite.ledger_store import SQLiteLedgerStore
from siteledger.infrastructure.storage.sqlite.project_store import SQLiteProjectStore
from siteledger.infrastructure.storage.sqlite.warehouse_store import SQLiteWarehouseStore

__all__ = [
    "ConnectionPool",
    "SQLiteLedgerStore",
    "SQLiteProjectStore",
    "SQLiteWarehouseStore",
]
