"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from siteledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteLedgerStore,
    SQLiteProjectStore,
    SQLiteWarehouseStore,
)
from siteledger.infrastructure.storage.sqlite.migrations import migrate


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def migrated_db(temp_db_path: Path) -> Path:
    """A database file with the full schema applied."""
    await migrate(temp_db_path)
    return temp_db_path


@pytest.fixture
async def pool(migrated_db: Path) -> AsyncGenerator[ConnectionPool, None]:
    """An initialized pool over the migrated database."""
    pool = ConnectionPool(migrated_db, pool_size=2)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def warehouse_store(pool: ConnectionPool) -> SQLiteWarehouseStore:
    return SQLiteWarehouseStore(pool)


@pytest.fixture
def project_store(pool: ConnectionPool) -> SQLiteProjectStore:
    return SQLiteProjectStore(pool)


@pytest.fixture
def ledger_store(pool: ConnectionPool) -> SQLiteLedgerStore:
    return SQLiteLedgerStore(pool)


@pytest.fixture
async def seeded(warehouse_store, project_store, sample_product, sample_project):
    """Catalog product CEM-40 and project PRJ-001, both stored."""
    product = await warehouse_store.create_product(sample_product)
    project = await project_store.create_project(sample_project)
    return product, project
