"""SQLite implementation of the append-only project inventory ledger."""

import aiosqlite

from siteledger.config import get_logger, get_settings
from siteledger.core.entities.ledger import ActionBy, LedgerRecord, TransferAction
from siteledger.core.interfaces.ledger_store import ILedgerStore
from siteledger.infrastructure.storage.sqlite.connection import ConnectionPool
from siteledger.infrastructure.storage.sqlite.timestamps import (
    from_storage_time,
    to_storage_time,
)

logger = get_logger(__name__)

_COLUMNS = """
    id, record_id, project_id, product_id, action, quantity, unit, supplier,
    sale_price, total_value, project_reorder_point, action_by_user_id,
    action_by_name, action_by_role, notes, created_at
"""


class SQLiteLedgerStore(ILedgerStore):
    """Ledger records in the `project_inventory` table. Rows are never updated."""

    def __init__(self, pool: ConnectionPool, record_id_prefix: str | None = None):
        self._pool = pool
        self._prefix = record_id_prefix or get_settings().inventory.record_id_prefix

    async def append(self, record: LedgerRecord) -> LedgerRecord:
        """Insert a record and stamp its display ID from the row ID."""
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO project_inventory (
                    project_id, product_id, action, quantity, unit, supplier,
                    sale_price, total_value, project_reorder_point,
                    action_by_user_id, action_by_name, action_by_role,
                    notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.project_id,
                    record.product_id,
                    record.action.value,
                    record.quantity,
                    record.unit,
                    record.supplier,
                    record.sale_price,
                    record.total_value,
                    record.project_reorder_point,
                    record.action_by.user_id,
                    record.action_by.name,
                    record.action_by.role,
                    record.notes,
                    to_storage_time(record.created_at),
                ),
            )
            row_id = cursor.lastrowid
            record_id = f"{self._prefix}-{row_id:04d}"
            await conn.execute(
                "UPDATE project_inventory SET record_id = ? WHERE id = ?",
                (record_id, row_id),
            )

        logger.info(
            "ledger_record_appended",
            record_id=record_id,
            project_id=record.project_id,
            product_id=record.product_id,
            action=record.action.value,
        )
        return record.model_copy(update={"id": row_id, "record_id": record_id})

    async def list_for_project(
        self, project_id: str, product_id: str | None = None
    ) -> list[LedgerRecord]:
        async with self._pool.acquire() as conn:
            if product_id is None:
                cursor = await conn.execute(
                    f"""
                    SELECT {_COLUMNS} FROM project_inventory
                    WHERE project_id = ?
                    ORDER BY created_at ASC, id ASC
                    """,
                    (project_id,),
                )
            else:
                cursor = await conn.execute(
                    f"""
                    SELECT {_COLUMNS} FROM project_inventory
                    WHERE project_id = ? AND product_id = ?
                    ORDER BY created_at ASC, id ASC
                    """,
                    (project_id, product_id),
                )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_recent(self, project_id: str, limit: int = 10) -> list[LedgerRecord]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"""
                SELECT {_COLUMNS} FROM project_inventory
                WHERE project_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (project_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def list_all(self, limit: int = 100, offset: int = 0) -> list[LedgerRecord]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"""
                SELECT {_COLUMNS} FROM project_inventory
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> LedgerRecord:
        """Convert a database row to a LedgerRecord entity."""
        reorder_point = row["project_reorder_point"]
        return LedgerRecord(
            id=row["id"],
            record_id=row["record_id"],
            project_id=row["project_id"],
            product_id=row["product_id"],
            action=TransferAction(row["action"]),
            quantity=float(row["quantity"]),
            unit=row["unit"],
            supplier=row["supplier"],
            sale_price=float(row["sale_price"]),
            total_value=float(row["total_value"]),
            project_reorder_point=float(reorder_point) if reorder_point is not None else None,
            action_by=ActionBy(
                user_id=row["action_by_user_id"],
                name=row["action_by_name"],
                role=row["action_by_role"],
            ),
            notes=row["notes"],
            created_at=from_storage_time(row["created_at"]),
        )
