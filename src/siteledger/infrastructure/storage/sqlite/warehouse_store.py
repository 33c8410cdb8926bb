"""SQLite implementation of main warehouse stock."""

from datetime import UTC, datetime

import aiosqlite

from siteledger.config import get_logger
from siteledger.core.entities.product import Product
from siteledger.core.exceptions import (
    DuplicateProductError,
    InsufficientMainStockError,
    ProductNotFoundError,
)
from siteledger.core.interfaces.warehouse_store import IWarehouseStore
from siteledger.core.services.reconciliation import QUANTITY_DECIMALS
from siteledger.infrastructure.storage.sqlite.connection import ConnectionPool
from siteledger.infrastructure.storage.sqlite.timestamps import (
    from_storage_time,
    to_storage_time,
)

logger = get_logger(__name__)


class SQLiteWarehouseStore(IWarehouseStore):
    """Warehouse catalog and stock levels in the `products` table."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def create_product(self, product: Product) -> Product:
        now = datetime.now(UTC)
        try:
            async with self._pool.transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO products (
                        product_id, name, category, quantity, unit, description,
                        supplier, reorder_point, location, unit_cost, sale_price,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product.product_id,
                        product.name,
                        product.category,
                        product.quantity,
                        product.unit,
                        product.description,
                        product.supplier,
                        product.reorder_point,
                        product.location,
                        product.unit_cost,
                        product.sale_price,
                        to_storage_time(now),
                        to_storage_time(now),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            raise DuplicateProductError(product.product_id) from e

        logger.info("product_created", product_id=product.product_id, quantity=product.quantity)
        return product.model_copy(
            update={"id": cursor.lastrowid, "created_at": now, "updated_at": now}
        )

    async def get_product(self, product_id: str) -> Product | None:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM products WHERE product_id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_product(row)

    async def get_products(self, product_ids: list[str]) -> dict[str, Product]:
        if not product_ids:
            return {}
        unique_ids = list(dict.fromkeys(product_ids))
        placeholders = ",".join("?" * len(unique_ids))
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM products WHERE product_id IN ({placeholders})",
                unique_ids,
            )
            rows = await cursor.fetchall()
            return {row["product_id"]: self._row_to_product(row) for row in rows}

    async def list_products(self, limit: int = 100, offset: int = 0) -> list[Product]:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM products
                ORDER BY category, name
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_product(row) for row in rows]

    async def get_quantity(self, product_id: str) -> float:
        async with self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT quantity FROM products WHERE product_id = ?", (product_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise ProductNotFoundError(product_id)
            return float(row["quantity"])

    async def adjust_quantity(self, product_id: str, delta: float) -> float:
        """
        Apply a stock delta with a conditional update.

        The WHERE clause refuses any change that would take the level below
        zero, so two concurrent checkouts can never both draw the last units.
        Levels are rounded to QUANTITY_DECIMALS, matching the ledger fold.
        """
        async with self._pool.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE products
                SET quantity = MAX(ROUND(quantity + :delta, :places), 0), updated_at = :now
                WHERE product_id = :product_id AND ROUND(quantity + :delta, :places) >= 0
                """,
                {
                    "delta": delta,
                    "places": QUANTITY_DECIMALS,
                    "now": to_storage_time(datetime.now(UTC)),
                    "product_id": product_id,
                },
            )
            updated = cursor.rowcount

            cursor = await conn.execute(
                "SELECT quantity FROM products WHERE product_id = ?", (product_id,)
            )
            row = await cursor.fetchone()

        if row is None:
            raise ProductNotFoundError(product_id)
        quantity = float(row["quantity"])
        if not updated:
            raise InsufficientMainStockError(product_id, -delta, quantity)

        logger.info(
            "warehouse_quantity_adjusted",
            product_id=product_id,
            delta=delta,
            quantity=quantity,
        )
        return quantity

    @staticmethod
    def _row_to_product(row: aiosqlite.Row) -> Product:
        """Convert a database row to a Product entity."""
        return Product(
            id=row["id"],
            product_id=row["product_id"],
            name=row["name"],
            category=row["category"],
            quantity=float(row["quantity"]),
            unit=row["unit"],
            description=row["description"],
            supplier=row["supplier"],
            reorder_point=float(row["reorder_point"]),
            location=row["location"],
            unit_cost=float(row["unit_cost"]),
            sale_price=float(row["sale_price"]),
            created_at=from_storage_time(row["created_at"]),
            updated_at=from_storage_time(row["updated_at"]),
        )
