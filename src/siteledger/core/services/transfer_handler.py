"""
Transfer command handler.

Validates one stock movement between the main warehouse and a project and
appends it to the ledger. Validation failures come back inside a
TransferResult so the caller can show them next to the offending field;
only persistence failures are raised.
"""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from siteledger.config import get_logger, get_settings
from siteledger.core.entities.ledger import (
    ActionBy,
    CurrentInventoryItem,
    LedgerRecord,
    TransferAction,
)
from siteledger.core.entities.notification import (
    LowStockNotification,
    TransferRecordedNotification,
)
from siteledger.core.exceptions import (
    InsufficientMainStockError,
    InsufficientProjectStockError,
    InvalidQuantityError,
    PersistenceError,
    ProductNotFoundError,
    ProjectNotFoundError,
    SiteLedgerError,
    ValidationError,
)
from siteledger.core.interfaces.ledger_store import ILedgerStore
from siteledger.core.interfaces.project_store import IProjectStore
from siteledger.core.interfaces.warehouse_store import IWarehouseStore
from siteledger.core.services.notification_dispatcher import NotificationDispatcher
from siteledger.core.services.reconciliation import reconcile_one, round_quantity

logger = get_logger(__name__)


@dataclass
class TransferCommand:
    """A requested movement. `quantity` is validated by the handler, not here."""

    project_id: str
    product_id: str
    quantity: Any
    action: TransferAction
    action_by: ActionBy
    unit: str | None = None
    notes: str | None = None
    project_reorder_point: float | None = None


@dataclass
class TransferResult:
    """Outcome of a transfer: the new record and snapshot, or the rejection."""

    record: LedgerRecord | None = None
    item: CurrentInventoryItem | None = None
    error: SiteLedgerError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _is_non_negative_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def _warehouse_delta(action: TransferAction, quantity: float) -> float:
    """Checkouts leave the warehouse, returns come back, consumption stays on site."""
    if action is TransferAction.CHECKED_OUT:
        return -quantity
    if action is TransferAction.RETURNED:
        return quantity
    return 0.0


class TransferHandler:
    """Records checkouts, returns and adjustments against the project ledger."""

    def __init__(
        self,
        ledger_store: ILedgerStore,
        warehouse_store: IWarehouseStore,
        project_store: IProjectStore,
        dispatcher: NotificationDispatcher | None = None,
    ) -> None:
        self._ledger = ledger_store
        self._warehouse = warehouse_store
        self._projects = project_store
        self._dispatcher = dispatcher or NotificationDispatcher()

    async def record_transfer(self, command: TransferCommand) -> TransferResult:
        """
        Validate and record a single movement.

        Checks run in order and the first failure wins:
        1. quantity is a positive number
        2. project and product exist
        3. checkout: the warehouse holds enough (fresh read)
           return/adjust: the project holds enough (reconciled ledger)

        A reorder point left out of the command is carried forward from the
        project's ledger, so omitting it never clears an existing threshold.
        """
        logger.info(
            "transfer_started",
            project_id=command.project_id,
            product_id=command.product_id,
            action=command.action.value,
            quantity=command.quantity,
            reorder_point=command.project_reorder_point,
        )

        if not _is_positive_number(command.quantity) or round_quantity(command.quantity) == 0:
            return self._reject(command, InvalidQuantityError(command.quantity))
        quantity = round_quantity(float(command.quantity))

        reorder_point = command.project_reorder_point
        if reorder_point is not None and not _is_non_negative_number(reorder_point):
            return self._reject(
                command,
                ValidationError(
                    field="project_reorder_point",
                    message="Reorder point cannot be negative",
                    value=reorder_point,
                ),
            )

        project = await self._projects.get_project(command.project_id)
        if project is None:
            return self._reject(command, ProjectNotFoundError(command.project_id))

        product = await self._warehouse.get_product(command.product_id)
        if product is None:
            return self._reject(command, ProductNotFoundError(command.product_id))

        history = await self._ledger.list_for_project(command.project_id, command.product_id)
        current = reconcile_one(history, command.project_id, command.product_id)
        project_quantity = current.current_quantity if current else 0.0

        if command.action is TransferAction.CHECKED_OUT:
            available = await self._warehouse.get_quantity(command.product_id)
            if round_quantity(available) < quantity:
                return self._reject(
                    command,
                    InsufficientMainStockError(command.product_id, quantity, available),
                )
        elif project_quantity < quantity:
            return self._reject(
                command,
                InsufficientProjectStockError(
                    command.project_id, command.product_id, quantity, project_quantity
                ),
            )

        if reorder_point is None and current is not None:
            reorder_point = current.project_reorder_point

        sale_price = product.sale_price
        total_value = (
            0.0
            if command.action is TransferAction.ADJUSTED
            else round_quantity(quantity * sale_price)
        )
        record = LedgerRecord(
            project_id=command.project_id,
            product_id=command.product_id,
            action=command.action,
            quantity=quantity,
            unit=command.unit or product.unit,
            supplier=product.supplier or get_settings().inventory.default_supplier,
            sale_price=sale_price,
            total_value=total_value,
            project_reorder_point=reorder_point,
            action_by=command.action_by,
            notes=command.notes,
            created_at=datetime.now(UTC),
        )

        delta = _warehouse_delta(command.action, quantity)
        if delta:
            try:
                await self._warehouse.adjust_quantity(command.product_id, delta)
            except InsufficientMainStockError as e:
                # Another checkout drained the stock between the read and the write
                return self._reject(command, e)

        saved = await self._append(record, delta)

        item = reconcile_one([*history, saved], command.project_id, command.product_id)

        logger.info(
            "transfer_recorded",
            record_id=saved.record_id,
            project_id=saved.project_id,
            product_id=saved.product_id,
            action=saved.action.value,
            quantity=saved.quantity,
            current_quantity=item.current_quantity if item else 0.0,
            reorder_point=saved.project_reorder_point,
        )

        await self._notify(saved, item)
        return TransferResult(record=saved, item=item)

    async def _append(self, record: LedgerRecord, delta: float) -> LedgerRecord:
        """Append the record, putting warehouse stock back if the write fails."""
        try:
            return await self._ledger.append(record)
        except Exception as e:
            if delta:
                await self._compensate(record.product_id, -delta)
            if isinstance(e, PersistenceError):
                raise
            raise PersistenceError("ledger record", str(e)) from e

    async def _compensate(self, product_id: str, delta: float) -> None:
        try:
            await self._warehouse.adjust_quantity(product_id, delta)
            logger.warning("warehouse_adjustment_reverted", product_id=product_id, delta=delta)
        except Exception as e:
            logger.error(
                "warehouse_revert_failed",
                product_id=product_id,
                delta=delta,
                error=str(e),
            )

    async def _notify(self, record: LedgerRecord, item: CurrentInventoryItem | None) -> None:
        await self._dispatcher.dispatch(
            TransferRecordedNotification(
                project_id=record.project_id,
                product_id=record.product_id,
                record_id=record.record_id,
                action=record.action.value,
                quantity=record.quantity,
                action_by=record.action_by.name,
            )
        )
        if item is not None and item.is_low_stock and item.project_reorder_point is not None:
            await self._dispatcher.dispatch(
                LowStockNotification(
                    project_id=item.project_id,
                    product_id=item.product_id,
                    current_quantity=item.current_quantity,
                    project_reorder_point=item.project_reorder_point,
                )
            )

    @staticmethod
    def _reject(command: TransferCommand, error: SiteLedgerError) -> TransferResult:
        logger.info(
            "transfer_rejected",
            project_id=command.project_id,
            product_id=command.product_id,
            action=command.action.value,
            error_code=error.code,
            error=error.message,
        )
        return TransferResult(error=error)
