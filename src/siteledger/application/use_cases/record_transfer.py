"""Record Transfer Use Case: checkout, return or adjustment of project stock."""

from siteledger.application.dto.requests import TransferRequest
from siteledger.application.dto.responses import (
    CurrentInventoryItemResponse,
    LedgerRecordResponse,
    TransferResponse,
)
from siteledger.config import get_logger
from siteledger.core.interfaces.ledger_store import ILedgerStore
from siteledger.core.interfaces.project_store import IProjectStore
from siteledger.core.interfaces.warehouse_store import IWarehouseStore
from siteledger.core.services.authorization import Capability, require_capability
from siteledger.core.services.notification_dispatcher import NotificationDispatcher
from siteledger.core.services.reconciliation import enrich
from siteledger.core.services.transfer_handler import (
    TransferCommand,
    TransferHandler,
    TransferResult,
)

logger = get_logger(__name__)


class RecordTransferUseCase:
    """Authorize and record one stock movement for a project."""

    def __init__(
        self,
        ledger_store: ILedgerStore,
        warehouse_store: IWarehouseStore,
        project_store: IProjectStore,
        dispatcher: NotificationDispatcher | None = None,
    ):
        self._warehouse_store = warehouse_store
        self._handler = TransferHandler(
            ledger_store=ledger_store,
            warehouse_store=warehouse_store,
            project_store=project_store,
            dispatcher=dispatcher,
        )

    async def execute(self, project_id: str, request: TransferRequest) -> TransferResult:
        """
        Execute the transfer.

        Raises the handler's validation error, if any, so the API layer can
        map it to a field-level error response.
        """
        actor = request.action_by.to_entity()
        require_capability(actor, Capability.MANAGE_PROJECT_INVENTORY)

        result = await self._handler.record_transfer(
            TransferCommand(
                project_id=project_id,
                product_id=request.product_id,
                quantity=request.quantity,
                action=request.action,
                action_by=actor,
                unit=request.unit,
                notes=request.notes,
                project_reorder_point=request.project_reorder_point,
            )
        )
        if result.error is not None:
            raise result.error

        if result.item is not None:
            products = await self._warehouse_store.get_products([result.item.product_id])
            result.item = enrich([result.item], products)[0]

        return result

    def to_response(self, result: TransferResult) -> TransferResponse:
        """Convert result to API response."""
        return TransferResponse(
            record=LedgerRecordResponse.from_entity(result.record),  # type: ignore[arg-type]
            item=(
                CurrentInventoryItemResponse.from_entity(result.item)
                if result.item is not None
                else None
            ),
        )
