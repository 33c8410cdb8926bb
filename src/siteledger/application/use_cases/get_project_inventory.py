"""Get Project Inventory Use Case: ledger, reconciled snapshot and totals."""

from dataclasses import dataclass, field

from siteledger.application.dto.responses import (
    CategoryGroupResponse,
    CurrentInventoryItemResponse,
    InventoryStatsResponse,
    LedgerRecordResponse,
    ProjectInventoryResponse,
)
from siteledger.config import get_logger, get_settings
from siteledger.core.entities.ledger import CurrentInventoryItem, LedgerRecord
from siteledger.core.exceptions import ProjectNotFoundError
from siteledger.core.interfaces.ledger_store import ILedgerStore
from siteledger.core.interfaces.project_store import IProjectStore
from siteledger.core.interfaces.warehouse_store import IWarehouseStore
from siteledger.core.services.inventory_stats import (
    CategoryGroup,
    InventoryStats,
    compute_stats,
    group_by_category,
)
from siteledger.core.services.reconciliation import enrich, reconcile

logger = get_logger(__name__)


@dataclass
class ProjectInventory:
    """A project's ledger and everything derived from it."""

    project_id: str
    records: list[LedgerRecord]  # ledger order, oldest first
    items: list[CurrentInventoryItem]
    stats: InventoryStats
    categories: list[CategoryGroup] = field(default_factory=list)

    @property
    def history(self) -> list[LedgerRecord]:
        """Records newest first."""
        return list(reversed(self.records))

    def recent(self, limit: int) -> list[LedgerRecord]:
        return self.history[:limit]


class GetProjectInventoryUseCase:
    """Rebuild a project's current inventory from its ledger."""

    def __init__(
        self,
        ledger_store: ILedgerStore,
        warehouse_store: IWarehouseStore,
        project_store: IProjectStore,
    ):
        self._ledger_store = ledger_store
        self._warehouse_store = warehouse_store
        self._project_store = project_store

    async def execute(self, project_id: str) -> ProjectInventory:
        """Load the ledger, reconcile it and attach catalog details."""
        project = await self._project_store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        records = await self._ledger_store.list_for_project(project_id)
        items = reconcile(records)
        products = await self._warehouse_store.get_products([i.product_id for i in items])
        items = enrich(items, products)

        logger.debug(
            "project_inventory_reconciled",
            project_id=project_id,
            records=len(records),
            items=len(items),
        )

        return ProjectInventory(
            project_id=project_id,
            records=records,
            items=items,
            stats=compute_stats(items),
            categories=group_by_category(items),
        )

    def to_response(
        self,
        result: ProjectInventory,
        recent_limit: int | None = None,
    ) -> ProjectInventoryResponse:
        """Convert result to API response."""
        if recent_limit is None:
            recent_limit = get_settings().inventory.recent_actions_limit
        return ProjectInventoryResponse(
            project_id=result.project_id,
            items=[CurrentInventoryItemResponse.from_entity(i) for i in result.items],
            stats=InventoryStatsResponse.from_stats(result.stats),
            recent=[LedgerRecordResponse.from_entity(r) for r in result.recent(recent_limit)],
        )

    @staticmethod
    def categories_response(result: ProjectInventory) -> list[CategoryGroupResponse]:
        return [CategoryGroupResponse.from_group(g) for g in result.categories]
