"""Export Project Inventory Use Case: CSV reports of a project's stock."""

from dataclasses import dataclass
from datetime import date

from siteledger.application.use_cases.get_project_inventory import GetProjectInventoryUseCase
from siteledger.config import get_logger
from siteledger.core.services.reporting import ExportKind, export_filename, export_rows, to_csv

logger = get_logger(__name__)


@dataclass
class ExportResult:
    """A rendered CSV report."""

    kind: ExportKind
    filename: str
    content: str
    row_count: int  # data rows, header excluded


class ExportProjectInventoryUseCase:
    """Render one of the transactions / inventory / summary reports."""

    def __init__(self, inventory_use_case: GetProjectInventoryUseCase):
        self._inventory = inventory_use_case

    async def execute(
        self,
        project_id: str,
        kind: ExportKind | str,
        today: date | None = None,
    ) -> ExportResult:
        kind = ExportKind(kind)
        inventory = await self._inventory.execute(project_id)

        # Transactions export lists the history newest first, as displayed
        rows = export_rows(kind, inventory.history, inventory.items)
        filename = export_filename(kind, project_id, today or date.today())

        logger.info(
            "project_inventory_exported",
            project_id=project_id,
            kind=kind.value,
            rows=len(rows) - 1,
        )
        return ExportResult(
            kind=kind,
            filename=filename,
            content=to_csv(rows),
            row_count=len(rows) - 1,
        )
