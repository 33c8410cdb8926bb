"""Application use cases."""

from siteledger.application.use_cases.export_project_inventory import (
    ExportProjectInventoryUseCase,
    ExportResult,
)
from siteledger.application.use_cases.get_project_inventory import (
    GetProjectInventoryUseCase,
    ProjectInventory,
)
from siteledger.application.use_cases.manage_project import ManageProjectUseCase
from siteledger.application.use_cases.manage_warehouse import ManageWarehouseUseCase
from siteledger.application.use_cases.record_transfer import RecordTransferUseCase

__all__ = [
    "RecordTransferUseCase",
    "GetProjectInventoryUseCase",
    "ProjectInventory",
    "ExportProjectInventoryUseCase",
    "ExportResult",
    "ManageProjectUseCase",
    "ManageWarehouseUseCase",
]
