"""
Dependency injection for FastAPI.

Stores are built per request around the connection pool and notifier that
the application lifespan placed on `app.state`. Tests swap any of these
through `app.dependency_overrides`.
"""

from fastapi import Depends, Request

from siteledger.application.use_cases import (
    ExportProjectInventoryUseCase,
    GetProjectInventoryUseCase,
    ManageProjectUseCase,
    ManageWarehouseUseCase,
    RecordTransferUseCase,
)
from siteledger.config import Settings, get_settings
from siteledger.core.interfaces import (
    ILedgerStore,
    INotifier,
    IProjectStore,
    IWarehouseStore,
)
from siteledger.core.services import NotificationDispatcher
from siteledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteLedgerStore,
    SQLiteProjectStore,
    SQLiteWarehouseStore,
)


def get_app_settings() -> Settings:
    return get_settings()


def get_pool(request: Request) -> ConnectionPool:
    """Connection pool opened by the application lifespan."""
    return request.app.state.pool


def get_notifier(request: Request) -> INotifier | None:
    return getattr(request.app.state, "notifier", None)


def get_dispatcher(notifier: INotifier | None = Depends(get_notifier)) -> NotificationDispatcher:
    return NotificationDispatcher(notifier)


# Store dependencies
def get_ledger_store(pool: ConnectionPool = Depends(get_pool)) -> ILedgerStore:
    return SQLiteLedgerStore(pool)


def get_warehouse_store(pool: ConnectionPool = Depends(get_pool)) -> IWarehouseStore:
    return SQLiteWarehouseStore(pool)


def get_project_store(pool: ConnectionPool = Depends(get_pool)) -> IProjectStore:
    return SQLiteProjectStore(pool)


# Use case dependencies
def get_record_transfer_use_case(
    ledger_store: ILedgerStore = Depends(get_ledger_store),
    warehouse_store: IWarehouseStore = Depends(get_warehouse_store),
    project_store: IProjectStore = Depends(get_project_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> RecordTransferUseCase:
    return RecordTransferUseCase(
        ledger_store=ledger_store,
        warehouse_store=warehouse_store,
        project_store=project_store,
        dispatcher=dispatcher,
    )


def get_project_inventory_use_case(
    ledger_store: ILedgerStore = Depends(get_ledger_store),
    warehouse_store: IWarehouseStore = Depends(get_warehouse_store),
    project_store: IProjectStore = Depends(get_project_store),
) -> GetProjectInventoryUseCase:
    return GetProjectInventoryUseCase(
        ledger_store=ledger_store,
        warehouse_store=warehouse_store,
        project_store=project_store,
    )


def get_export_use_case(
    inventory_use_case: GetProjectInventoryUseCase = Depends(get_project_inventory_use_case),
) -> ExportProjectInventoryUseCase:
    return ExportProjectInventoryUseCase(inventory_use_case)


def get_manage_project_use_case(
    project_store: IProjectStore = Depends(get_project_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> ManageProjectUseCase:
    return ManageProjectUseCase(project_store=project_store, dispatcher=dispatcher)


def get_manage_warehouse_use_case(
    warehouse_store: IWarehouseStore = Depends(get_warehouse_store),
) -> ManageWarehouseUseCase:
    return ManageWarehouseUseCase(warehouse_store=warehouse_store)
