"""Project inventory endpoints: transfers, reconciled stock and exports."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from siteledger.api.dependencies import (
    get_export_use_case,
    get_ledger_store,
    get_project_inventory_use_case,
    get_record_transfer_use_case,
)
from siteledger.application.dto.requests import TransferRequest
from siteledger.application.dto.responses import (
    CategoryGroupResponse,
    CurrentInventoryItemResponse,
    ErrorResponse,
    InventoryStatsResponse,
    LedgerRecordResponse,
    ProjectInventoryResponse,
    TransferResponse,
)
from siteledger.application.use_cases.export_project_inventory import (
    ExportProjectInventoryUseCase,
)
from siteledger.application.use_cases.get_project_inventory import GetProjectInventoryUseCase
from siteledger.application.use_cases.record_transfer import RecordTransferUseCase
from siteledger.config import get_settings
from siteledger.core.exceptions import ProductNotFoundError
from siteledger.core.interfaces import ILedgerStore
from siteledger.core.services.reporting import ExportKind

router = APIRouter(prefix="/api/projects/{project_id}/inventory", tags=["project-inventory"])


@router.post(
    "/transfers",
    response_model=TransferResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def record_transfer(
    project_id: str,
    request: TransferRequest,
    use_case: RecordTransferUseCase = Depends(get_record_transfer_use_case),
) -> TransferResponse:
    """
    Record a checkout, return or adjustment.

    Rejections come back with `field` set to the offending request field.
    """
    result = await use_case.execute(project_id, request)
    return use_case.to_response(result)


@router.get("/transfers", response_model=list[LedgerRecordResponse])
async def list_transfers(
    project_id: str,
    product_id: str | None = None,
    store: ILedgerStore = Depends(get_ledger_store),
) -> list[LedgerRecordResponse]:
    """Full ledger of the project, oldest first."""
    records = await store.list_for_project(project_id, product_id)
    return [LedgerRecordResponse.from_entity(r) for r in records]


@router.get("/recent", response_model=list[LedgerRecordResponse])
async def recent_transfers(
    project_id: str,
    limit: int | None = Query(default=None, ge=1, le=500),
    store: ILedgerStore = Depends(get_ledger_store),
) -> list[LedgerRecordResponse]:
    """Latest movements, newest first."""
    limit = limit or get_settings().inventory.recent_actions_limit
    records = await store.list_recent(project_id, limit=limit)
    return [LedgerRecordResponse.from_entity(r) for r in records]


@router.get(
    "",
    response_model=ProjectInventoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_project_inventory(
    project_id: str,
    use_case: GetProjectInventoryUseCase = Depends(get_project_inventory_use_case),
) -> ProjectInventoryResponse:
    """Current stock of every product the project has touched."""
    result = await use_case.execute(project_id)
    return use_case.to_response(result)


@router.get(
    "/items/{product_id}",
    response_model=CurrentInventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_project_item(
    project_id: str,
    product_id: str,
    use_case: GetProjectInventoryUseCase = Depends(get_project_inventory_use_case),
) -> CurrentInventoryItemResponse:
    result = await use_case.execute(project_id)
    for item in result.items:
        if item.product_id == product_id:
            return CurrentInventoryItemResponse.from_entity(item)
    raise ProductNotFoundError(product_id)


@router.get("/stats", response_model=InventoryStatsResponse)
async def get_inventory_stats(
    project_id: str,
    use_case: GetProjectInventoryUseCase = Depends(get_project_inventory_use_case),
) -> InventoryStatsResponse:
    result = await use_case.execute(project_id)
    return InventoryStatsResponse.from_stats(result.stats)


@router.get("/categories", response_model=list[CategoryGroupResponse])
async def get_inventory_categories(
    project_id: str,
    use_case: GetProjectInventoryUseCase = Depends(get_project_inventory_use_case),
) -> list[CategoryGroupResponse]:
    result = await use_case.execute(project_id)
    return use_case.categories_response(result)


@router.get(
    "/export/{kind}",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}, 404: {"model": ErrorResponse}},
)
async def export_project_inventory(
    project_id: str,
    kind: ExportKind,
    use_case: ExportProjectInventoryUseCase = Depends(get_export_use_case),
) -> Response:
    """Download the transactions, inventory or summary report as CSV."""
    result = await use_case.execute(project_id, kind)
    return Response(
        content=result.content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
