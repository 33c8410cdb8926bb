"""Cross-project ledger endpoints."""

from fastapi import APIRouter, Depends, Query

from siteledger.api.dependencies import get_ledger_store
from siteledger.application.dto.responses import LedgerRecordResponse
from siteledger.core.interfaces import ILedgerStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("/transfers", response_model=list[LedgerRecordResponse])
async def list_all_transfers(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: ILedgerStore = Depends(get_ledger_store),
) -> list[LedgerRecordResponse]:
    """Movements across every project, newest first."""
    records = await store.list_all(limit=limit, offset=offset)
    return [LedgerRecordResponse.from_entity(r) for r in records]
