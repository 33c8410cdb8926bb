"""Main warehouse product endpoints."""

from fastapi import APIRouter, Depends, Query, status

from siteledger.api.dependencies import get_manage_warehouse_use_case
from siteledger.application.dto.requests import CreateProductRequest
from siteledger.application.dto.responses import ErrorResponse, ProductResponse
from siteledger.application.use_cases.manage_warehouse import ManageWarehouseUseCase

router = APIRouter(prefix="/api/warehouse", tags=["warehouse"])


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    use_case: ManageWarehouseUseCase = Depends(get_manage_warehouse_use_case),
) -> ProductResponse:
    """Register a product with its opening stock."""
    product = await use_case.create(request)
    return use_case.to_response(product)


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ManageWarehouseUseCase = Depends(get_manage_warehouse_use_case),
) -> list[ProductResponse]:
    products = await use_case.list_products(limit=limit, offset=offset)
    return [use_case.to_response(p) for p in products]


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str,
    use_case: ManageWarehouseUseCase = Depends(get_manage_warehouse_use_case),
) -> ProductResponse:
    product = await use_case.get(product_id)
    return use_case.to_response(product)
