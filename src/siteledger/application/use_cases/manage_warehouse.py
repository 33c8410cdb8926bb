"""Manage Warehouse Use Case: register and look up main warehouse products."""

from siteledger.application.dto.requests import CreateProductRequest
from siteledger.application.dto.responses import ProductResponse
from siteledger.config import get_logger
from siteledger.core.entities.product import Product
from siteledger.core.exceptions import ProductNotFoundError
from siteledger.core.interfaces.warehouse_store import IWarehouseStore
from siteledger.core.services.authorization import Capability, require_capability

logger = get_logger(__name__)


class ManageWarehouseUseCase:
    """Catalog operations on the main warehouse."""

    def __init__(self, warehouse_store: IWarehouseStore):
        self._warehouse_store = warehouse_store

    async def create(self, request: CreateProductRequest) -> Product:
        require_capability(request.action_by.to_entity(), Capability.MANAGE_WAREHOUSE)

        product = Product(**request.model_dump(exclude={"action_by"}))
        return await self._warehouse_store.create_product(product)

    async def get(self, product_id: str) -> Product:
        product = await self._warehouse_store.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def list_products(self, limit: int = 100, offset: int = 0) -> list[Product]:
        return await self._warehouse_store.list_products(limit=limit, offset=offset)

    @staticmethod
    def to_response(product: Product) -> ProductResponse:
        return ProductResponse.from_entity(product)
