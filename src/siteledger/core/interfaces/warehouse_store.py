"""Abstract interface for the main warehouse inventory."""

from abc import ABC, abstractmethod

from siteledger.core.entities.product import Product


class IWarehouseStore(ABC):
    """Interface for authoritative warehouse stock levels."""

    @abstractmethod
    async def create_product(self, product: Product) -> Product:
        """Register a product in the warehouse catalog."""
        pass

    @abstractmethod
    async def get_product(self, product_id: str) -> Product | None:
        """Get a product by its catalog ID."""
        pass

    @abstractmethod
    async def get_products(self, product_ids: list[str]) -> dict[str, Product]:
        """Get several products keyed by product ID. Unknown IDs are omitted."""
        pass

    @abstractmethod
    async def list_products(self, limit: int = 100, offset: int = 0) -> list[Product]:
        """List products with pagination."""
        pass

    @abstractmethod
    async def get_quantity(self, product_id: str) -> float:
        """
        Read the current quantity straight from storage.

        Raises ProductNotFoundError for an unknown product.
        """
        pass

    @abstractmethod
    async def adjust_quantity(self, product_id: str, delta: float) -> float:
        """
        Atomically add `delta` to the stock level and return the new quantity.

        Raises InsufficientMainStockError instead of going below zero.
        """
        pass
