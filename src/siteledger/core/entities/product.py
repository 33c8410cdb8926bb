"""Main warehouse product entity."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class Product(BaseModel):
    """Authoritative warehouse stock for a catalog product."""

    id: int | None = None
    product_id: str
    name: str
    category: str = "Uncategorized"
    quantity: float = Field(default=0.0, ge=0)
    unit: str = "units"
    description: str | None = None
    supplier: str | None = None
    reorder_point: float = Field(default=0.0, ge=0)
    location: str | None = None
    unit_cost: float = Field(default=0.0, ge=0)
    sale_price: float = Field(default=0.0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_value(self) -> float:
        """Sale value of the stock on hand."""
        return self.quantity * self.sale_price

    @property
    def total_capital(self) -> float:
        """Purchase cost of the stock on hand."""
        return self.quantity * self.unit_cost
