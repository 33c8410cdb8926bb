"""Project inventory ledger entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TransferAction(str, Enum):
    """Kinds of movement between the main warehouse and a project."""

    CHECKED_OUT = "checked_out"  # warehouse -> project
    RETURNED = "returned"  # project -> warehouse
    ADJUSTED = "adjusted"  # consumed on site


class UserRole(str, Enum):
    """Roles an acting user can hold."""

    ADMIN = "admin"
    PROJECT_MANAGER = "project_manager"
    USER = "user"


class ActionBy(BaseModel):
    """Who performed a movement. Copied onto the record and never changed."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LedgerRecord(BaseModel):
    """One immutable movement event scoped to a (project, product) pair."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None  # storage row id, also the insertion order
    record_id: str | None = None  # e.g. PI-0001
    project_id: str
    product_id: str
    action: TransferAction
    quantity: float = Field(..., gt=0)
    unit: str
    supplier: str
    sale_price: float = Field(default=0.0, ge=0)
    total_value: float = Field(default=0.0, ge=0)
    project_reorder_point: float | None = Field(default=None, ge=0)
    action_by: ActionBy
    notes: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class CurrentInventoryItem(BaseModel):
    """Current state of one product in one project, folded from the ledger."""

    project_id: str
    product_id: str
    unit: str = "units"
    supplier: str | None = None
    unit_price: float = 0.0

    current_quantity: float = 0.0
    total_transferred_in: float = 0.0
    total_returned_out: float = 0.0
    total_adjusted: float = 0.0
    total_value: float = 0.0  # capitalized value, untouched by consumption
    total_cost: float = 0.0  # current_quantity * unit_price

    project_reorder_point: float | None = None  # None means no alert configured
    is_low_stock: bool = False

    last_record_id: str | None = None
    last_transaction_at: datetime | None = None

    # Catalog metadata, filled in by enrichment only
    name: str | None = None
    category: str = "Uncategorized"
    location: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.product_id

    @property
    def has_reorder_point(self) -> bool:
        return self.project_reorder_point is not None

    @property
    def stock_status(self) -> str:
        """Low stock wins over out of stock; an item without a threshold is never low."""
        if self.is_low_stock:
            return "Low Stock"
        if self.current_quantity == 0:
            return "Out of Stock"
        return "In Stock"
