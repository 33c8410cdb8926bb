"""Request DTOs for API endpoints.

Pydantic v2 models for request validation. The acting user travels in the
body because session handling lives outside this service.
"""

from datetime import date

from pydantic import BaseModel, Field

from siteledger.core.entities.ledger import ActionBy, TransferAction


class ActorRequest(BaseModel):
    """The user performing an operation."""

    user_id: str = Field(..., min_length=1, description="Acting user ID")
    name: str = Field(..., min_length=1, description="Display name recorded on the ledger")
    role: str = Field(..., min_length=1, description="admin, project_manager or user")

    def to_entity(self) -> ActionBy:
        return ActionBy(user_id=self.user_id, name=self.name, role=self.role)


class TransferRequest(BaseModel):
    """Record a movement of a warehouse product to, from or within a project."""

    product_id: str = Field(..., min_length=1, description="Warehouse product ID")
    action: TransferAction = Field(..., description="checked_out, returned or adjusted")
    # Range checks happen in the transfer handler so they report on the field
    quantity: float = Field(..., description="Quantity moved, must be positive")
    unit: str | None = Field(
        default=None, description="Unit of measure (defaults to the product's unit)"
    )
    notes: str | None = Field(default=None, max_length=2000, description="Free-text note")
    project_reorder_point: float | None = Field(
        default=None,
        description="Project-level low-stock threshold; omit to keep the current one",
    )
    action_by: ActorRequest


class CreateProductRequest(BaseModel):
    """Register a product in the main warehouse."""

    product_id: str = Field(..., min_length=1, max_length=64, description="Catalog ID")
    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(default="Uncategorized", max_length=100)
    quantity: float = Field(default=0.0, ge=0, description="Opening stock level")
    unit: str = Field(default="units", max_length=32)
    description: str | None = Field(default=None, max_length=2000)
    supplier: str | None = Field(default=None, max_length=200)
    reorder_point: float = Field(default=0.0, ge=0)
    location: str | None = Field(default=None, max_length=200)
    unit_cost: float = Field(default=0.0, ge=0)
    sale_price: float = Field(default=0.0, ge=0)
    action_by: ActorRequest


class CreateProjectRequest(BaseModel):
    """Open a new project in pending state."""

    project_id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    user_id: str | None = Field(default=None, description="Client who owns the project")
    user_email: str | None = Field(default=None)
    start_date: date | None = Field(default=None, description="Defaults to today")
    end_date: date | None = Field(default=None)
    action_by: ActorRequest


class ProjectActionRequest(BaseModel):
    """Confirm, complete or cancel a project."""

    action_by: ActorRequest
