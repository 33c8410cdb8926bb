"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization. Money and date display
strings come from the same formatters as the CSV export.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from siteledger.core.entities.ledger import CurrentInventoryItem, LedgerRecord
from siteledger.core.entities.product import Product
from siteledger.core.entities.project import Project
from siteledger.core.services.inventory_stats import CategoryGroup, InventoryStats
from siteledger.core.services.reporting import ACTION_LABELS, format_currency, format_datetime


class ActionByResponse(BaseModel):
    user_id: str
    name: str
    role: str


class LedgerRecordResponse(BaseModel):
    """One ledger movement."""

    id: int | None = Field(default=None, description="Storage row ID")
    record_id: str | None = Field(default=None, description="Display ID, e.g. PI-0001")
    project_id: str
    product_id: str
    action: str = Field(..., description="checked_out, returned or adjusted")
    action_label: str = Field(..., description="Human-readable action")
    quantity: float
    unit: str
    supplier: str
    sale_price: float
    total_value: float
    project_reorder_point: float | None = None
    action_by: ActionByResponse
    notes: str | None = None
    created_at: datetime
    created_at_display: str

    @classmethod
    def from_entity(cls, record: LedgerRecord) -> "LedgerRecordResponse":
        return cls(
            id=record.id,
            record_id=record.record_id,
            project_id=record.project_id,
            product_id=record.product_id,
            action=record.action.value,
            action_label=ACTION_LABELS[record.action],
            quantity=record.quantity,
            unit=record.unit,
            supplier=record.supplier,
            sale_price=record.sale_price,
            total_value=record.total_value,
            project_reorder_point=record.project_reorder_point,
            action_by=ActionByResponse(**record.action_by.model_dump()),
            notes=record.notes,
            created_at=record.created_at,
            created_at_display=format_datetime(record.created_at),
        )


class CurrentInventoryItemResponse(BaseModel):
    """Reconciled state of one product in a project."""

    project_id: str
    product_id: str
    name: str = Field(..., description="Catalog name, or the product ID when unknown")
    category: str
    location: str | None = None
    unit: str
    supplier: str | None = None
    current_quantity: float
    total_transferred_in: float
    total_returned_out: float
    total_adjusted: float
    unit_price: float
    total_value: float
    total_cost: float
    unit_price_display: str
    total_value_display: str
    total_cost_display: str
    project_reorder_point: float | None = None
    is_low_stock: bool
    stock_status: str
    last_record_id: str | None = None
    last_transaction_at: datetime | None = None

    @classmethod
    def from_entity(cls, item: CurrentInventoryItem) -> "CurrentInventoryItemResponse":
        return cls(
            project_id=item.project_id,
            product_id=item.product_id,
            name=item.display_name,
            category=item.category,
            location=item.location,
            unit=item.unit,
            supplier=item.supplier,
            current_quantity=item.current_quantity,
            total_transferred_in=item.total_transferred_in,
            total_returned_out=item.total_returned_out,
            total_adjusted=item.total_adjusted,
            unit_price=item.unit_price,
            total_value=item.total_value,
            total_cost=item.total_cost,
            unit_price_display=format_currency(item.unit_price),
            total_value_display=format_currency(item.total_value),
            total_cost_display=format_currency(item.total_cost),
            project_reorder_point=item.project_reorder_point,
            is_low_stock=item.is_low_stock,
            stock_status=item.stock_status,
            last_record_id=item.last_record_id,
            last_transaction_at=item.last_transaction_at,
        )


class TransferResponse(BaseModel):
    """Result of a recorded transfer."""

    record: LedgerRecordResponse
    item: CurrentInventoryItemResponse | None = Field(
        default=None, description="Project state of the product after the transfer"
    )


class InventoryStatsResponse(BaseModel):
    total_items: int
    total_quantity: float
    total_value: float
    total_cost: float
    total_value_display: str
    total_cost_display: str
    total_transferred_in: float
    total_returned_out: float
    low_stock_items: int
    out_of_stock_items: int
    categories: dict[str, int]

    @classmethod
    def from_stats(cls, stats: InventoryStats) -> "InventoryStatsResponse":
        return cls(
            total_items=stats.total_items,
            total_quantity=stats.total_quantity,
            total_value=stats.total_value,
            total_cost=stats.total_cost,
            total_value_display=format_currency(stats.total_value),
            total_cost_display=format_currency(stats.total_cost),
            total_transferred_in=stats.total_transferred_in,
            total_returned_out=stats.total_returned_out,
            low_stock_items=stats.low_stock_items,
            out_of_stock_items=stats.out_of_stock_items,
            categories=dict(stats.categories),
        )


class CategoryGroupResponse(BaseModel):
    category: str
    item_count: int
    total_quantity: float
    total_value: float
    total_cost: float
    total_cost_display: str
    low_stock_items: int
    items_with_reorder_point: int
    items: list[CurrentInventoryItemResponse] = Field(default_factory=list)

    @classmethod
    def from_group(cls, group: CategoryGroup) -> "CategoryGroupResponse":
        return cls(
            category=group.category,
            item_count=group.item_count,
            total_quantity=group.total_quantity,
            total_value=group.total_value,
            total_cost=group.total_cost,
            total_cost_display=format_currency(group.total_cost),
            low_stock_items=group.low_stock_items,
            items_with_reorder_point=group.items_with_reorder_point,
            items=[CurrentInventoryItemResponse.from_entity(i) for i in group.items],
        )


class ProjectInventoryResponse(BaseModel):
    """Everything the project inventory tab shows."""

    project_id: str
    items: list[CurrentInventoryItemResponse]
    stats: InventoryStatsResponse
    recent: list[LedgerRecordResponse] = Field(
        default_factory=list, description="Latest movements, newest first"
    )


class ProductResponse(BaseModel):
    """Main warehouse product."""

    id: int | None = None
    product_id: str
    name: str
    category: str
    quantity: float
    unit: str
    description: str | None = None
    supplier: str | None = None
    reorder_point: float
    location: str | None = None
    unit_cost: float
    sale_price: float
    total_value: float
    total_value_display: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            product_id=product.product_id,
            name=product.name,
            category=product.category,
            quantity=product.quantity,
            unit=product.unit,
            description=product.description,
            supplier=product.supplier,
            reorder_point=product.reorder_point,
            location=product.location,
            unit_cost=product.unit_cost,
            sale_price=product.sale_price,
            total_value=product.total_value,
            total_value_display=format_currency(product.total_value),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProjectResponse(BaseModel):
    """Project with its lifecycle state."""

    id: int | None = None
    project_id: str
    name: str
    status: str
    user_id: str | None = None
    user_email: str | None = None
    start_date: date
    end_date: date | None = None
    confirmed_at: datetime | None = None
    confirmed_by: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            project_id=project.project_id,
            name=project.name,
            status=project.status.value,
            user_id=project.user_id,
            user_email=project.user_email,
            start_date=project.start_date,
            end_date=project.end_date,
            confirmed_at=project.confirmed_at,
            confirmed_by=project.confirmed_by,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy or degraded")
    version: str
    database: str = Field(..., description="ok or error")
    notifier: str = Field(..., description="Active notifier implementation")
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_MAIN_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - field: request field the error belongs to, when there is one
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    field: str | None = Field(default=None, description="Offending request field")
    details: dict | None = Field(default=None, description="Structured error context")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
