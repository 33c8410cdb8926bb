"""
Notification payloads.

Each notification kind is its own model carrying exactly the fields that kind
needs; `Notification` is the discriminated union over all of them.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class NotificationKind(str, Enum):
    PROJECT_CREATED = "project_created"
    PROJECT_STATUS_CHANGED = "project_status_changed"
    TRANSFER_RECORDED = "transfer_recorded"
    LOW_STOCK = "low_stock"


class _NotificationBase(BaseModel):
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ProjectCreatedNotification(_NotificationBase):
    kind: Literal[NotificationKind.PROJECT_CREATED] = NotificationKind.PROJECT_CREATED
    project_id: str
    project_name: str
    created_by: str


class ProjectStatusChangedNotification(_NotificationBase):
    kind: Literal[NotificationKind.PROJECT_STATUS_CHANGED] = (
        NotificationKind.PROJECT_STATUS_CHANGED
    )
    project_id: str
    project_name: str
    user_id: str | None = None  # project owner to notify
    old_status: str
    new_status: str
    changed_by: str


class TransferRecordedNotification(_NotificationBase):
    kind: Literal[NotificationKind.TRANSFER_RECORDED] = NotificationKind.TRANSFER_RECORDED
    project_id: str
    product_id: str
    record_id: str | None
    action: str
    quantity: float
    action_by: str


class LowStockNotification(_NotificationBase):
    kind: Literal[NotificationKind.LOW_STOCK] = NotificationKind.LOW_STOCK
    project_id: str
    product_id: str
    current_quantity: float
    project_reorder_point: float


Notification = Annotated[
    Union[
        ProjectCreatedNotification,
        ProjectStatusChangedNotification,
        TransferRecordedNotification,
        LowStockNotification,
    ],
    Field(discriminator="kind"),
]

notification_adapter: TypeAdapter[Notification] = TypeAdapter(Notification)
