"""Core domain entities."""

from siteledger.core.entities.ledger import (
    ActionBy,
    CurrentInventoryItem,
    LedgerRecord,
    TransferAction,
    UserRole,
)
from siteledger.core.entities.notification import (
    LowStockNotification,
    Notification,
    NotificationKind,
    ProjectCreatedNotification,
    ProjectStatusChangedNotification,
    TransferRecordedNotification,
    notification_adapter,
)
from siteledger.core.entities.product import Product
from siteledger.core.entities.project import STATUS_TRANSITIONS, Project, ProjectStatus

__all__ = [
    # Ledger entities
    "ActionBy",
    "CurrentInventoryItem",
    "LedgerRecord",
    "TransferAction",
    "UserRole",
    # Warehouse entities
    "Product",
    # Project entities
    "Project",
    "ProjectStatus",
    "STATUS_TRANSITIONS",
    # Notification entities
    "Notification",
    "NotificationKind",
    "ProjectCreatedNotification",
    "ProjectStatusChangedNotification",
    "TransferRecordedNotification",
    "LowStockNotification",
    "notification_adapter",
]
