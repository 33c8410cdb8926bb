"""Core domain services."""

from siteledger.core.services.authorization import (
    Capability,
    capabilities_for,
    has_capability,
    require_capability,
)
from siteledger.core.services.inventory_stats import (
    CategoryGroup,
    InventoryStats,
    compute_stats,
    group_by_category,
)
from siteledger.core.services.notification_dispatcher import NotificationDispatcher
from siteledger.core.services.reconciliation import enrich, reconcile, reconcile_one
from siteledger.core.services.reporting import (
    ExportKind,
    export_filename,
    export_rows,
    format_currency,
    format_datetime,
    format_quantity,
    to_csv,
)
from siteledger.core.services.transfer_handler import (
    TransferCommand,
    TransferHandler,
    TransferResult,
)

__all__ = [
    # Authorization
    "Capability",
    "capabilities_for",
    "has_capability",
    "require_capability",
    # Reconciliation
    "reconcile",
    "reconcile_one",
    "enrich",
    "compute_stats",
    "group_by_category",
    "InventoryStats",
    "CategoryGroup",
    # Transfers
    "TransferCommand",
    "TransferHandler",
    "TransferResult",
    "NotificationDispatcher",
    # Reporting
    "ExportKind",
    "export_rows",
    "export_filename",
    "to_csv",
    "format_currency",
    "format_datetime",
    "format_quantity",
]
