"""
Reporting and CSV export for project inventory.

Pure transformations from ledger records and a reconciled snapshot to table
rows. The currency and date formatters here are also used for the display
strings in API responses, so exported and displayed figures always agree.
"""

import csv
import io
from collections.abc import Sequence
from datetime import date, datetime
from enum import Enum

from siteledger.config import get_settings
from siteledger.core.entities.ledger import CurrentInventoryItem, LedgerRecord, TransferAction
from siteledger.core.services.inventory_stats import group_by_category


class ExportKind(str, Enum):
    TRANSACTIONS = "transactions"
    INVENTORY = "inventory"
    SUMMARY = "summary"


ACTION_LABELS: dict[TransferAction, str] = {
    TransferAction.CHECKED_OUT: "Transferred to Project",
    TransferAction.RETURNED: "Returned to Main",
    TransferAction.ADJUSTED: "Adjusted",
}

NOT_SET = "Not set"
NOT_AVAILABLE = "N/A"

TRANSACTION_COLUMNS = [
    "Transaction ID",
    "Product ID",
    "Item Name",
    "Action",
    "Quantity",
    "Unit",
    "Sale Price",
    "Total Cost",
    "Project Reorder Point",
    "Supplier",
    "Action By",
    "Role",
    "Date & Time",
    "Notes",
]

INVENTORY_COLUMNS = [
    "Product ID",
    "Item Name",
    "Category",
    "Current Quantity",
    "Unit",
    "Total Transferred In",
    "Total Returned Out",
    "Total Adjusted",
    "Project Reorder Point",
    "Sale Price",
    "Total Cost",
    "Supplier",
    "Location",
    "Stock Status",
    "Last Transaction ID",
    "Last Transaction Date",
]

SUMMARY_COLUMNS = [
    "Category",
    "Number of Items",
    "Total Quantity",
    "Total Cost",
    "Low Stock Items",
    "Items with Project Reorder",
]


def format_currency(amount: float, symbol: str | None = None) -> str:
    """`1234.5` -> `₱1,234.50`."""
    if symbol is None:
        symbol = get_settings().inventory.currency_symbol
    return f"{symbol}{amount:,.2f}"


def format_datetime(value: datetime) -> str:
    """`2026-10-05 14:30` -> `Oct 5, 2026, 02:30 PM`."""
    return f"{value:%b} {value.day}, {value:%Y}, {value:%I:%M %p}"


def format_quantity(value: float) -> str:
    """Whole quantities print without a decimal part."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _reorder_point(value: float | None) -> str:
    return NOT_SET if value is None else format_quantity(value)


def _transaction_rows(
    records: Sequence[LedgerRecord],
    snapshot: Sequence[CurrentInventoryItem],
) -> list[list[str]]:
    names = {item.product_id: item.display_name for item in snapshot}
    rows = [TRANSACTION_COLUMNS]
    for record in records:
        rows.append(
            [
                record.record_id or "",
                record.product_id,
                names.get(record.product_id, record.product_id),
                ACTION_LABELS[record.action],
                format_quantity(record.quantity),
                record.unit,
                format_currency(record.sale_price),
                format_currency(record.sale_price * record.quantity),
                _reorder_point(record.project_reorder_point),
                record.supplier,
                record.action_by.name,
                record.action_by.role,
                format_datetime(record.created_at),
                record.notes or "",
            ]
        )
    return rows


def _inventory_rows(snapshot: Sequence[CurrentInventoryItem]) -> list[list[str]]:
    rows = [INVENTORY_COLUMNS]
    for item in snapshot:
        rows.append(
            [
                item.product_id,
                item.display_name,
                item.category,
                format_quantity(item.current_quantity),
                item.unit,
                format_quantity(item.total_transferred_in),
                format_quantity(item.total_returned_out),
                format_quantity(item.total_adjusted),
                _reorder_point(item.project_reorder_point),
                format_currency(item.unit_price),
                format_currency(item.total_cost),
                item.supplier or "",
                item.location or NOT_AVAILABLE,
                item.stock_status,
                item.last_record_id or NOT_AVAILABLE,
                (
                    format_datetime(item.last_transaction_at)
                    if item.last_transaction_at
                    else NOT_AVAILABLE
                ),
            ]
        )
    return rows


def _summary_rows(snapshot: Sequence[CurrentInventoryItem]) -> list[list[str]]:
    rows = [SUMMARY_COLUMNS]
    for group in group_by_category(snapshot):
        rows.append(
            [
                group.category,
                str(group.item_count),
                format_quantity(group.total_quantity),
                format_currency(group.total_cost),
                str(group.low_stock_items),
                str(group.items_with_reorder_point),
            ]
        )
    return rows


def export_rows(
    kind: ExportKind | str,
    records: Sequence[LedgerRecord],
    snapshot: Sequence[CurrentInventoryItem],
) -> list[list[str]]:
    """
    Build the table for one report kind, header row first.

    transactions: one row per ledger record, in the order given
    inventory:    one row per snapshot item
    summary:      one row per category of the snapshot
    """
    kind = ExportKind(kind)
    if kind is ExportKind.TRANSACTIONS:
        return _transaction_rows(records, snapshot)
    if kind is ExportKind.INVENTORY:
        return _inventory_rows(snapshot)
    return _summary_rows(snapshot)


def to_csv(rows: Sequence[Sequence[str]]) -> str:
    """Render rows as CSV with every field double-quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def export_filename(kind: ExportKind | str, project_id: str, today: date) -> str:
    return f"project-inventory-{ExportKind(kind).value}-{project_id}-{today.isoformat()}.csv"
