"""Core interfaces (ports) for dependency injection."""

from siteledger.core.interfaces.ledger_store import ILedgerStore
from siteledger.core.interfaces.notifier import INotifier
from siteledger.core.interfaces.project_store import IProjectStore
from siteledger.core.interfaces.warehouse_store import IWarehouseStore

__all__ = [
    "ILedgerStore",
    "INotifier",
    "IProjectStore",
    "IWarehouseStore",
]
