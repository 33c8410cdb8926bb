"""Abstract interface for the project inventory ledger."""

from abc import ABC, abstractmethod

from siteledger.core.entities.ledger import LedgerRecord


class ILedgerStore(ABC):
    """Append-only persistence for ledger records."""

    @abstractmethod
    async def append(self, record: LedgerRecord) -> LedgerRecord:
        """Persist a new record and return it with `id` and `record_id` assigned."""
        pass

    @abstractmethod
    async def list_for_project(
        self, project_id: str, product_id: str | None = None
    ) -> list[LedgerRecord]:
        """Records for a project in ledger order (created_at ASC, insertion order on ties)."""
        pass

    @abstractmethod
    async def list_recent(self, project_id: str, limit: int = 10) -> list[LedgerRecord]:
        """Most recent records for a project, newest first."""
        pass

    @abstractmethod
    async def list_all(self, limit: int = 100, offset: int = 0) -> list[LedgerRecord]:
        """Records across all projects, newest first."""
        pass
