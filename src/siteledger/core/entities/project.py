"""Construction project entity."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProjectStatus(str, Enum):
    """Project lifecycle states."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Allowed lifecycle moves
STATUS_TRANSITIONS: dict[ProjectStatus, frozenset[ProjectStatus]] = {
    ProjectStatus.PENDING: frozenset({ProjectStatus.ACTIVE, ProjectStatus.CANCELLED}),
    ProjectStatus.ACTIVE: frozenset({ProjectStatus.COMPLETED, ProjectStatus.CANCELLED}),
    ProjectStatus.COMPLETED: frozenset(),
    ProjectStatus.CANCELLED: frozenset(),
}


class Project(BaseModel):
    """A construction project that draws stock from the main warehouse."""

    id: int | None = None
    project_id: str
    name: str
    status: ProjectStatus = ProjectStatus.PENDING
    user_id: str | None = None  # client who owns the project
    user_email: str | None = None
    start_date: date = Field(default_factory=date.today)
    end_date: date | None = None
    confirmed_at: datetime | None = None
    confirmed_by: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def can_transition_to(self, target: ProjectStatus) -> bool:
        return target in STATUS_TRANSITIONS[self.status]
