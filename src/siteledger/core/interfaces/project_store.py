"""Abstract interface for project storage."""

from abc import ABC, abstractmethod

from siteledger.core.entities.project import Project, ProjectStatus


class IProjectStore(ABC):
    """Interface for project persistence."""

    @abstractmethod
    async def create_project(self, project: Project) -> Project:
        """Create a new project."""
        pass

    @abstractmethod
    async def get_project(self, project_id: str) -> Project | None:
        """Get project by its project ID."""
        pass

    @abstractmethod
    async def update_project(self, project: Project) -> Project:
        """Update project status and confirmation fields."""
        pass

    @abstractmethod
    async def list_projects(
        self,
        status: ProjectStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        """List projects, optionally filtered by status."""
        pass
