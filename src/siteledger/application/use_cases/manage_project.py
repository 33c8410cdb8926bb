"""Manage Project Use Case: creation and lifecycle transitions."""

from datetime import UTC, date, datetime

from siteledger.application.dto.requests import ActorRequest, CreateProjectRequest
from siteledger.application.dto.responses import ProjectResponse
from siteledger.config import get_logger
from siteledger.core.entities.ledger import ActionBy
from siteledger.core.entities.notification import (
    ProjectCreatedNotification,
    ProjectStatusChangedNotification,
)
from siteledger.core.entities.project import Project, ProjectStatus
from siteledger.core.exceptions import InvalidStatusTransitionError, ProjectNotFoundError
from siteledger.core.interfaces.project_store import IProjectStore
from siteledger.core.services.authorization import Capability, require_capability
from siteledger.core.services.notification_dispatcher import NotificationDispatcher

logger = get_logger(__name__)


class ManageProjectUseCase:
    """
    Create projects and move them through their lifecycle.

    pending -> active (confirm) -> completed (complete)
    pending | active -> cancelled (cancel)
    """

    def __init__(
        self,
        project_store: IProjectStore,
        dispatcher: NotificationDispatcher | None = None,
    ):
        self._project_store = project_store
        self._dispatcher = dispatcher or NotificationDispatcher()

    async def create(self, request: CreateProjectRequest) -> Project:
        actor = request.action_by.to_entity()
        require_capability(actor, Capability.MANAGE_PROJECTS)

        project = Project(
            project_id=request.project_id,
            name=request.name,
            user_id=request.user_id,
            user_email=request.user_email,
            start_date=request.start_date or date.today(),
            end_date=request.end_date,
        )
        project = await self._project_store.create_project(project)

        await self._dispatcher.dispatch(
            ProjectCreatedNotification(
                project_id=project.project_id,
                project_name=project.name,
                created_by=actor.name,
            )
        )
        return project

    async def get(self, project_id: str) -> Project:
        project = await self._project_store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def list_projects(
        self,
        status: ProjectStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Project]:
        return await self._project_store.list_projects(status=status, limit=limit, offset=offset)

    async def confirm(self, project_id: str, actor: ActorRequest) -> Project:
        return await self._transition(project_id, ProjectStatus.ACTIVE, actor.to_entity())

    async def complete(self, project_id: str, actor: ActorRequest) -> Project:
        return await self._transition(project_id, ProjectStatus.COMPLETED, actor.to_entity())

    async def cancel(self, project_id: str, actor: ActorRequest) -> Project:
        return await self._transition(project_id, ProjectStatus.CANCELLED, actor.to_entity())

    async def _transition(
        self,
        project_id: str,
        target: ProjectStatus,
        actor: ActionBy,
    ) -> Project:
        require_capability(actor, Capability.MANAGE_PROJECTS)

        project = await self.get(project_id)
        if not project.can_transition_to(target):
            raise InvalidStatusTransitionError(project_id, project.status.value, target.value)

        old_status = project.status
        update: dict = {"status": target}
        if target is ProjectStatus.ACTIVE:
            update["confirmed_at"] = datetime.now(UTC)
            update["confirmed_by"] = actor.user_id
        elif target is ProjectStatus.COMPLETED and project.end_date is None:
            update["end_date"] = date.today()

        project = await self._project_store.update_project(project.model_copy(update=update))

        logger.info(
            "project_status_changed",
            project_id=project_id,
            old_status=old_status.value,
            new_status=target.value,
            changed_by=actor.user_id,
        )
        await self._dispatcher.dispatch(
            ProjectStatusChangedNotification(
                project_id=project.project_id,
                project_name=project.name,
                user_id=project.user_id,
                old_status=old_status.value,
                new_status=target.value,
                changed_by=actor.name,
            )
        )
        return project

    @staticmethod
    def to_response(project: Project) -> ProjectResponse:
        return ProjectResponse.from_entity(project)
