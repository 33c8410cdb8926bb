"""Project lifecycle endpoints."""

from fastapi import APIRouter, Depends, Query, status

from siteledger.api.dependencies import get_manage_project_use_case
from siteledger.application.dto.requests import CreateProjectRequest, ProjectActionRequest
from siteledger.application.dto.responses import ErrorResponse, ProjectResponse
from siteledger.application.use_cases.manage_project import ManageProjectUseCase
from siteledger.core.entities.project import ProjectStatus

router = APIRouter(prefix="/api/projects", tags=["projects"])

_TRANSITION_ERRORS = {
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_project(
    request: CreateProjectRequest,
    use_case: ManageProjectUseCase = Depends(get_manage_project_use_case),
) -> ProjectResponse:
    """Create a project in pending state."""
    project = await use_case.create(request)
    return use_case.to_response(project)


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: ManageProjectUseCase = Depends(get_manage_project_use_case),
) -> list[ProjectResponse]:
    projects = await use_case.list_projects(status=status_filter, limit=limit, offset=offset)
    return [use_case.to_response(p) for p in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_project(
    project_id: str,
    use_case: ManageProjectUseCase = Depends(get_manage_project_use_case),
) -> ProjectResponse:
    project = await use_case.get(project_id)
    return use_case.to_response(project)


@router.post("/{project_id}/confirm", response_model=ProjectResponse, responses=_TRANSITION_ERRORS)
async def confirm_project(
    project_id: str,
    request: ProjectActionRequest,
    use_case: ManageProjectUseCase = Depends(get_manage_project_use_case),
) -> ProjectResponse:
    """Move a pending project to active."""
    project = await use_case.confirm(project_id, request.action_by)
    return use_case.to_response(project)


@router.post(
    "/{project_id}/complete", response_model=ProjectResponse, responses=_TRANSITION_ERRORS
)
async def complete_project(
    project_id: str,
    request: ProjectActionRequest,
    use_case: ManageProjectUseCase = Depends(get_manage_project_use_case),
) -> ProjectResponse:
    """Move an active project to completed."""
    project = await use_case.complete(project_id, request.action_by)
    return use_case.to_response(project)


@router.post("/{project_id}/cancel", response_model=ProjectResponse, responses=_TRANSITION_ERRORS)
async def cancel_project(
    project_id: str,
    request: ProjectActionRequest,
    use_case: ManageProjectUseCase = Depends(get_manage_project_use_case),
) -> ProjectResponse:
    """Cancel a pending or active project."""
    project = await use_case.cancel(project_id, request.action_by)
    return use_case.to_response(project)
