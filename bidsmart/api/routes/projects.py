from typing import Optional

from fastapi import APIRouter, Depends, Query

from bidsmart.api.deps import container_from_request, success_envelope
from bidsmart.core.container import ApplicationContainer
from bidsmart.core.exceptions import NotFoundError
from bidsmart.schemas import (
    ArchiveRequest,
    BidProject,
    ProjectCreateRequest,
    ProjectStatus,
    StatusUpdateRequest,
)
from bidsmart.services.status_service import progress_percent

router = APIRouter(prefix="/api/projects", tags=["projects"])


def _project_view(project: BidProject) -> dict:
    view = project.to_document()
    view["progress"] = progress_percent(project.status)
    return view


def _require(project: Optional[BidProject], project_id: str) -> BidProject:
    if project is None:
        raise NotFoundError(f"Project {project_id} not found")
    return project


@router.get("")
def list_projects(
    status: Optional[ProjectStatus] = None,
    container: ApplicationContainer = Depends(container_from_request),
):
    if status is None:
        projects = container.projects.get_all()
    else:
        projects = container.projects.get_by_status(status)
    return success_envelope([_project_view(p) for p in projects])


@router.post("", status_code=201)
def create_project(
    payload: ProjectCreateRequest,
    container: ApplicationContainer = Depends(container_from_request),
):
    project = container.projects.create_manual(
        name=payload.name,
        deadline=payload.deadline,
        client=payload.client,
        industry=payload.industry,
        budget=payload.budget,
        requirements=payload.requirements,
    )
    return success_envelope(_project_view(project))


@router.get("/upcoming")
def upcoming_projects(
    days: Optional[int] = Query(default=None, ge=0),
    container: ApplicationContainer = Depends(container_from_request),
):
    window = container.settings.upcoming_days if days is None else days
    return success_envelope([_project_view(p) for p in container.projects.get_upcoming(window)])


@router.get("/{project_id}")
def get_project(
    project_id: str,
    container: ApplicationContainer = Depends(container_from_request),
):
    project = _require(container.projects.get_by_id(project_id), project_id)
    return success_envelope(_project_view(project))


@router.post("/{project_id}/advance")
def advance_project(
    project_id: str,
    container: ApplicationContainer = Depends(container_from_request),
):
    project = _require(container.status_service.advance_to_next(project_id), project_id)
    return success_envelope(_project_view(project))


@router.put("/{project_id}/status")
def update_project_status(
    project_id: str,
    payload: StatusUpdateRequest,
    container: ApplicationContainer = Depends(container_from_request),
):
    project = _require(container.projects.update_status(project_id, payload.status), project_id)
    return success_envelope(_project_view(project))


@router.post("/{project_id}/archive", status_code=201)
def archive_project(
    project_id: str,
    payload: ArchiveRequest,
    container: ApplicationContainer = Depends(container_from_request),
):
    record = container.status_service.archive(
        project_id,
        result=payload.result,
        final_quote=payload.final_quote,
        design_summary=payload.design_summary,
        scale=payload.scale,
    )
    return success_envelope(record.to_document())
