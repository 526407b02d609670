"""Project endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from freelance_hub.api.v1._authz import require_user
from freelance_hub.core.dependencies import CurrentUser, get_db_session, get_invoice_service
from freelance_hub.schemas.common import DeletionResponse
from freelance_hub.schemas.projects import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest
from freelance_hub.services.invoice_service import InvoiceService
from freelance_hub.services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreateRequest,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
) -> ProjectResponse:
    project = ProjectService(db).create(user.user_id, payload.model_dump(exclude_none=True))
    return ProjectResponse.model_validate(project)


@router.get("", response_model=list[ProjectResponse])
def list_projects(user: CurrentUser = Depends(require_user), db: Session = Depends(get_db_session)) -> list[ProjectResponse]:
    return [ProjectResponse.model_validate(project) for project in ProjectService(db).find_all(user.user_id)]


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
) -> ProjectResponse:
    return ProjectResponse.model_validate(ProjectService(db).find_one(user.user_id, project_id))


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: str,
    payload: ProjectUpdateRequest,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> ProjectResponse:
    service = ProjectService(db, documents=invoices)
    project = service.update(user.user_id, project_id, payload.model_dump(exclude_unset=True))
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", response_model=DeletionResponse)
def delete_project(
    project_id: str,
    user: CurrentUser = Depends(require_user),
    db: Session = Depends(get_db_session),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> DeletionResponse:
    ProjectService(db, documents=invoices).remove(user.user_id, project_id)
    return DeletionResponse(id=project_id)
