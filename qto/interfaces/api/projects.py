"""Project API routes — list, create, read, update, delete."""

from fastapi import APIRouter, Depends, status

from qto.application.services import project_service
from qto.domain.repositories.project_repository import ProjectRepository
from qto.domain.schemas.auth import SessionUser
from qto.domain.schemas.common import ActionResponse
from qto.domain.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from qto.interfaces.api.deps import get_current_user
from qto.interfaces.deps import get_project_repository

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectRead])
def list_projects(
    repo: ProjectRepository = Depends(get_project_repository),
    user: SessionUser = Depends(get_current_user),
):
    return [ProjectRead.model_validate(p) for p in project_service.list_projects(repo, user)]


@router.post("", response_model=ActionResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    body: ProjectCreate,
    repo: ProjectRepository = Depends(get_project_repository),
    user: SessionUser = Depends(get_current_user),
):
    project_id = project_service.create_project(repo, body, user)
    return ActionResponse(message="Project created successfully!", project_id=project_id)


@router.get("/{project_id}", response_model=ProjectRead)
def get_project(
    project_id: int,
    repo: ProjectRepository = Depends(get_project_repository),
    user: SessionUser = Depends(get_current_user),
):
    return ProjectRead.model_validate(project_service.get_project(repo, project_id, user))


@router.put("/{project_id}", response_model=ActionResponse)
def update_project(
    project_id: int,
    body: ProjectUpdate,
    repo: ProjectRepository = Depends(get_project_repository),
    user: SessionUser = Depends(get_current_user),
):
    project_service.update_project(repo, project_id, body, user)
    return ActionResponse(message="Project updated successfully!", project_id=project_id)


@router.delete("/{project_id}", response_model=ActionResponse)
def delete_project(
    project_id: int,
    repo: ProjectRepository = Depends(get_project_repository),
    user: SessionUser = Depends(get_current_user),
):
    project_service.delete_project(repo, project_id, user)
    return ActionResponse(message="Project deleted successfully.")
