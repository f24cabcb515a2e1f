"""QTO item API routes — line items of a project."""

from fastapi import APIRouter, Depends, status

from qto.application.services import qto_item_service
from qto.domain.repositories.project_repository import ProjectRepository
from qto.domain.repositories.qto_item_repository import QTOItemRepository
from qto.domain.schemas.auth import SessionUser
from qto.domain.schemas.common import ActionResponse
from qto.domain.schemas.qto_item import QTOItemCreate, QTOItemRead, QTOItemUpdate
from qto.interfaces.api.deps import get_current_user
from qto.interfaces.deps import get_project_repository, get_qto_item_repository

router = APIRouter(prefix="/projects", tags=["QTO Items"])


@router.get("/{project_id}/items", response_model=list[QTOItemRead])
def list_items(
    project_id: int,
    project_repo: ProjectRepository = Depends(get_project_repository),
    item_repo: QTOItemRepository = Depends(get_qto_item_repository),
    user: SessionUser = Depends(get_current_user),
):
    items = qto_item_service.list_items(project_repo, item_repo, project_id, user)
    return [QTOItemRead.model_validate(i) for i in items]


@router.post("/{project_id}/items", response_model=ActionResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    project_id: int,
    body: QTOItemCreate,
    project_repo: ProjectRepository = Depends(get_project_repository),
    item_repo: QTOItemRepository = Depends(get_qto_item_repository),
    user: SessionUser = Depends(get_current_user),
):
    item_id = qto_item_service.create_item(project_repo, item_repo, project_id, body, user)
    return ActionResponse(message="QTO Item added successfully!", project_id=project_id, qto_item_id=item_id)


@router.put("/items/{item_id}", response_model=ActionResponse)
def update_item(
    item_id: int,
    body: QTOItemUpdate,
    project_repo: ProjectRepository = Depends(get_project_repository),
    item_repo: QTOItemRepository = Depends(get_qto_item_repository),
    user: SessionUser = Depends(get_current_user),
):
    item = qto_item_service.update_item(project_repo, item_repo, item_id, body, user)
    return ActionResponse(message="QTO Item updated successfully!", project_id=item.project_id, qto_item_id=item_id)


@router.delete("/items/{item_id}", response_model=ActionResponse)
def delete_item(
    item_id: int,
    project_repo: ProjectRepository = Depends(get_project_repository),
    item_repo: QTOItemRepository = Depends(get_qto_item_repository),
    user: SessionUser = Depends(get_current_user),
):
    project_id = qto_item_service.delete_item(project_repo, item_repo, item_id, user)
    return ActionResponse(message="QTO Item deleted successfully.", project_id=project_id)
