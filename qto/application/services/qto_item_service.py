"""QTO item service — line items of a project, with cost recomputation."""

from typing import Any, Dict, List, Optional

import structlog

from qto.core.exceptions import AuthorizationError, EntityNotFoundException, ValidationError
from qto.domain import access_policy
from qto.domain.costing import compute_total_cost
from qto.domain.models.project import Project
from qto.domain.models.qto_item import QTOItem
from qto.domain.repositories.project_repository import ProjectRepository
from qto.domain.repositories.qto_item_repository import QTOItemRepository
from qto.domain.schemas.auth import SessionUser
from qto.domain.schemas.qto_item import QTOItemCreate, QTOItemUpdate

logger = structlog.get_logger(__name__)

ITEM_NOT_FOUND = "QTO Item not found."

# Fields a caller may set; total_cost is derived and never accepted from input
EDITABLE_FIELDS = (
    "csi_code",
    "item_description",
    "quantity",
    "unit",
    "unit_rate",
    "notes",
    "is_boq_item",
    "boq_division",
)


def _validate_description(description: Optional[str]) -> str:
    description = (description or "").strip()
    if not description:
        raise ValidationError(
            "Item Description is required.",
            details={"item_description": "Item Description is required."},
        )
    return description


def load_project_for_items(
    project_repo: ProjectRepository,
    project_id: int,
    actor: SessionUser,
) -> Project:
    """Parent project, if the actor owns it (or is Admin)."""
    project = project_repo.get_by_id(project_id)
    if project is None:
        raise EntityNotFoundException("Project not found.")
    if not access_policy.can_access(actor, project.created_by_id):
        logger.warning(
            "Project item access denied",
            project_id=project_id,
            user_id=actor.user_id,
            role=actor.role,
        )
        raise AuthorizationError("You do not have permission to access items of this project.")
    return project


def build_item_values(project_id: int, data: Dict[str, Any], actor: SessionUser) -> Dict[str, Any]:
    """Column values for a new item. Shared by the form path and the spreadsheet import."""
    values = {field: data.get(field) for field in EDITABLE_FIELDS}
    values["item_description"] = _validate_description(values["item_description"])
    values["is_boq_item"] = bool(values["is_boq_item"])
    values["total_cost"] = compute_total_cost(values["quantity"], values["unit_rate"])
    values["project_id"] = project_id
    values["created_by_id"] = actor.user_id
    return values


def create_item(
    project_repo: ProjectRepository,
    item_repo: QTOItemRepository,
    project_id: int,
    data: QTOItemCreate,
    actor: SessionUser,
) -> int:
    load_project_for_items(project_repo, project_id, actor)

    values = build_item_values(project_id, data.model_dump(), actor)
    item = item_repo.create(values)
    logger.info("QTO item created", item_id=item.id, project_id=project_id, user_id=actor.user_id)
    return item.id


def list_items(
    project_repo: ProjectRepository,
    item_repo: QTOItemRepository,
    project_id: int,
    actor: SessionUser,
) -> List[QTOItem]:
    load_project_for_items(project_repo, project_id, actor)
    return item_repo.list_for_project(project_id)


def _load_modifiable(
    project_repo: ProjectRepository,
    item_repo: QTOItemRepository,
    item_id: int,
    actor: SessionUser,
    action: str,
) -> QTOItem:
    item = item_repo.get_by_id(item_id)
    if item is None:
        raise EntityNotFoundException(ITEM_NOT_FOUND)

    project = project_repo.get_by_id(item.project_id)
    if project is None:
        raise EntityNotFoundException("Associated project not found.")

    if not access_policy.can_modify_qto_item(actor, item.created_by_id, project.created_by_id):
        logger.warning(
            "QTO item access denied",
            item_id=item_id,
            action=action,
            user_id=actor.user_id,
            role=actor.role,
        )
        raise AuthorizationError(f"You do not have permission to {action} this item.")
    return item


def update_item(
    project_repo: ProjectRepository,
    item_repo: QTOItemRepository,
    item_id: int,
    data: QTOItemUpdate,
    actor: SessionUser,
) -> QTOItem:
    item = _load_modifiable(project_repo, item_repo, item_id, actor, "update")

    values = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if field in EDITABLE_FIELDS
    }
    if "item_description" in values:
        values["item_description"] = _validate_description(values["item_description"])
    if "is_boq_item" in values:
        values["is_boq_item"] = bool(values["is_boq_item"])

    quantity = values.get("quantity", item.quantity)
    unit_rate = values.get("unit_rate", item.unit_rate)
    values["total_cost"] = compute_total_cost(quantity, unit_rate)

    item = item_repo.update(item, values)
    logger.info("QTO item updated", item_id=item.id, user_id=actor.user_id)
    return item


def delete_item(
    project_repo: ProjectRepository,
    item_repo: QTOItemRepository,
    item_id: int,
    actor: SessionUser,
) -> int:
    """Delete an item; returns its project id."""
    item = _load_modifiable(project_repo, item_repo, item_id, actor, "delete")
    project_id = item.project_id
    item_repo.delete(item)
    logger.info("QTO item deleted", item_id=item_id, project_id=project_id, user_id=actor.user_id)
    return project_id
