"""Project service — validation and access checks around the project repository."""

from typing import List, Optional

import structlog

from qto.config import get_settings
from qto.core.exceptions import (
    AuthorizationError,
    ConflictError,
    EntityNotFoundException,
    ValidationError,
)
from qto.domain import access_policy
from qto.domain.enums import ProjectStatus
from qto.domain.models.project import Project
from qto.domain.repositories.project_repository import ProjectRepository
from qto.domain.schemas.auth import SessionUser
from qto.domain.schemas.project import ProjectCreate, ProjectUpdate
from qto.infrastructure.repositories.project_repository import PROJECT_NUMBER_CONFLICT

settings = get_settings()
logger = structlog.get_logger(__name__)

PROJECT_NOT_FOUND = "Project not found or you do not have permission to access it."


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _validate_name(project_name: Optional[str]) -> str:
    name = (project_name or "").strip()
    if not name:
        raise ValidationError(
            "Project Name is required.",
            details={"project_name": "Project Name is required."},
        )
    return name


def _ensure_number_available(
    repo: ProjectRepository,
    project_number: Optional[str],
    exclude_id: Optional[int] = None,
) -> None:
    if project_number is None:
        return
    existing = repo.get_by_number(project_number)
    if existing and existing.id != exclude_id:
        raise ConflictError(
            PROJECT_NUMBER_CONFLICT,
            details={"project_number": "This Project Number is already in use."},
        )


def _load_owned(repo: ProjectRepository, project_id: int, actor: SessionUser) -> Project:
    """Load a project the actor may act on. Denial looks the same as absence."""
    project = repo.get_by_id(project_id)
    if project is None or not access_policy.can_access(actor, project.created_by_id):
        if project is not None:
            logger.warning(
                "Project access denied",
                project_id=project_id,
                user_id=actor.user_id,
                role=actor.role,
            )
        raise EntityNotFoundException(PROJECT_NOT_FOUND)
    return project


def create_project(repo: ProjectRepository, data: ProjectCreate, actor: SessionUser) -> int:
    if not access_policy.can_create_project(actor.role):
        raise AuthorizationError("You do not have permission to create projects.")

    values = data.model_dump()
    values["project_name"] = _validate_name(data.project_name)
    values["project_number"] = _blank_to_none(data.project_number)
    values["project_status"] = (data.project_status or ProjectStatus.PLANNING).value
    values["currency"] = _blank_to_none(data.currency) or settings.DEFAULT_CURRENCY
    values["created_by_id"] = actor.user_id

    _ensure_number_available(repo, values["project_number"])

    project = repo.create(values)
    logger.info("Project created", project_id=project.id, user_id=actor.user_id)
    return project.id


def list_projects(repo: ProjectRepository, actor: SessionUser) -> List[Project]:
    if access_policy.is_admin(actor):
        return repo.list_all()
    return repo.list_by_owner(actor.user_id)


def get_project(repo: ProjectRepository, project_id: int, actor: SessionUser) -> Project:
    return _load_owned(repo, project_id, actor)


def update_project(
    repo: ProjectRepository,
    project_id: int,
    data: ProjectUpdate,
    actor: SessionUser,
) -> Project:
    project = _load_owned(repo, project_id, actor)

    values = data.model_dump(exclude_unset=True)
    values.pop("created_by_id", None)

    if "project_name" in values:
        values["project_name"] = _validate_name(values["project_name"])
    else:
        _validate_name(project.project_name)
    if "project_number" in values:
        values["project_number"] = _blank_to_none(values["project_number"])
        _ensure_number_available(repo, values["project_number"], exclude_id=project.id)
    if "project_status" in values:
        values["project_status"] = (values["project_status"] or ProjectStatus.PLANNING).value
    if "currency" in values:
        values["currency"] = _blank_to_none(values["currency"]) or settings.DEFAULT_CURRENCY

    project = repo.update(project, values)
    logger.info("Project updated", project_id=project.id, user_id=actor.user_id)
    return project


def delete_project(repo: ProjectRepository, project_id: int, actor: SessionUser) -> None:
    project = _load_owned(repo, project_id, actor)
    deleted_items = repo.delete_with_items(project)
    logger.info(
        "Project deleted",
        project_id=project_id,
        user_id=actor.user_id,
        deleted_items=deleted_items,
    )
