"""
Access control policy.

Pure decision functions, no I/O. Every service call that reads or writes a
Project or QTO item goes through one of the named policies below before it
touches the repository.

Two ownership rules coexist and are kept distinct:

- ``can_access``: Admin, or the single owner of the resource. Used for
  projects, for creating/listing items of a project, and for export/import.
- ``can_modify_qto_item``: Admin, or the item's creator, or the owner of the
  item's parent project. Used for item update/delete only. Whether the wider
  rule is intended has not been confirmed, so it is not folded into
  ``can_access``.
"""

from typing import Optional

from qto.domain.enums import UserRole
from qto.domain.schemas.auth import SessionUser

PROJECT_CREATOR_ROLES = frozenset(
    {UserRole.ADMIN.value, UserRole.PROJECT_MANAGER.value, UserRole.DATA_ENTRY.value}
)


def is_admin(actor: SessionUser) -> bool:
    return actor.role == UserRole.ADMIN.value


def can_access(actor: SessionUser, resource_owner_id: Optional[int]) -> bool:
    """Admin always; anyone else only on resources they own."""
    if is_admin(actor):
        return True
    return resource_owner_id is not None and actor.user_id == resource_owner_id


def can_create_project(role: str) -> bool:
    return role in PROJECT_CREATOR_ROLES


def can_modify_qto_item(
    actor: SessionUser,
    item_owner_id: Optional[int],
    project_owner_id: Optional[int],
) -> bool:
    """Admin, the item's creator, or the parent project's owner."""
    return can_access(actor, item_owner_id) or can_access(actor, project_owner_id)
