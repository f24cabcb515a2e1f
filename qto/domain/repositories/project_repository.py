"""
Project Repository Interface.
Defines specific data access operations for Projects.
"""

from typing import List, Optional

from qto.domain.repositories.base import BaseRepository
from qto.domain.models.project import Project


class ProjectRepository(BaseRepository[Project]):
    """Interface for Project-specific operations."""

    def list_all(self) -> List[Project]:
        """All projects, newest first."""
        ...

    def list_by_owner(self, owner_id: int) -> List[Project]:
        """Projects created by one user, newest first."""
        ...

    def get_by_number(self, project_number: str) -> Optional[Project]:
        """Find a project by its unique project number."""
        ...

    def delete_with_items(self, db_obj: Project) -> int:
        """Delete a project and its QTO items; returns the number of items removed."""
        ...
