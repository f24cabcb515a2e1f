"""
QTO Item Repository Interface.
"""

from typing import List

from qto.domain.repositories.base import BaseRepository
from qto.domain.models.qto_item import QTOItem


class QTOItemRepository(BaseRepository[QTOItem]):
    """Interface for QTO item operations scoped to a project."""

    def list_for_project(self, project_id: int) -> List[QTOItem]:
        """Items of a project, newest first."""
        ...
