"""
SQLAlchemy Implementation of QTO Item Repository.
"""

from typing import List

from qto.domain.models.qto_item import QTOItem
from qto.domain.repositories.qto_item_repository import QTOItemRepository
from qto.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyQTOItemRepository(SQLAlchemyRepository[QTOItem], QTOItemRepository):
    """QTO item repository implementation using SQLAlchemy."""

    def list_for_project(self, project_id: int) -> List[QTOItem]:
        with self._storage_errors("list_for_project"):
            items = (
                self.db.query(QTOItem)
                .filter(QTOItem.project_id == project_id)
                .order_by(QTOItem.created_at.desc(), QTOItem.id.desc())
                .all()
            )
        for item in items:
            item.is_boq_item = bool(item.is_boq_item)
        return items
