"""
SQLAlchemy Implementation of Project Repository.
"""

from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from qto.core.exceptions import ConflictError, StorageError
from qto.domain.models.project import Project
from qto.domain.models.qto_item import QTOItem
from qto.domain.repositories.project_repository import ProjectRepository
from qto.infrastructure.repositories.base_repository import SQLAlchemyRepository

PROJECT_NUMBER_CONFLICT = "Project Number must be unique."


class SQLAlchemyProjectRepository(SQLAlchemyRepository[Project], ProjectRepository):
    """Project repository implementation using SQLAlchemy."""

    def _translate_error(self, error: SQLAlchemyError) -> Exception:
        if isinstance(error, IntegrityError) and "project_number" in str(error.orig):
            return ConflictError(
                PROJECT_NUMBER_CONFLICT,
                details={"project_number": "This Project Number is already in use."},
            )
        return StorageError()

    def list_all(self) -> List[Project]:
        with self._storage_errors("list_all"):
            return (
                self.db.query(Project)
                .order_by(Project.created_at.desc(), Project.id.desc())
                .all()
            )

    def list_by_owner(self, owner_id: int) -> List[Project]:
        with self._storage_errors("list_by_owner"):
            return (
                self.db.query(Project)
                .filter(Project.created_by_id == owner_id)
                .order_by(Project.created_at.desc(), Project.id.desc())
                .all()
            )

    def get_by_number(self, project_number: str) -> Optional[Project]:
        with self._storage_errors("get_by_number"):
            return self.db.query(Project).filter(Project.project_number == project_number).first()

    def delete_with_items(self, db_obj: Project) -> int:
        with self._storage_errors("delete_with_items"):
            deleted_items = (
                self.db.query(QTOItem)
                .filter(QTOItem.project_id == db_obj.id)
                .delete(synchronize_session=False)
            )
            self.db.delete(db_obj)
            self.db.commit()
            return deleted_items
