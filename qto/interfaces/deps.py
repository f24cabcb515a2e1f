"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from qto.domain.models.project import Project
from qto.domain.models.qto_item import QTOItem
from qto.domain.repositories.project_repository import ProjectRepository
from qto.domain.repositories.qto_item_repository import QTOItemRepository
from qto.infrastructure.database import get_db
from qto.infrastructure.repositories.project_repository import SQLAlchemyProjectRepository
from qto.infrastructure.repositories.qto_item_repository import SQLAlchemyQTOItemRepository


def get_project_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    """Get project repository instance."""
    return SQLAlchemyProjectRepository(db, Project)


def get_qto_item_repository(db: Session = Depends(get_db)) -> QTOItemRepository:
    """Get QTO item repository instance."""
    return SQLAlchemyQTOItemRepository(db, QTOItem)
