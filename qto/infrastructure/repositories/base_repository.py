"""
SQLAlchemy implementation of the Base Repository.
"""

from contextlib import contextmanager
from typing import Any, Generic, Optional, Type, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qto.core.exceptions import StorageError
from qto.domain.repositories.base import BaseRepository
from qto.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = structlog.get_logger(__name__)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models.

    Each write commits on its own; there is no transaction spanning calls.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @contextmanager
    def _storage_errors(self, operation: str):
        """Roll back and re-raise store failures as StorageError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Storage operation failed",
                model=self.model.__name__,
                operation=operation,
                error=str(e),
            )
            raise self._translate_error(e) from e

    def _translate_error(self, error: SQLAlchemyError) -> Exception:
        return StorageError()

    @staticmethod
    def _as_dict(obj_in: Any) -> dict:
        if hasattr(obj_in, "model_dump"):
            return obj_in.model_dump(exclude_unset=True)
        return dict(obj_in)

    def get_by_id(self, id: int) -> Optional[ModelType]:
        with self._storage_errors("get_by_id"):
            return self.db.query(self.model).filter(self.model.id == id).first()

    def create(self, obj_in: Any) -> ModelType:
        with self._storage_errors("create"):
            db_obj = self.model(**self._as_dict(obj_in))
            self.db.add(db_obj)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        with self._storage_errors("update"):
            for field, value in self._as_dict(obj_in).items():
                if hasattr(db_obj, field):
                    setattr(db_obj, field, value)

            self.db.add(db_obj)
            self.db.commit()
            self.db.refresh(db_obj)
            return db_obj

    def delete(self, db_obj: ModelType) -> None:
        with self._storage_errors("delete"):
            self.db.delete(db_obj)
            self.db.commit()
