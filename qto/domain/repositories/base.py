"""
Repository contract shared by projects and QTO items.
"""

from typing import Any, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Single-entity reads and writes, each committed on its own.

    Implementations do no access checks; those belong to the services.
    Storage failures surface as ``StorageError``.
    """

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by ID."""
        ...

    def create(self, obj_in: Any) -> T:
        """Create a new entity."""
        ...

    def update(self, db_obj: T, obj_in: Any) -> T:
        """Update an existing entity."""
        ...

    def delete(self, db_obj: T) -> None:
        """Delete an entity."""
        ...
