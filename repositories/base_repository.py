"""
Base Repository - Abstract base class for all repositories
Implements common database operations following the Repository Pattern
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, List, Optional, Any, Type
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from dataclasses import dataclass
import logging

from services.common.errors import StorageError

logger = logging.getLogger(__name__)

# Type variable for model classes
T = TypeVar('T')


@dataclass
class PaginationParams:
    """Parameters for pagination"""
    page: int = 1
    per_page: int = 20

    @property
    def offset(self) -> int:
        """Calculate offset for query"""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        """Get limit for query"""
        return self.per_page


@dataclass
class PaginatedResult(Generic[T]):
    """Result of a paginated query"""
    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def pages(self) -> int:
        """Calculate total number of pages"""
        return (self.total + self.per_page - 1) // self.per_page if self.per_page > 0 else 0

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository with common data access operations.

    Database failures are never hidden behind empty results: every
    SQLAlchemyError rolls the session back and surfaces as a StorageError.
    """

    def __init__(self, session: Session, model_class: Type[T]):
        """
        Initialize repository with database session and model class.

        Args:
            session: SQLAlchemy database session
            model_class: The model class this repository manages
        """
        self.session = session
        self.model_class = model_class

    # READ Operations

    def get_entity(self, entity_id: Any) -> Optional[T]:
        """
        Get the mapped entity by primary key.

        Args:
            entity_id: Primary key value

        Returns:
            Entity instance or None if not found

        Raises:
            StorageError: If the database cannot be read
        """
        try:
            return self.session.get(self.model_class, entity_id)
        except SQLAlchemyError as e:
            raise self._storage_error(f"getting {self.model_class.__name__} {entity_id!r}", e) from e

    def count(self) -> int:
        """
        Count stored entities.

        Raises:
            StorageError: If the database cannot be read
        """
        try:
            return self.session.query(self.model_class).count()
        except SQLAlchemyError as e:
            raise self._storage_error(f"counting {self.model_class.__name__}", e) from e

    def get_paginated(self,
                      pagination: PaginationParams,
                      order_by: str = 'id') -> PaginatedResult[T]:
        """
        Get one page of entities in ascending order of one column.

        Args:
            pagination: Pagination parameters
            order_by: Field name to order by

        Returns:
            PaginatedResult with items and metadata
        """
        try:
            query = self.session.query(self.model_class)
            query = query.order_by(getattr(self.model_class, order_by))

            total = query.count()
            items = query.offset(pagination.offset).limit(pagination.limit).all()

            return PaginatedResult(
                items=items,
                total=total,
                page=pagination.page,
                per_page=pagination.per_page
            )
        except SQLAlchemyError as e:
            raise self._storage_error(f"paginating {self.model_class.__name__}", e) from e

    # DELETE Operations

    def delete_by_id(self, entity_id: Any, commit: bool = True) -> bool:
        """
        Delete entity by primary key.

        Deleting a key that is not stored is a no-op.

        Args:
            entity_id: Primary key value
            commit: Commit immediately (False leaves the change flushed only)

        Returns:
            True if a row was removed, False if nothing matched
        """
        entity = self.get_entity(entity_id)
        if entity is None:
            logger.debug(f"No {self.model_class.__name__} with id {entity_id!r} to delete")
            return False
        try:
            self.session.delete(entity)
            self.session.flush()
            if commit:
                self.session.commit()
            logger.debug(f"Deleted {self.model_class.__name__} with id {entity_id!r}")
            return True
        except SQLAlchemyError as e:
            raise self._storage_error(f"deleting {self.model_class.__name__} {entity_id!r}", e) from e

    # Transaction Management

    def commit(self) -> None:
        """Commit the current transaction."""
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._storage_error("committing transaction", e) from e

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.session.rollback()

    def flush(self) -> None:
        """Flush pending changes without committing."""
        try:
            self.session.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("flushing session", e) from e

    # Helper Methods

    def _storage_error(self, action: str, error: SQLAlchemyError) -> StorageError:
        """Log, roll back, and build the StorageError for a failed operation."""
        logger.error(f"Error {action}: {error}")
        self.session.rollback()
        return StorageError(f"Database error while {action}: {error}")

    # Abstract Methods (to be implemented by subclasses)

    @abstractmethod
    def search(self, query: str) -> List[Any]:
        """
        Search entities by text query.

        Args:
            query: Search query string

        Returns:
            List of matching entities
        """
        pass
