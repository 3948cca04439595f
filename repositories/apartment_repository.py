"""
ApartmentRepository - Data access layer for Apartment entities
Owns every persisted apartment record; returns detached ApartmentRecord values
"""

from typing import Iterator, List, Optional
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from repositories.base_repository import BaseRepository, PaginationParams, PaginatedResult
from apartment_database import Apartment, ApartmentRecord
from services.common.errors import ValidationError
import logging

logger = logging.getLogger(__name__)


class ApartmentRepository(BaseRepository[Apartment]):
    """Repository for Apartment data access"""

    # Rows fetched per round trip when streaming the whole table
    ITER_BATCH_SIZE = 500

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, Apartment)

    def upsert(self, record: ApartmentRecord, commit: bool = True) -> ApartmentRecord:
        """
        Insert a new apartment or replace the owner/resident of an existing one.

        The resident is normalized and the same_flag recomputed here, whatever
        the caller passed in.

        Args:
            record: Apartment to store
            commit: Commit immediately. Bulk imports pass False and commit once
                at the end so the whole file lands in one transaction.

        Returns:
            The record exactly as stored

        Raises:
            ValidationError: If the apartment ID is empty
            StorageError: If the database operation fails
        """
        if not record.id:
            raise ValidationError("Apartment ID cannot be empty")

        stored = record.normalized()
        apartment = self.get_entity(stored.id)

        try:
            if apartment is None:
                apartment = Apartment(
                    id=stored.id,
                    owner=stored.owner,
                    resident=stored.resident,
                    same_flag=stored.same_flag
                )
                self.session.add(apartment)
                action = "Inserted"
            else:
                apartment.owner = stored.owner
                apartment.resident = stored.resident
                apartment.same_flag = stored.same_flag
                action = "Updated"

            self.session.flush()
            if commit:
                self.session.commit()
        except SQLAlchemyError as e:
            raise self._storage_error(f"saving apartment {stored.id!r}", e) from e

        logger.debug(f"{action} apartment {stored.id!r}")
        return stored

    def get_by_id(self, apartment_id: str) -> Optional[ApartmentRecord]:
        """
        Get apartment by ID.

        Returns:
            ApartmentRecord or None if not found
        """
        apartment = self.get_entity(apartment_id)
        return apartment.to_record() if apartment is not None else None

    def get_by_position(self, index: int) -> Optional[ApartmentRecord]:
        """
        Get the apartment at a zero-based position in ascending-ID order.

        Only the requested row is loaded, so list views can page through the
        table one item at a time.

        Args:
            index: Zero-based position

        Returns:
            ApartmentRecord, or None if index is out of range
        """
        if index < 0:
            return None
        try:
            apartment = self.session.query(Apartment)\
                .order_by(Apartment.id)\
                .offset(index)\
                .limit(1)\
                .first()
        except SQLAlchemyError as e:
            raise self._storage_error(f"getting apartment at position {index}", e) from e
        return apartment.to_record() if apartment is not None else None

    def iter_ordered(self) -> Iterator[ApartmentRecord]:
        """
        Yield every stored apartment in ascending-ID order.

        Rows are streamed in batches rather than loaded all at once.
        """
        try:
            query = self.session.query(Apartment)\
                .order_by(Apartment.id)\
                .yield_per(self.ITER_BATCH_SIZE)
            for apartment in query:
                yield apartment.to_record()
        except SQLAlchemyError as e:
            raise self._storage_error("reading apartments", e) from e

    def get_page(self, pagination: PaginationParams) -> PaginatedResult[ApartmentRecord]:
        """Get one page of apartments in ascending-ID order."""
        page = self.get_paginated(pagination, order_by='id')
        page.items = [apartment.to_record() for apartment in page.items]
        return page

    def search(self, query: str) -> List[ApartmentRecord]:
        """
        Search apartments by ID, owner or resident.

        Args:
            query: Search query string (case-insensitive substring)

        Returns:
            Matching apartments in ascending-ID order
        """
        if not query:
            return []

        search_filter = or_(
            Apartment.id.ilike(f'%{query}%'),
            Apartment.owner.ilike(f'%{query}%'),
            Apartment.resident.ilike(f'%{query}%')
        )

        try:
            apartments = self.session.query(Apartment)\
                .filter(search_filter)\
                .order_by(Apartment.id)\
                .all()
        except SQLAlchemyError as e:
            raise self._storage_error(f"searching apartments for {query!r}", e) from e
        return [apartment.to_record() for apartment in apartments]
