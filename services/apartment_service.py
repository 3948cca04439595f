"""
ApartmentService - Interactive apartment management with repository pattern and Result pattern
"""

from typing import List, Optional

from apartment_database import ApartmentRecord
from repositories.apartment_repository import ApartmentRepository
from repositories.base_repository import PaginationParams
from services.apartment_export_service import ApartmentExportService, ExportSummary
from services.apartment_import_service import ApartmentImportService, ImportSummary
from services.common.errors import ApartmentRegistryError
from services.common.result import Result, PagedResult
import logging

logger = logging.getLogger(__name__)


class ApartmentService:
    """
    Service the presentation layer talks to.

    Every method returns a Result; registry exceptions raised below this
    layer become failures carrying the exception's error code.
    """

    def __init__(self,
                 apartment_repository: Optional[ApartmentRepository] = None,
                 import_service: Optional[ApartmentImportService] = None,
                 export_service: Optional[ApartmentExportService] = None):
        """
        Initialize with repository and bulk services.

        Args:
            apartment_repository: ApartmentRepository for data access
            import_service: Bulk loader (defaults to one over the same repository)
            export_service: Bulk exporter (defaults to one over the same repository)
        """
        if not apartment_repository:
            raise ValueError("ApartmentRepository must be provided via dependency injection")
        self.apartment_repository = apartment_repository
        self.import_service = import_service or ApartmentImportService(apartment_repository)
        self.export_service = export_service or ApartmentExportService(apartment_repository)

    # Single-record operations

    def save_apartment(self, record: ApartmentRecord) -> Result[ApartmentRecord]:
        """
        Create or update an apartment.

        Args:
            record: The apartment being edited

        Returns:
            Result containing the record as stored (resident normalized,
            same_flag recomputed)
        """
        if not record.id:
            return Result.failure("Apartment ID cannot be empty", code="VALIDATION_ERROR")

        try:
            stored = self.apartment_repository.upsert(record)
        except ApartmentRegistryError as e:
            logger.error(f"Failed to save apartment {record.id!r}: {e}")
            return Result.from_error(e)
        return Result.success(stored)

    def delete_apartment(self, apartment_id: str) -> Result[bool]:
        """
        Delete an apartment by ID.

        Returns:
            Result containing True if a record was removed, False if the ID
            was not stored
        """
        if not apartment_id:
            return Result.failure("Please select an apartment to delete", code="VALIDATION_ERROR")

        try:
            deleted = self.apartment_repository.delete_by_id(apartment_id)
        except ApartmentRegistryError as e:
            logger.error(f"Failed to delete apartment {apartment_id!r}: {e}")
            return Result.from_error(e)
        return Result.success(deleted)

    def get_apartment(self, apartment_id: str) -> Result[ApartmentRecord]:
        """Get one apartment by ID."""
        try:
            record = self.apartment_repository.get_by_id(apartment_id)
        except ApartmentRegistryError as e:
            return Result.from_error(e)
        if record is None:
            return Result.failure(f"Apartment {apartment_id} not found", code="NOT_FOUND")
        return Result.success(record)

    def get_apartment_at(self, index: int) -> Result[ApartmentRecord]:
        """Get the apartment at a zero-based position in list order."""
        try:
            record = self.apartment_repository.get_by_position(index)
        except ApartmentRegistryError as e:
            return Result.from_error(e)
        if record is None:
            return Result.failure(f"No apartment at position {index}", code="NOT_FOUND")
        return Result.success(record)

    def count_apartments(self) -> Result[int]:
        try:
            return Result.success(self.apartment_repository.count())
        except ApartmentRegistryError as e:
            return Result.from_error(e)

    def list_apartments(self, page: int = 1, per_page: int = 20) -> Result[List[ApartmentRecord]]:
        """
        List apartments one page at a time in ascending-ID order.

        Returns:
            PagedResult with the page's records and pagination metadata
        """
        if page < 1 or per_page < 1:
            return Result.failure("Page and page size must be positive", code="VALIDATION_ERROR")

        try:
            result = self.apartment_repository.get_page(PaginationParams(page=page, per_page=per_page))
        except ApartmentRegistryError as e:
            return Result.from_error(e)
        return PagedResult.paginated(
            data=result.items,
            total=result.total,
            page=result.page,
            per_page=result.per_page
        )

    def search_apartments(self, query: str) -> Result[List[ApartmentRecord]]:
        """Search apartments by ID, owner or resident."""
        try:
            return Result.success(self.apartment_repository.search(query))
        except ApartmentRegistryError as e:
            return Result.from_error(e)

    # Bulk operations

    def import_apartments(self, path: str) -> Result[ImportSummary]:
        """Import a CSV or XLSX file; nothing is kept if any row fails."""
        try:
            summary = self.import_service.import_file(path)
        except ApartmentRegistryError as e:
            logger.error(f"Import from {path} failed: {e}")
            return Result.from_error(e)
        return Result.success(summary)

    def export_apartments(self, path: str) -> Result[ExportSummary]:
        """Export every apartment to a CSV or XLSX file."""
        try:
            summary = self.export_service.export_file(path)
        except ApartmentRegistryError as e:
            logger.error(f"Export to {path} failed: {e}")
            return Result.from_error(e)
        return Result.success(summary)
