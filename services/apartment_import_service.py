"""
Apartment Import Service - Transactional bulk load from CSV or XLSX files
"""

import time
import logging
from dataclasses import dataclass
from typing import List

from apartment_database import ApartmentRecord
from logging_config import performance_logger
from repositories.apartment_repository import ApartmentRepository
from services.common.errors import ApartmentRegistryError, DataImportError
from services.enums import TabularFormat
from services.tabular_io import detect_format, read_rows

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """Outcome of a successful bulk import"""
    source: str
    file_format: TabularFormat
    imported: int = 0
    skipped: int = 0


class ApartmentImportService:
    """
    Bulk loader for apartment records.

    Each file is applied inside a single transaction:
    - every valid row is upserted (later rows for the same ID win)
    - rows with fewer than REQUIRED_COLUMNS columns are skipped
    - any row-level failure rolls back the whole file
    """

    # id, owner, resident; extra columns are ignored
    REQUIRED_COLUMNS = 3

    def __init__(self, apartment_repository: ApartmentRepository):
        """
        Initialize with the apartment repository.

        Args:
            apartment_repository: Repository all rows are written through
        """
        if not apartment_repository:
            raise ValueError("ApartmentRepository must be provided via dependency injection")
        self.apartment_repository = apartment_repository

    def import_file(self, path: str) -> ImportSummary:
        """
        Import apartments from a CSV or XLSX file.

        Args:
            path: Source file; the extension selects the parser

        Returns:
            ImportSummary with imported/skipped row counts

        Raises:
            DataImportError: If the file is unsupported or unreadable, has no
                header row, is a spreadsheet without data rows, or if any row
                fails (nothing from the file is kept)
        """
        file_format = detect_format(path)
        if file_format is None:
            raise DataImportError(f"unsupported file format: {path}")

        started = time.monotonic()
        rows = read_rows(path, file_format)
        summary = self.import_rows(rows, source=path, file_format=file_format)

        performance_logger.log_bulk_operation(
            operation='import',
            file_format=file_format.value,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
            record_count=summary.imported,
            skipped=summary.skipped
        )
        return summary

    def import_rows(self, rows: List[List[str]], source: str,
                    file_format: TabularFormat) -> ImportSummary:
        """
        Apply already-parsed rows (header first) in one transaction.

        Both file formats end up here, so row handling is identical for them;
        only the header-only rule differs (a CSV with just a header imports
        nothing, a spreadsheet without data rows is rejected).
        """
        if not rows:
            raise DataImportError(f"no header row in {source}")
        if file_format == TabularFormat.XLSX and len(rows) < 2:
            # A header-only CSV is an empty load; a spreadsheet needs data rows
            raise DataImportError(f"not enough rows in {source}: the spreadsheet has no data rows")

        summary = ImportSummary(source=source, file_format=file_format)
        logger.info(f"Importing apartments from {source} ({len(rows) - 1} data rows)")

        try:
            for row_num, row in enumerate(rows[1:], start=2):  # Start at 2 (header is 1)
                if len(row) < self.REQUIRED_COLUMNS:
                    summary.skipped += 1
                    logger.debug(f"Row {row_num}: skipped, only {len(row)} columns")
                    continue

                record = ApartmentRecord(id=row[0], owner=row[1], resident=row[2])
                try:
                    self.apartment_repository.upsert(record, commit=False)
                except ApartmentRegistryError as e:
                    raise DataImportError(f"Row {row_num}: {e}") from e
                summary.imported += 1

            self.apartment_repository.commit()
        except ApartmentRegistryError as e:
            self.apartment_repository.rollback()
            logger.error(f"Import of {source} rolled back: {e}")
            if isinstance(e, DataImportError):
                raise
            raise DataImportError(f"Import of {source} failed: {e}") from e

        logger.info(
            f"Imported {summary.imported} apartments from {source}, "
            f"skipped {summary.skipped} malformed rows"
        )
        return summary
