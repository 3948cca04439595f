"""
Apartment Export Service - Writes every apartment to a CSV or XLSX file
"""

import time
import logging
from dataclasses import dataclass
from typing import Iterator, List

from logging_config import performance_logger
from repositories.apartment_repository import ApartmentRepository
from services.common.errors import DataExportError
from services.enums import TabularFormat
from services.tabular_io import DEFAULT_COLUMN_WIDTH, detect_format, write_rows

logger = logging.getLogger(__name__)

EXPORT_HEADER = ["Apartment ID", "Owner", "Resident", "Owner is Resident"]


@dataclass
class ExportSummary:
    """Outcome of a successful export"""
    destination: str
    file_format: TabularFormat
    exported: int = 0


class ApartmentExportService:
    """Bulk exporter for apartment records, in ascending-ID order"""

    def __init__(self, apartment_repository: ApartmentRepository,
                 column_width: int = DEFAULT_COLUMN_WIDTH):
        if not apartment_repository:
            raise ValueError("ApartmentRepository must be provided via dependency injection")
        self.apartment_repository = apartment_repository
        self.column_width = column_width

    def export_file(self, path: str) -> ExportSummary:
        """
        Export all apartments to a CSV or XLSX file.

        Args:
            path: Destination file; the extension selects the writer

        Returns:
            ExportSummary with the number of rows written

        Raises:
            DataExportError: If the format is unsupported or the file cannot be written
            StorageError: If the apartments cannot be read
        """
        file_format = detect_format(path)
        if file_format is None:
            raise DataExportError(f"unsupported export format: {path}")

        started = time.monotonic()
        exported = write_rows(
            path,
            file_format,
            EXPORT_HEADER,
            self._export_rows(),
            column_width=self.column_width
        )

        performance_logger.log_bulk_operation(
            operation='export',
            file_format=file_format.value,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
            record_count=exported
        )
        logger.info(f"Exported {exported} apartments to {path}")
        return ExportSummary(destination=path, file_format=file_format, exported=exported)

    def _export_rows(self) -> Iterator[List[str]]:
        for record in self.apartment_repository.iter_ordered():
            yield [
                record.id,
                record.owner,
                record.resident,
                "Yes" if record.same_flag else "No"
            ]
