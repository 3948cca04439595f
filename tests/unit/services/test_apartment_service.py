"""
Tests for ApartmentService - Result-returning facade over the repository
and the bulk services
"""

import pytest
from unittest.mock import Mock

from apartment_database import ApartmentRecord
from repositories.apartment_repository import ApartmentRepository
from repositories.base_repository import PaginatedResult
from services.apartment_export_service import ApartmentExportService, ExportSummary
from services.apartment_import_service import ApartmentImportService, ImportSummary
from services.apartment_service import ApartmentService
from services.common.errors import DataExportError, DataImportError, StorageError
from services.enums import TabularFormat
from tests.conftest import create_test_apartment


class TestApartmentServiceWithMocks:
    """Error mapping, checked against a mocked repository"""

    @pytest.fixture
    def mock_repository(self):
        return Mock(spec=ApartmentRepository)

    @pytest.fixture
    def mock_import(self):
        return Mock(spec=ApartmentImportService)

    @pytest.fixture
    def mock_export(self):
        return Mock(spec=ApartmentExportService)

    @pytest.fixture
    def service(self, mock_repository, mock_import, mock_export):
        return ApartmentService(
            apartment_repository=mock_repository,
            import_service=mock_import,
            export_service=mock_export
        )

    def test_requires_repository(self):
        with pytest.raises(ValueError):
            ApartmentService(apartment_repository=None)

    def test_builds_default_bulk_services(self, mock_repository):
        service = ApartmentService(apartment_repository=mock_repository)

        assert service.import_service.apartment_repository is mock_repository
        assert service.export_service.apartment_repository is mock_repository

    def test_save_empty_id_never_reaches_repository(self, service, mock_repository):
        result = service.save_apartment(ApartmentRecord(id='', owner='Alice', resident='Bob'))

        assert result.is_failure
        assert result.error_code == 'VALIDATION_ERROR'
        assert result.error == 'Apartment ID cannot be empty'
        mock_repository.upsert.assert_not_called()

    def test_save_storage_failure(self, service, mock_repository):
        mock_repository.upsert.side_effect = StorageError("Database error while saving apartment '101'")

        result = service.save_apartment(create_test_apartment())

        assert result.is_failure
        assert result.error_code == 'STORAGE_ERROR'

    def test_delete_without_selection(self, service, mock_repository):
        result = service.delete_apartment('')

        assert result.is_failure
        assert result.error == 'Please select an apartment to delete'
        mock_repository.delete_by_id.assert_not_called()

    def test_delete_storage_failure(self, service, mock_repository):
        mock_repository.delete_by_id.side_effect = StorageError("disk full")

        result = service.delete_apartment('101')

        assert result.error_code == 'STORAGE_ERROR'

    def test_count_storage_failure(self, service, mock_repository):
        mock_repository.count.side_effect = StorageError("no such table: apartments")

        result = service.count_apartments()

        assert result.is_failure
        assert "no such table" in result.error

    def test_list_rejects_bad_paging(self, service, mock_repository):
        assert service.list_apartments(page=0).error_code == 'VALIDATION_ERROR'
        assert service.list_apartments(per_page=0).error_code == 'VALIDATION_ERROR'
        mock_repository.get_page.assert_not_called()

    def test_list_returns_paged_result(self, service, mock_repository):
        records = [create_test_apartment(id=str(i)) for i in range(2)]
        mock_repository.get_page.return_value = PaginatedResult(
            items=records, total=5, page=1, per_page=2
        )

        result = service.list_apartments(page=1, per_page=2)

        assert result.is_success
        assert result.data == records
        assert result.total == 5
        assert result.total_pages == 3

    def test_import_failure(self, service, mock_import):
        mock_import.import_file.side_effect = DataImportError("unsupported file format: a.txt")

        result = service.import_apartments('a.txt')

        assert result.is_failure
        assert result.error_code == 'IMPORT_ERROR'
        assert result.error == "unsupported file format: a.txt"

    def test_import_success(self, service, mock_import):
        summary = ImportSummary(source='a.csv', file_format=TabularFormat.CSV, imported=2, skipped=1)
        mock_import.import_file.return_value = summary

        result = service.import_apartments('a.csv')

        assert result.is_success
        assert result.data is summary
        mock_import.import_file.assert_called_once_with('a.csv')

    def test_export_failure(self, service, mock_export):
        mock_export.export_file.side_effect = DataExportError("unsupported export format: a.pdf")

        result = service.export_apartments('a.pdf')

        assert result.error_code == 'EXPORT_ERROR'

    def test_export_storage_failure(self, service, mock_export):
        mock_export.export_file.side_effect = StorageError("database is locked")

        result = service.export_apartments('a.csv')

        assert result.error_code == 'STORAGE_ERROR'


class TestApartmentServiceWithDatabase:
    """End-to-end behaviour against the in-memory database"""

    def test_save_returns_stored_record(self, apartment_service):
        result = apartment_service.save_apartment(
            ApartmentRecord(id='101', owner='Alice', resident='', same_flag=True)
        )

        assert result.is_success
        assert result.data == ApartmentRecord(id='101', owner='Alice', resident='Vacant', same_flag=False)

    def test_get_apartment(self, apartment_service, sample_apartments):
        assert apartment_service.get_apartment('203').data.same_flag is True

        missing = apartment_service.get_apartment('999')
        assert missing.is_failure
        assert missing.error_code == 'NOT_FOUND'

    def test_get_apartment_at(self, apartment_service, sample_apartments):
        assert apartment_service.get_apartment_at(0).data.id == '101'
        assert apartment_service.get_apartment_at(3).data.id == '203'
        assert apartment_service.get_apartment_at(4).error_code == 'NOT_FOUND'
        assert apartment_service.get_apartment_at(-1).error_code == 'NOT_FOUND'

    def test_delete_apartment(self, apartment_service, sample_apartments):
        assert apartment_service.delete_apartment('101').data is True
        assert apartment_service.delete_apartment('101').data is False
        assert apartment_service.count_apartments().data == 3

    def test_list_and_search(self, apartment_service, sample_apartments):
        page = apartment_service.list_apartments(page=1, per_page=2)
        assert [r.id for r in page.data] == ['101', '102']
        assert page.total_pages == 2

        found = apartment_service.search_apartments('dave')
        assert [r.id for r in found.data] == ['150']

    def test_import_then_export(self, apartment_service, write_csv, tmp_path):
        source = write_csv([
            ['Apartment ID', 'Owner', 'Resident'],
            ['2', 'Bob', 'Bob'],
            ['1', 'Alice', ''],
            ['bad row'],
        ])

        imported = apartment_service.import_apartments(source)
        exported = apartment_service.export_apartments(str(tmp_path / 'out.xlsx'))

        assert imported.data.imported == 2
        assert imported.data.skipped == 1
        assert exported.data == ExportSummary(
            destination=str(tmp_path / 'out.xlsx'),
            file_format=TabularFormat.XLSX,
            exported=2
        )

    def test_export_control_character_to_spreadsheet(self, apartment_service, apartment_repository, tmp_path):
        apartment_repository.upsert(create_test_apartment(id='101', owner='Al\x01ice'))
        path = tmp_path / 'out.xlsx'

        result = apartment_service.export_apartments(str(path))

        assert result.is_failure
        assert result.error_code == 'EXPORT_ERROR'
        assert 'row 2' in result.error
        assert not path.exists()
