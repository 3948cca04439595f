# tests/conftest.py
"""
This file contains shared fixtures for the pytest test suite.
Fixtures defined here are automatically available to all tests.

Every test function gets its own application with a fresh in-memory
database, so import/rollback tests never see each other's rows.
"""
import pytest
from app import create_app
from extensions import db
from apartment_database import ApartmentRecord
from repositories.apartment_repository import ApartmentRepository
from services.apartment_export_service import ApartmentExportService
from services.apartment_import_service import ApartmentImportService
from services.apartment_service import ApartmentService

# Import file fixtures
from tests.fixtures.file_fixtures import (
    write_csv,
    write_xlsx
)


def create_test_apartment(**kwargs):
    """
    Helper function to create apartment records with default values.
    Used across multiple test files.
    """
    defaults = {
        'id': '101',
        'owner': 'Alice',
        'resident': 'Bob'
    }
    defaults.update(kwargs)
    return ApartmentRecord(**defaults)


@pytest.fixture(scope='function')
def app():
    """
    A fixture that creates a new Flask application instance backed by an
    in-memory SQLite database and keeps its application context pushed.
    """
    app = create_app(config_name='testing')

    with app.app_context():
        yield app

        # --- Teardown ---
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """The database session used by repositories in the current app context."""
    return db.session


@pytest.fixture
def apartment_repository(db_session):
    """ApartmentRepository bound to the test session"""
    return ApartmentRepository(db_session)


@pytest.fixture
def import_service(apartment_repository):
    return ApartmentImportService(apartment_repository)


@pytest.fixture
def export_service(apartment_repository):
    return ApartmentExportService(apartment_repository)


@pytest.fixture
def apartment_service(apartment_repository, import_service, export_service):
    return ApartmentService(
        apartment_repository=apartment_repository,
        import_service=import_service,
        export_service=export_service
    )


@pytest.fixture
def sample_apartments(apartment_repository):
    """Store a handful of apartments, deliberately saved out of ID order"""
    records = [
        create_test_apartment(id='203', owner='Carol', resident='Carol'),
        create_test_apartment(id='101', owner='Alice', resident='Bob'),
        create_test_apartment(id='102', owner='', resident=''),
        create_test_apartment(id='150', owner='Dave', resident=''),
    ]
    return [apartment_repository.upsert(record) for record in records]
