"""
Service Registry - Wires the apartment repository and services for one app

Services are built on first use and then reused, so every CLI command in an
app shares one ApartmentService.
"""
from typing import Dict, Any, Callable


class ServiceRegistry:
    """Name -> service lookup with lazily run factories."""

    def __init__(self):
        self._services: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[['ServiceRegistry'], Any]] = {}

    def register_factory(self, name: str, factory: Callable[['ServiceRegistry'], Any]) -> None:
        """
        Store a factory that builds the service on the first get().

        Args:
            name: Service identifier
            factory: Called with this registry, so it can get() its own dependencies
        """
        self._factories[name] = factory

    def get(self, name: str) -> Any:
        """
        Raises:
            ValueError: If nothing is registered under name
        """
        if name not in self._services:
            if name not in self._factories:
                raise ValueError(f"Service '{name}' is not registered")
            self._services[name] = self._factories[name](self)
        return self._services[name]


def create_service_registry(session_factory: Callable[[], Any],
                            export_column_width: int) -> ServiceRegistry:
    """
    Create the registry with every apartment service wired up.

    Args:
        session_factory: Returns the SQLAlchemy session repositories use
        export_column_width: Spreadsheet column width for exports

    Returns:
        Configured ServiceRegistry instance
    """
    from repositories.apartment_repository import ApartmentRepository
    from services.apartment_export_service import ApartmentExportService
    from services.apartment_import_service import ApartmentImportService
    from services.apartment_service import ApartmentService

    registry = ServiceRegistry()

    registry.register_factory(
        'apartment_repository',
        lambda r: ApartmentRepository(session_factory())
    )
    registry.register_factory(
        'apartment_import',
        lambda r: ApartmentImportService(r.get('apartment_repository'))
    )
    registry.register_factory(
        'apartment_export',
        lambda r: ApartmentExportService(
            r.get('apartment_repository'),
            column_width=export_column_width
        )
    )
    registry.register_factory(
        'apartment',
        lambda r: ApartmentService(
            apartment_repository=r.get('apartment_repository'),
            import_service=r.get('apartment_import'),
            export_service=r.get('apartment_export')
        )
    )

    return registry
