"""
Error taxonomy for the apartment registry.

Core layers (repositories, import/export services) raise these exceptions.
The service facade converts them into Result failures with matching codes.
"""


class ApartmentRegistryError(Exception):
    """Base class for all registry errors"""

    code = "REGISTRY_ERROR"


class ValidationError(ApartmentRegistryError):
    """Caller-supplied data violates an invariant (e.g. empty apartment ID)"""

    code = "VALIDATION_ERROR"


class StorageError(ApartmentRegistryError):
    """The persistence layer failed to open, read or write"""

    code = "STORAGE_ERROR"


class DataImportError(ApartmentRegistryError):
    """A bulk source could not be opened, parsed or applied"""

    code = "IMPORT_ERROR"


class DataExportError(ApartmentRegistryError):
    """A bulk destination could not be created or written"""

    code = "EXPORT_ERROR"
