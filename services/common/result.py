"""
Result Pattern Implementation

ApartmentService never raises to its callers; each method hands back a Result
that either carries the data or the error message and code the CLI reports.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass

from services.common.errors import ApartmentRegistryError

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """
    Outcome of a service call.

        result = service.get_apartment('101')
        if result.is_success:
            print(result.data.label())
        else:
            print(result.error_code, result.error)
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def failure(cls,
                error: str,
                code: Optional[str] = None,
                metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """
        Args:
            error: Message shown to the operator
            code: Machine-readable code, e.g. VALIDATION_ERROR or NOT_FOUND
            metadata: Extra details about the failure
        """
        return cls(success=False, error=error, error_code=code, metadata=metadata)

    @classmethod
    def from_error(cls, exc: ApartmentRegistryError,
                   metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """Turn a registry exception into a failure carrying the exception's code."""
        return cls.failure(str(exc), code=exc.code, metadata=metadata)

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_failure(self) -> bool:
        return not self.success

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.success(data={self.data!r})"
        return f"Result.failure(error={self.error!r}, code={self.error_code!r})"


@dataclass
class PagedResult(Generic[T], Result[T]):
    """Successful Result holding one page of a listing plus its position."""

    total: Optional[int] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    total_pages: Optional[int] = None

    @classmethod
    def paginated(cls,
                  data: T,
                  total: int,
                  page: int,
                  per_page: int,
                  metadata: Optional[Dict[str, Any]] = None) -> 'PagedResult[T]':
        """
        Args:
            data: Items on this page
            total: Number of items across all pages
            page: One-based page number
            per_page: Page size
        """
        # Ceiling division; an empty listing has zero pages
        total_pages = -(-total // per_page) if per_page > 0 else 0
        return cls(
            success=True,
            data=data,
            metadata=metadata,
            total=total,
            page=page,
            per_page=per_page,
            total_pages=total_pages
        )
