"""
Service layer enums
These enums are used by services and allow them to work without importing database models
"""

from enum import Enum


class TabularFormat(str, Enum):
    """File formats supported for bulk import and export"""
    CSV = 'csv'
    XLSX = 'xlsx'

    @property
    def extension(self) -> str:
        return f'.{self.value}'
