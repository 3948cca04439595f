"""
Occupancy rules for apartment records.

Two pure helpers shared by interactive saves and bulk imports:

- normalize_resident: an empty resident is stored as the VACANT sentinel
- same_flag: whether the owner lives in the apartment

Both are applied at the moment a record is written. A caller-supplied
flag is never trusted.
"""

from typing import Optional

VACANT = "Vacant"


def normalize_resident(resident: Optional[str]) -> str:
    """
    Return the resident value as it must be stored.

    Args:
        resident: Resident name as entered (may be empty or None)

    Returns:
        VACANT for empty input, otherwise the input unchanged

    Example:
        >>> normalize_resident("")
        'Vacant'
    """
    if not resident:
        return VACANT
    return resident


def same_flag(owner: Optional[str], resident: Optional[str]) -> bool:
    """
    Derived "owner is resident" flag.

    True only when the owner is non-empty and equal to the resident.

    Example:
        >>> same_flag("Alice", "Alice")
        True
        >>> same_flag("", "")
        False
    """
    return bool(owner) and owner == resident
