"""
Lookup resolution for typed reference fields.

Type, gender and area fields store a reference id. Formatters turn the id
into the display name through a resolver passed in by the caller.
"""

from enum import Enum
from typing import Any, Mapping, Optional, Protocol


class ReferenceKind(str, Enum):
    """Lookup tables that reference fields point into."""

    AUTHOR_TYPE = "author_type"
    GENDER = "gender"
    AREA = "area"
    EDITION_FORMAT = "edition_format"
    EDITION_STATUS = "edition_status"
    EDITION_GROUP_TYPE = "edition_group_type"
    PUBLISHER_TYPE = "publisher_type"
    WORK_TYPE = "work_type"
    IDENTIFIER_TYPE = "identifier_type"
    LANGUAGE = "language"


class ReferenceResolver(Protocol):
    """Resolves a reference id to its display name."""

    def resolve(self, reference: ReferenceKind, ref_id: Any) -> Optional[str]:
        ...


class StaticReferenceResolver:
    """
    Resolver over preloaded lookup tables.

    Example:
        >>> resolver = StaticReferenceResolver({
        ...     ReferenceKind.GENDER: {1: "Male", 2: "Female"},
        ... })
        >>> resolver.resolve(ReferenceKind.GENDER, 2)
        'Female'
    """

    def __init__(self, tables: Optional[Mapping[Any, Mapping[Any, str]]] = None):
        self._tables: dict[ReferenceKind, dict[str, str]] = {}
        for reference, entries in (tables or {}).items():
            self.register(ReferenceKind(reference), entries)

    def register(self, reference: ReferenceKind, entries: Mapping[Any, str]) -> None:
        """Add or replace entries of one lookup table."""
        table = self._tables.setdefault(reference, {})
        for ref_id, name in entries.items():
            # Ids arrive as ints from the database and as strings from JSON
            table[str(ref_id)] = name

    def resolve(self, reference: ReferenceKind, ref_id: Any) -> Optional[str]:
        if ref_id is None:
            return None
        return self._tables.get(reference, {}).get(str(ref_id))
