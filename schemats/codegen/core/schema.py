"""
Core schema representation for code generation.

Catalog facts as read from a database, and the structured per-table
values the generators build from them.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ColumnFact:
    """A single column as reported by the catalog."""

    name: str
    sql_type: str
    is_nullable: bool = False
    has_default: bool = False
    # Name of the enumerated type this column (or its array element) uses
    enum_type_ref: Optional[str] = None


@dataclass(frozen=True)
class EnumFact:
    """An enumerated type and its members in catalog declaration order."""

    name: str
    members: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ColumnMember:
    """A column resolved to its normalized name and TypeScript type."""

    name: str
    ts_type: str
    is_nullable: bool
    has_default: bool

    @property
    def insertably_optional(self) -> bool:
        return self.is_nullable or self.has_default

    @property
    def selectable_type(self) -> str:
        return f"{self.ts_type} | null" if self.is_nullable else self.ts_type

    @property
    def whereable_type(self) -> str:
        return f"{self.ts_type} | SQLFragment"

    @property
    def insertable_type(self) -> str:
        parts = [self.selectable_type]
        if self.insertably_optional:
            parts.append("DefaultType")
        parts.append("SQLFragment")
        return " | ".join(parts)

    # Updatable members share the Insertable value domain, all optional
    updatable_type = insertable_type


@dataclass(frozen=True)
class TableTypeBundle:
    """All generated declarations for one table."""

    table_name: str       # raw catalog name
    namespace: str        # normalized name used for the namespace and Table literal
    members: Tuple[ColumnMember, ...] = ()
    text: str = ""

    @property
    def column_names(self) -> List[str]:
        return [member.name for member in self.members]


@dataclass(frozen=True)
class SchemaSnapshot:
    """Everything read from the catalog for one run."""

    schema: str
    tables: Tuple[str, ...]
    enums: Tuple[EnumFact, ...] = ()
    columns: Tuple[Tuple[ColumnFact, ...], ...] = field(default_factory=tuple)
