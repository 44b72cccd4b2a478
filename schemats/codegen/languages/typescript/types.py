"""
TypeScript type system for code generation.

Maps backend-reported column type descriptors to TypeScript types, one
mapping table per database dialect.
"""

import warnings
from dataclasses import dataclass, field
from typing import Dict, Optional, Mapping

from ....exceptions import UnmappedTypeWarning
from ....logging_config import get_logger
from ...core.config import Options

logger = get_logger(__name__)


UNKNOWN_TYPE = "any"
JSON_ARRAY_TYPE = "JSONArray"


def _expand(groups: Dict[str, tuple]) -> Dict[str, str]:
    return {sql_type: ts_type for ts_type, sql_types in groups.items() for sql_type in sql_types}


POSTGRES_TYPES = _expand({
    "string": (
        "bpchar", "char", "varchar", "text", "citext", "uuid", "bytea",
        "inet", "time", "timetz", "interval", "name",
    ),
    "number": ("int2", "int4", "int8", "float4", "float8", "numeric", "money", "oid"),
    "boolean": ("bool",),
    "JSONValue": ("json", "jsonb"),
    "Date": ("date", "timestamp", "timestamptz"),
})

MYSQL_TYPES = _expand({
    "string": (
        "char", "varchar", "text", "tinytext", "mediumtext", "longtext",
        "time", "geometry", "set", "enum",
    ),
    "number": (
        "integer", "int", "smallint", "mediumint", "bigint", "double",
        "decimal", "numeric", "float", "year",
    ),
    "boolean": ("tinyint",),
    "JSONValue": ("json",),
    "Date": ("date", "datetime", "timestamp"),
    "Buffer": ("tinyblob", "mediumblob", "longblob", "blob", "binary", "varbinary", "bit"),
})


@dataclass(frozen=True)
class TypeMappingTable:
    """Static mapping from one dialect's column types to TypeScript types."""

    dialect: str
    scalars: Mapping[str, str] = field(default_factory=dict)
    # Prefix marking an array-of-T type descriptor (PostgreSQL: "_int4")
    array_prefix: Optional[str] = None

    def array_element(self, sql_type: str) -> Optional[str]:
        """Return the element type of an array descriptor, or None."""
        if self.array_prefix and sql_type.startswith(self.array_prefix):
            element = sql_type[len(self.array_prefix):]
            return element or None
        return None


POSTGRES_TYPE_TABLE = TypeMappingTable("postgres", POSTGRES_TYPES, array_prefix="_")
MYSQL_TYPE_TABLE = TypeMappingTable("mysql", MYSQL_TYPES)


class TypeMapper:
    """
    Resolves column type descriptors to TypeScript types.

    Total over every descriptor: unknown scalars fall back to ``any`` with an
    UnmappedTypeWarning instead of failing the run.
    """

    def __init__(self, table: TypeMappingTable, options: Optional[Options] = None):
        self.table = table
        self.options = options or Options()

    def resolve(self, sql_type: str, enum_ref: Optional[str] = None) -> str:
        """
        Map a column type descriptor to a TypeScript type.

        Args:
            sql_type: Backend type descriptor (udt_name / data_type)
            enum_ref: Enumerated type referenced by the column, if any

        Returns:
            TypeScript type expression
        """
        overrides = self.options.type_overrides
        if sql_type in overrides:
            return overrides[sql_type]

        if enum_ref and sql_type == enum_ref:
            return self.options.transform_type_name(enum_ref)

        element = self.table.array_element(sql_type)
        if element is not None:
            element_type = self.resolve(element, enum_ref)
            if element_type == "JSONValue":
                return JSON_ARRAY_TYPE
            return f"Array<{element_type}>"

        if enum_ref:
            return self.options.transform_type_name(enum_ref)

        if sql_type in self.table.scalars:
            return self.table.scalars[sql_type]

        message = (
            f"Type [{sql_type}] has been mapped to [{UNKNOWN_TYPE}] "
            f"because no specific type has been found."
        )
        logger.warning(message)
        warnings.warn(message, UnmappedTypeWarning, stacklevel=2)
        return UNKNOWN_TYPE
