"""MySQL catalog reader.

MySQL has no named enumerated types; every ``enum``/``set`` column defines
an enum named ``enum_<column>``.
"""

import re
from typing import Dict, List, Tuple

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from ..codegen.core.config import ConfigurationError
from ..codegen.core.schema import ColumnFact, EnumFact
from ..codegen.languages.typescript.types import MYSQL_TYPE_TABLE, TypeMappingTable
from ..logging_config import get_logger
from .base import CatalogError, Database

logger = get_logger(__name__)


ENUM_DATA_TYPES = ("enum", "set")

TABLES_SQL = """
    SELECT table_name AS table_name
    FROM information_schema.tables
    WHERE table_schema = :schema
    ORDER BY table_name
"""

SCHEMA_EXISTS_SQL = """
    SELECT 1 AS found FROM information_schema.schemata WHERE schema_name = :schema
"""

TABLE_EXISTS_SQL = """
    SELECT 1 AS found
    FROM information_schema.tables
    WHERE table_schema = :schema AND table_name = :table
"""

ENUMS_SQL = """
    SELECT column_name AS column_name, column_type AS column_type
    FROM information_schema.columns
    WHERE data_type IN ('enum', 'set') AND table_schema = :schema
    ORDER BY table_name, ordinal_position
"""

COLUMNS_SQL = """
    SELECT column_name AS column_name,
           data_type AS data_type,
           is_nullable AS is_nullable,
           column_default AS column_default
    FROM information_schema.columns
    WHERE table_name = :table AND table_schema = :schema
    ORDER BY ordinal_position
"""

_MEMBER_PATTERN = re.compile(r"'((?:[^'\\]|''|\\.)*)'")


def enum_name_for(column_name: str) -> str:
    return f"enum_{column_name}"


def parse_enum_members(column_type: str) -> Tuple[str, ...]:
    """
    Parse the members of an ``enum('a','b')`` or ``set('a','b')`` column type.

    Quotes may be escaped either by doubling or with a backslash.
    """
    match = re.match(r"^\s*(?:enum|set)\s*\((.*)\)\s*$", column_type, re.IGNORECASE | re.DOTALL)
    if not match:
        raise CatalogError(f"Cannot parse enum definition: {column_type}")
    return tuple(
        re.sub(r"\\(.)", r"\1", member.replace("''", "'"))
        for member in _MEMBER_PATTERN.findall(match.group(1))
    )


class MysqlDatabase(Database):
    """Reads tables, columns and enum columns from a MySQL catalog."""

    driver_scheme = "mysql+pymysql"
    url_schemes = ("mysql",)

    @property
    def type_table(self) -> TypeMappingTable:
        return MYSQL_TYPE_TABLE

    def default_schema(self) -> str:
        try:
            database = make_url(self.sqlalchemy_url()).database
        except ArgumentError as e:
            raise ConfigurationError(f"Invalid connection string: {e}") from e
        if not database:
            raise ConfigurationError(
                "No database named in the connection string and no schema given"
            )
        return database

    def list_tables(self, schema: str) -> List[str]:
        rows = self._fetch(TABLES_SQL, {"schema": schema})
        if not rows and not self._fetch(SCHEMA_EXISTS_SQL, {"schema": schema}):
            raise CatalogError(f"Schema not found: {schema}")
        tables = [row["table_name"] for row in rows]
        logger.info("Found %d tables in schema %s", len(tables), schema)
        return tables

    def list_enums(self, schema: str) -> List[EnumFact]:
        enums: Dict[str, Tuple[str, ...]] = {}
        for row in self._fetch(ENUMS_SQL, {"schema": schema}):
            name = enum_name_for(row["column_name"])
            members = parse_enum_members(row["column_type"])
            if name in enums and enums[name] != members:
                raise CatalogError(
                    "Multiple enums with the same name and contradicting types were found: "
                    f"{row['column_name']}: {list(enums[name])} and {list(members)}"
                )
            enums[name] = members
        return [EnumFact(name=name, members=members) for name, members in enums.items()]

    def columns_of(self, table: str, schema: str) -> List[ColumnFact]:
        rows = self._fetch(COLUMNS_SQL, {"table": table, "schema": schema})
        if not rows and not self._fetch(TABLE_EXISTS_SQL, {"table": table, "schema": schema}):
            raise ConfigurationError(f"Table not found: {schema}.{table}")

        columns = []
        for row in rows:
            data_type = row["data_type"]
            enum_ref = None
            if data_type in ENUM_DATA_TYPES:
                enum_ref = enum_name_for(row["column_name"])
            columns.append(
                ColumnFact(
                    name=row["column_name"],
                    sql_type=data_type,
                    is_nullable=row["is_nullable"] == "YES",
                    has_default=row["column_default"] is not None,
                    enum_type_ref=enum_ref,
                )
            )
        return columns
