"""PostgreSQL catalog reader."""

from typing import List

from ..codegen.core.config import ConfigurationError
from ..codegen.core.schema import ColumnFact, EnumFact
from ..codegen.languages.typescript.types import POSTGRES_TYPE_TABLE, TypeMappingTable
from ..logging_config import get_logger
from .base import CatalogError, Database

logger = get_logger(__name__)


TABLES_SQL = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = :schema
      AND table_type IN ('BASE TABLE', 'VIEW')
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
    SELECT t.typname AS name, e.enumlabel AS value
    FROM pg_catalog.pg_type t
    JOIN pg_catalog.pg_enum e ON t.oid = e.enumtypid
    JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
    WHERE n.nspname = :schema
    ORDER BY t.typname ASC, e.enumsortorder ASC
"""

# enum_name is set when the column type, or its array element type, is an
# enum declared in the same schema
COLUMNS_SQL = """
    SELECT c.column_name,
           c.udt_name,
           c.is_nullable,
           c.column_default IS NOT NULL AS has_default,
           et.typname AS enum_name
    FROM information_schema.columns c
    LEFT JOIN pg_catalog.pg_namespace un ON un.nspname = c.udt_schema
    LEFT JOIN pg_catalog.pg_type ut
           ON ut.typname = c.udt_name AND ut.typnamespace = un.oid
    LEFT JOIN pg_catalog.pg_type et
           ON et.oid = CASE WHEN ut.typcategory = 'A' THEN ut.typelem ELSE ut.oid END
          AND et.typtype = 'e'
          AND et.typnamespace = (
              SELECT oid FROM pg_catalog.pg_namespace WHERE nspname = :schema
          )
    WHERE c.table_name = :table AND c.table_schema = :schema
    ORDER BY c.ordinal_position
"""


class PostgresDatabase(Database):
    """Reads tables, columns and enums from a PostgreSQL catalog."""

    driver_scheme = "postgresql+psycopg"
    url_schemes = ("postgres", "postgresql")

    @property
    def type_table(self) -> TypeMappingTable:
        return POSTGRES_TYPE_TABLE

    def default_schema(self) -> str:
        return "public"

    def list_tables(self, schema: str) -> List[str]:
        rows = self._fetch(TABLES_SQL, {"schema": schema})
        if not rows and not self._fetch(SCHEMA_EXISTS_SQL, {"schema": schema}):
            raise CatalogError(f"Schema not found: {schema}")
        tables = [row["table_name"] for row in rows]
        logger.info("Found %d tables in schema %s", len(tables), schema)
        return tables

    def list_enums(self, schema: str) -> List[EnumFact]:
        members: dict = {}
        for row in self._fetch(ENUMS_SQL, {"schema": schema}):
            members.setdefault(row["name"], []).append(row["value"])
        return [EnumFact(name=name, members=tuple(values)) for name, values in members.items()]

    def columns_of(self, table: str, schema: str) -> List[ColumnFact]:
        rows = self._fetch(COLUMNS_SQL, {"table": table, "schema": schema})
        if not rows and not self._fetch(TABLE_EXISTS_SQL, {"table": table, "schema": schema}):
            raise ConfigurationError(f"Table not found: {schema}.{table}")

        return [
            ColumnFact(
                name=row["column_name"],
                sql_type=row["udt_name"],
                is_nullable=row["is_nullable"] == "YES",
                has_default=bool(row["has_default"]),
                enum_type_ref=row["enum_name"],
            )
            for row in rows
        ]
