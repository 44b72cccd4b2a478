"""
schemats - generate TypeScript interface definitions from a SQL schema.

Reads tables, columns and enumerated types from a PostgreSQL or MySQL
catalog and emits one TypeScript module of typed table interfaces.
"""

from .__version__ import __version__
from .exceptions import SchematsError, UnmappedTypeWarning
from .codegen.core.config import ConfigurationError, Options, load_options
from .codegen.core.formatter import FormattingError
from .codegen.assembler import typescript_of_schema, typescript_of_table
from .db import CatalogError, Database, MysqlDatabase, PostgresDatabase
from .registry import get_database

__all__ = [
    "__version__",
    "SchematsError",
    "UnmappedTypeWarning",
    "CatalogError",
    "ConfigurationError",
    "FormattingError",
    "Options",
    "load_options",
    "Database",
    "PostgresDatabase",
    "MysqlDatabase",
    "get_database",
    "typescript_of_schema",
    "typescript_of_table",
]
