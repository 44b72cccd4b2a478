"""
Schema adapters.

One Database implementation per backend family, all exposing the same
catalog capability set.
"""

from .base import CatalogError, Database
from .postgres import PostgresDatabase
from .mysql import MysqlDatabase, parse_enum_members

__all__ = [
    "CatalogError",
    "Database",
    "PostgresDatabase",
    "MysqlDatabase",
    "parse_enum_members",
]
