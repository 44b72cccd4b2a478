"""
TypeScript code generator module.

Generates table interface namespaces, enum literal unions and CRUD
signature interfaces from catalog facts.
"""

from .generator import (
    CORE_IMPORTS,
    SIGNATURE_INTERFACES,
    UNION_KINDS,
    TypeScriptGenerator,
    create_typescript_generator,
)
from .naming import create_typescript_sanitizer, normalize_name
from .types import (
    MYSQL_TYPE_TABLE,
    POSTGRES_TYPE_TABLE,
    TypeMapper,
    TypeMappingTable,
)

__all__ = [
    "CORE_IMPORTS",
    "SIGNATURE_INTERFACES",
    "UNION_KINDS",
    "TypeScriptGenerator",
    "create_typescript_generator",
    "create_typescript_sanitizer",
    "normalize_name",
    "MYSQL_TYPE_TABLE",
    "POSTGRES_TYPE_TABLE",
    "TypeMapper",
    "TypeMappingTable",
]
