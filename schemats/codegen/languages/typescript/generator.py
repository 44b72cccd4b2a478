"""
TypeScript code generator implementation.

Generates one namespace of interfaces per table, literal-union types for
enumerated types, and the cross-table union and CRUD signature types.
"""

from typing import Dict, List, Optional, Sequence
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import Options
from ...core.generator import CodeGenerator, GeneratorError, keep_last_by_name
from ...core.schema import ColumnFact, ColumnMember, EnumFact, TableTypeBundle
from ...core.templates import quote_string
from .types import TypeMapper, TypeMappingTable, POSTGRES_TYPE_TABLE

logger = get_logger(__name__)


CORE_MODULE = "./core"

CORE_IMPORTS = (
    "DefaultType",
    "JSONValue",
    "JSONArray",
    "SQLFragment",
    "GenericSQLExpression",
    "ColumnNames",
    "ColumnValues",
    "Queryable",
    "UpsertAction",
)

# Aggregate unions, in emission order
UNION_KINDS = ("Selectable", "Whereable", "Insertable", "Updatable", "Table", "Column")

SIGNATURE_INTERFACES = (
    "InsertSignatures",
    "UpsertSignatures",
    "UpdateSignatures",
    "DeleteSignatures",
    "SelectSignatures",
    "SelectOneSignatures",
    "CountSignatures",
)

EMPTY_UNION = "never"


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript table interfaces."""

    def __init__(self, options: Optional[Options] = None,
                 type_table: TypeMappingTable = POSTGRES_TYPE_TABLE):
        """Initialize TypeScript generator with options and a dialect type table."""
        super().__init__(options)
        self.type_mapper = TypeMapper(type_table, self.options)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def _render(self, template_name: str, context: Dict) -> str:
        if not self.template_exists(template_name):
            raise GeneratorError(f"{template_name} template not found")
        return self.render_template(template_name, context)

    def get_import_statements(self) -> List[str]:
        """Get the static import block."""
        return [self._render("imports.ts.j2", {"symbols": CORE_IMPORTS, "module": CORE_MODULE})]

    def build_column_member(self, column: ColumnFact) -> ColumnMember:
        """Resolve a column fact to its normalized name and TypeScript type."""
        return ColumnMember(
            name=self.options.transform_column_name(column.name),
            ts_type=self.type_mapper.resolve(column.sql_type, column.enum_type_ref),
            is_nullable=column.is_nullable,
            has_default=column.has_default,
        )

    def build_table_bundle(self, table_name: str,
                           columns: Sequence[ColumnFact]) -> TableTypeBundle:
        """Build the namespace of declarations for a single table."""
        namespace = self.options.transform_type_name(table_name)
        members = tuple(keep_last_by_name(
            [self.build_column_member(column) for column in columns],
            lambda member: member.name,
        ))

        if not members:
            logger.info("Table %s has no columns - generating empty interfaces", table_name)

        column_union = " | ".join(quote_string(m.name, '"') for m in members) or EMPTY_UNION
        text = self._render(
            "table.ts.j2",
            {
                "namespace": namespace,
                "table_literal": quote_string(namespace, '"'),
                "members": members,
                "column_union": column_union,
            },
        )
        logger.debug("Generated namespace %s (%d columns)", namespace, len(members))
        return TableTypeBundle(
            table_name=table_name, namespace=namespace, members=members, text=text
        )

    def generate_table_interface(self, table_name: str,
                                 columns: Sequence[ColumnFact]) -> str:
        """Generate the interface text for a single table."""
        return self.build_table_bundle(table_name, columns).text

    def generate_enum_types(self, enums: Sequence[EnumFact]) -> str:
        """Generate one literal-union type per enumerated type."""
        enum_data = []
        for enum in keep_last_by_name(enums, lambda e: self.options.transform_type_name(e.name)):
            union = " | ".join(quote_string(member) for member in enum.members)
            enum_data.append(
                {
                    "name": self.options.transform_type_name(enum.name),
                    "union": union or EMPTY_UNION,
                }
            )
        return self._render("enums.ts.j2", {"enums": enum_data})

    def generate_aggregates(self, bundles: Sequence[TableTypeBundle]) -> str:
        """Generate cross-table unions and CRUD signature interfaces."""
        names = [bundle.namespace for bundle in bundles]
        unions = [
            (kind, " | ".join(f"{name}.{kind}" for name in names) or EMPTY_UNION)
            for kind in UNION_KINDS
        ]
        all_tables = ", ".join(f"{name}.Table" for name in names)
        return self._render(
            "aggregates.ts.j2",
            {"names": names, "unions": unions, "all_tables": all_tables},
        )


def create_typescript_generator(options: Optional[Options] = None,
                                type_table: TypeMappingTable = POSTGRES_TYPE_TABLE
                                ) -> TypeScriptGenerator:
    """Create a TypeScript generator with default options."""
    return TypeScriptGenerator(options or Options(), type_table)
