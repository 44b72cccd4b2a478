"""
Generator contract.

A generator turns per-table column facts and enum facts into one module
body. Subclasses supply the per-table, enum and aggregate blocks; the base
class fixes the order in which they are joined.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from ...exceptions import SchematsError
from ...logging_config import get_logger
from .config import Options
from .schema import ColumnFact, EnumFact, TableTypeBundle
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)

T = TypeVar("T")


class GeneratorError(SchematsError):
    """Raised when a generator cannot produce its output."""

    pass


def keep_last_by_name(items: Sequence[T], name_of: Callable[[T], str]) -> List[T]:
    """
    Collapse items whose generated names collide.

    The last item wins and takes the position of the first one.
    """
    merged: Dict[str, T] = {}
    for item in items:
        name = name_of(item)
        if name in merged:
            logger.warning("Name collision on %s: keeping the last definition", name)
        merged[name] = item
    return list(merged.values())


class CodeGenerator(ABC):
    """Base class for module generators."""

    def __init__(self, options: Optional[Options] = None):
        self.options = options or Options()
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        pass

    def get_template_directory(self) -> Optional[Path]:
        """Directory holding this generator's templates (None: no templates)."""
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Template engine, created on first use."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_template_directory())
        return self._template_engine

    @abstractmethod
    def build_table_bundle(self, table_name: str,
                           columns: Sequence[ColumnFact]) -> TableTypeBundle:
        """
        Build every declaration for a single table.

        Args:
            table_name: Raw catalog table name
            columns: Column facts in declaration order

        Returns:
            Structured bundle including its rendered text
        """
        pass

    @abstractmethod
    def generate_enum_types(self, enums: Sequence[EnumFact]) -> str:
        pass

    @abstractmethod
    def generate_aggregates(self, bundles: Sequence[TableTypeBundle]) -> str:
        """Declarations spanning all tables, in bundle order."""
        pass

    def get_import_statements(self) -> List[str]:
        return []

    def generate(self, bundles: Sequence[TableTypeBundle], enums: Sequence[EnumFact]) -> str:
        """
        Join the module body.

        Order: imports, enum block, table blocks (in the given order),
        aggregate block. Blocks are separated by one blank line. Tables whose
        namespaces collide are collapsed.
        """
        bundles = keep_last_by_name(bundles, lambda bundle: bundle.namespace)
        blocks = list(self.get_import_statements())
        blocks.append(self.generate_enum_types(enums))
        blocks.extend(bundle.text for bundle in bundles)
        blocks.append(self.generate_aggregates(bundles))
        return "\n".join(block.strip("\n") + "\n" for block in blocks)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)
