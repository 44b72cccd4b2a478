"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError
from .schema import ColumnFact, ColumnMember, EnumFact, SchemaSnapshot, TableTypeBundle
from .naming import NameSanitizer, NamingCase
from .config import Options, ConfigManager, ConfigurationError, load_options
from .templates import TemplateEngine, TemplateError, create_template_engine
from .formatter import (
    BuiltinFormatter,
    Formatter,
    FormatterOptions,
    FormattingError,
    TsfmtFormatter,
    get_formatter,
)
from .output import Provenance, build_provenance, compose

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    # Schema system - catalog facts and generated bundles
    "ColumnFact",
    "ColumnMember",
    "EnumFact",
    "SchemaSnapshot",
    "TableTypeBundle",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "Options",
    "ConfigManager",
    "ConfigurationError",
    "load_options",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Formatting and output
    "BuiltinFormatter",
    "Formatter",
    "FormatterOptions",
    "FormattingError",
    "TsfmtFormatter",
    "get_formatter",
    "Provenance",
    "build_provenance",
    "compose",
]
