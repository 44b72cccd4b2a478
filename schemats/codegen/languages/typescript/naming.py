"""
TypeScript-specific naming utilities and sanitization.

Handles TypeScript reserved words and predefined type names.
"""

from ...core.naming import NameSanitizer, NamingCase


# TypeScript reserved words (including strict-mode reserved words)
TYPESCRIPT_RESERVED_WORDS = {
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "implements",
    "interface",
    "let",
    "package",
    "private",
    "protected",
    "public",
    "static",
    "yield",
}

# Predefined type names that cannot be used as type aliases
TYPESCRIPT_BUILTIN_TYPES = {
    "any",
    "bigint",
    "boolean",
    "never",
    "number",
    "object",
    "string",
    "symbol",
    "undefined",
    "unknown",
}


def create_typescript_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for TypeScript."""
    return NameSanitizer(TYPESCRIPT_RESERVED_WORDS, TYPESCRIPT_BUILTIN_TYPES)


_sanitizer = create_typescript_sanitizer()


def normalize_name(name: str, policy: NamingCase = NamingCase.VERBATIM) -> str:
    """Normalize a raw SQL identifier into a valid TypeScript identifier."""
    return _sanitizer.sanitize_name(name, policy)
