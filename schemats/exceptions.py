"""Base exception types shared across schemats."""


class SchematsError(Exception):
    """Base exception for every fatal schemats error."""

    pass


class UnmappedTypeWarning(UserWarning):
    """Emitted when a column's SQL type has no explicit TypeScript mapping."""

    pass
