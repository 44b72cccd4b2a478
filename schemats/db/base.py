"""
Schema adapter interface.

Every backend exposes the same capability set: default schema, table
listing, enum listing and per-table column facts. Catalog reads go through
a lazily created SQLAlchemy engine; any driver failure is fatal.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..codegen.core.schema import ColumnFact, EnumFact
from ..codegen.languages.typescript.types import TypeMappingTable
from ..exceptions import SchematsError
from ..logging_config import get_logger

logger = get_logger(__name__)


class CatalogError(SchematsError):
    """Backend unreachable, or schema/table missing from the catalog."""

    pass


class Database(ABC):
    """Abstract catalog reader for one database backend."""

    #: SQLAlchemy dialect+driver used for connection strings without one
    driver_scheme: str = ""

    #: Connection-string schemes this backend accepts
    url_schemes: tuple = ()

    def __init__(self, connection_string: str, engine: Optional[Engine] = None):
        """
        Initialize the adapter.

        Args:
            connection_string: Database URL as given by the caller
            engine: Optional pre-built SQLAlchemy engine
        """
        self.connection_string = connection_string
        self._engine = engine
        self._engine_lock = threading.Lock()

    @property
    @abstractmethod
    def type_table(self) -> TypeMappingTable:
        """Return the type mapping table for this backend."""
        pass

    @property
    def engine(self) -> Engine:
        """Get or create the SQLAlchemy engine (lazy, thread-safe)."""
        if self._engine is None:
            with self._engine_lock:
                if self._engine is None:
                    logger.debug("Creating engine for %s", self.driver_scheme)
                    try:
                        self._engine = create_engine(self.sqlalchemy_url())
                    except (SQLAlchemyError, ImportError) as e:
                        raise CatalogError(f"Cannot create database engine: {e}") from e
        return self._engine

    def sqlalchemy_url(self) -> str:
        """Translate the connection string into a SQLAlchemy URL."""
        scheme, separator, rest = self.connection_string.partition("://")
        if not separator:
            raise CatalogError(f"Invalid connection string: {self.connection_string}")
        if "+" in scheme:
            return self.connection_string
        return f"{self.driver_scheme}://{rest}"

    def _fetch(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Run a catalog query and return its rows as dicts."""
        try:
            with self.engine.connect() as conn:
                result = conn.execute(text(sql), params or {})
                return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            raise CatalogError(f"Catalog query failed: {e}") from e

    @abstractmethod
    def default_schema(self) -> str:
        """Return the schema used when none is given."""
        pass

    @abstractmethod
    def list_tables(self, schema: str) -> List[str]:
        """Return table names of a schema in catalog order."""
        pass

    @abstractmethod
    def list_enums(self, schema: str) -> List[EnumFact]:
        """Return the enumerated types of a schema."""
        pass

    @abstractmethod
    def columns_of(self, table: str, schema: str) -> List[ColumnFact]:
        """Return a table's columns in declaration order."""
        pass

    def close(self) -> None:
        """Dispose of the engine, if one was created."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
