"""
Schema assembly.

Resolves the schema and table set, reads every table's columns (concurrently
when allowed), generates one bundle per table in resolved order, and hands
the composed module to the output composer.
"""

from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional, Sequence, Union

from ..__version__ import __version__
from ..db.base import Database
from ..logging_config import get_logger
from ..registry import get_database
from .core.config import Options
from .core.formatter import Formatter
from .core.output import build_provenance, compose
from .core.schema import ColumnFact, SchemaSnapshot
from .languages.typescript.generator import TypeScriptGenerator

logger = get_logger(__name__)


@contextmanager
def _open_database(db: Union[Database, str]) -> Iterator[Database]:
    """Yield an adapter; one built from a connection string is closed afterwards."""
    if isinstance(db, str):
        with get_database(db) as owned:
            yield owned
    else:
        yield db


def fetch_columns(db: Database, tables: Sequence[str], schema: str,
                  max_workers: int = 1) -> List[List[ColumnFact]]:
    """
    Read the columns of every table.

    Results are returned in the order of ``tables`` regardless of which
    read finishes first. The first failure propagates.
    """
    if max_workers <= 1 or len(tables) <= 1:
        return [db.columns_of(table, schema) for table in tables]

    workers = min(max_workers, len(tables))
    logger.debug("Reading %d tables with %d workers", len(tables), workers)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="schemats") as executor:
        return list(executor.map(lambda table: db.columns_of(table, schema), tables))


def read_snapshot(db: Database, tables: Optional[Sequence[str]] = None,
                  schema: Optional[str] = None,
                  options: Optional[Options] = None) -> SchemaSnapshot:
    """
    Read everything a run needs from the catalog.

    Explicit tables are used exactly as given, including order.
    """
    options = options or Options()
    schema = schema or db.default_schema()

    resolved_tables = tuple(tables) if tables else tuple(db.list_tables(schema))
    logger.info("Generating %d tables from schema %s", len(resolved_tables), schema)

    enums = tuple(db.list_enums(schema))
    columns = fetch_columns(db, resolved_tables, schema, options.max_workers)

    return SchemaSnapshot(
        schema=schema,
        tables=resolved_tables,
        enums=enums,
        columns=tuple(tuple(table_columns) for table_columns in columns),
    )


def render_snapshot(snapshot: SchemaSnapshot, generator: TypeScriptGenerator) -> str:
    """Render the module body for a snapshot."""
    bundles = [
        generator.build_table_bundle(table, columns)
        for table, columns in zip(snapshot.tables, snapshot.columns)
    ]
    return generator.generate(bundles, snapshot.enums)


def typescript_of_table(db: Union[Database, str], table: str, schema: str,
                        options: Optional[Options] = None) -> str:
    """Generate the interface namespace for a single table."""
    with _open_database(db) as database:
        generator = TypeScriptGenerator(options or Options(), database.type_table)
        return generator.generate_table_interface(table, database.columns_of(table, schema))


def typescript_of_schema(db: Union[Database, str],
                         tables: Optional[Sequence[str]] = None,
                         schema: Optional[str] = None,
                         options: Optional[Options] = None,
                         *,
                         formatter: Optional[Formatter] = None,
                         version: str = __version__,
                         now: Optional[datetime] = None) -> str:
    """
    Generate the complete TypeScript module for a schema.

    Args:
        db: Database adapter or connection string
        tables: Tables to generate (default: every table of the schema)
        schema: Schema name (default: the backend's default schema)
        options: Generation options
        formatter: Formatter override (default: chosen by options.formatter)
        version: Tool version recorded in the header
        now: Timestamp recorded in the header (default: current time)

    Returns:
        Formatted module text
    """
    options = options or Options()

    with _open_database(db) as database:
        snapshot = read_snapshot(database, tables, schema, options)
        generator = TypeScriptGenerator(options, database.type_table)
        body = render_snapshot(snapshot, generator)
        connection_string = database.connection_string

    provenance = None
    if options.write_header:
        provenance = build_provenance(
            connection_string, list(tables or []), schema, options, version, now
        )

    return compose(body, options, provenance, formatter)
