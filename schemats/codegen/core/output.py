"""
Output composition.

Prepends the lint directive and the optional provenance header to a
generated module body and hands the result to a formatter.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from ...logging_config import get_logger
from .config import Options
from .formatter import Formatter, FormatterOptions, get_formatter
from .templates import create_template_engine

logger = get_logger(__name__)


OUTPUT_FILENAME = "schema.ts"
TOOL_NAME = "schemats"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TSLINT_DISABLE = "/* tslint:disable */"

HEADER_TEMPLATE_DIR = Path(__file__).parent.parent / "languages" / "typescript" / "templates"

# The composer never edits files and never runs in verify-only mode
COMPOSE_FORMATTER_OPTIONS = FormatterOptions(
    replace=False,
    verify=False,
    tsconfig=True,
    tslint=True,
    editorconfig=True,
    tsfmt=True,
    vscode=False,
)


@dataclass(frozen=True)
class Provenance:
    """Where and when a generated file came from."""

    version: str
    timestamp: str
    command: str


def mask_credentials(connection: str) -> str:
    """Replace any user:password part of a connection URL."""
    return re.sub(r"://.*@", "://username:password@", connection)


def build_command(connection: str, tables: Sequence[str], schema: Optional[str],
                  options: Options) -> str:
    """Reconstruct the command line that reproduces a run."""
    commands = [TOOL_NAME, "generate", "-c", mask_credentials(connection)]
    if options.camel_case:
        commands.append("-C")
    for table in tables:
        commands.extend(["-t", table])
    if schema:
        commands.extend(["-s", schema])
    return " ".join(commands)


def build_provenance(connection: str, tables: Sequence[str], schema: Optional[str],
                     options: Options, version: str,
                     now: Optional[datetime] = None) -> Provenance:
    """
    Build the provenance for a run.

    Args:
        connection: Connection string (credentials are masked)
        tables: Tables requested explicitly on the command line
        schema: Schema requested explicitly, if any
        options: Run options
        version: Tool version to record
        now: Generation time (defaults to the current local time)
    """
    timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return Provenance(
        version=version,
        timestamp=timestamp,
        command=build_command(connection, tables, schema, options),
    )


def render_header(provenance: Provenance) -> str:
    engine = create_template_engine(HEADER_TEMPLATE_DIR)
    return engine.render_template(
        "header.ts.j2",
        {
            "timestamp": provenance.timestamp,
            "version": provenance.version,
            "command": provenance.command,
        },
    )


def compose(body: str, options: Options, provenance: Optional[Provenance] = None,
            formatter: Optional[Formatter] = None,
            filename: str = OUTPUT_FILENAME) -> str:
    """
    Compose the final module text.

    Args:
        body: Generated module body
        options: Run options (header toggle, formatter choice)
        provenance: Header content; required when the header is enabled
        formatter: Formatter to delegate to (defaults to options.formatter)
        filename: Name passed to the formatter

    Returns:
        Exactly what the formatter returns
    """
    text = body
    if options.write_header and provenance is not None:
        text = render_header(provenance) + "\n" + body
    elif options.write_header:
        logger.warning("Header requested but no provenance supplied; omitting header")

    text = TSLINT_DISABLE + "\n\n" + text

    formatter = formatter or get_formatter(options.formatter, options.indent_size)
    return formatter.format(filename, text, COMPOSE_FORMATTER_OPTIONS)
