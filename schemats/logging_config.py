"""Logging configuration for schemats.

Library modules obtain loggers through :func:`get_logger`; the command-line
entry point calls :func:`setup_logging` once to install a rich handler.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "schemats"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the schemats hierarchy.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A standard library logger.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Install a RichHandler on the schemats root logger.

    Args:
        level: Logging level name or number.
        console: Console to log to (defaults to stderr).
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if _configured:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    root.propagate = False
    _configured = True
    root.debug("Logging configured at level %s", logging.getLevelName(root.level))
