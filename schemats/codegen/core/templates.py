"""
Jinja2 rendering for generated TypeScript.

Templates ship next to the generator that owns them.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import BaseLoader, DictLoader, Environment, FileSystemLoader, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError

from ...exceptions import SchematsError


class TemplateError(SchematsError):
    """A template is missing or failed to render."""

    pass


def quote_string(value: str, quote: str = "'") -> str:
    """Render a value as a TypeScript string literal."""
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace(quote, f"\\{quote}")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"{quote}{escaped}{quote}"


class TemplateEngine:
    """Renders named templates with a ``quote`` filter."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir

        loader: BaseLoader = DictLoader({})
        if template_dir is not None and template_dir.is_dir():
            loader = FileSystemLoader(str(template_dir))

        # Output is source code: no HTML escaping, and a missing variable is an error
        self._env = Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters["quote"] = quote_string

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a named template. Any Jinja2 failure becomes TemplateError."""
        try:
            return self._env.get_template(template_name).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.list_templates()


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
