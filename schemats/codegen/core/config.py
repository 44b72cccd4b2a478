"""
Configuration management for code generation.

Handles loading and merging options from JSON files, providing
defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union, Mapping
from dataclasses import dataclass, field, fields

from ...exceptions import SchematsError
from .naming import NamingCase


class ConfigurationError(SchematsError):
    """Exception raised for contradictory or unusable options."""
    pass


VALID_FORMATTERS = {"builtin", "tsfmt"}

# camelCase spellings accepted in config files and overrides
OPTION_ALIASES = {
    "camelCase": "camel_case",
    "writeHeader": "write_header",
    "typeOverrides": "type_overrides",
    "indentSize": "indent_size",
    "maxWorkers": "max_workers",
}


@dataclass(frozen=True)
class Options:
    """Immutable configuration snapshot threaded through every component."""

    # Naming settings
    camel_case: bool = False

    # Output settings
    write_header: bool = True
    indent_size: int = 2
    formatter: str = "builtin"

    # Type handling: sql type name -> TypeScript type
    type_overrides: Mapping[str, str] = field(default_factory=dict)

    # Concurrent catalog reads (1 = sequential)
    max_workers: int = 8

    @property
    def naming_case(self) -> NamingCase:
        return NamingCase.CAMEL_CASE if self.camel_case else NamingCase.VERBATIM

    def transform_type_name(self, name: str) -> str:
        """Normalize a table or enum name."""
        from ..languages.typescript.naming import normalize_name

        return normalize_name(name, self.naming_case)

    def transform_column_name(self, name: str) -> str:
        """Normalize a column name."""
        from ..languages.typescript.naming import normalize_name

        return normalize_name(name, self.naming_case)


class ConfigManager:
    """Manages option loading and merging."""

    def get_options(self, custom_config: Optional[Dict[str, Any]] = None,
                    config_file: Optional[Union[str, Path]] = None) -> Options:
        """
        Get complete options.

        Args:
            custom_config: Custom option overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged, validated options
        """
        base_config: Dict[str, Any] = {}

        # Load from file if provided
        if config_file:
            base_config.update(self._load_config_file(config_file))

        # Apply custom overrides
        if custom_config:
            base_config.update(self._canonical_keys(custom_config))

        options = self._dict_to_options(base_config)
        self.validate_options(options)
        return options

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigurationError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Configuration file must contain a JSON object: {path}")

        return self._canonical_keys(config)

    def _canonical_keys(self, config: Dict[str, Any]) -> Dict[str, Any]:
        return {OPTION_ALIASES.get(key, key): value for key, value in config.items()}

    def _dict_to_options(self, config_dict: Dict[str, Any]) -> Options:
        """Convert dictionary to an Options instance."""
        known_fields = {f.name for f in fields(Options)}
        unknown = sorted(set(config_dict) - known_fields)
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(unknown)}")

        config_args = dict(config_dict)
        if "type_overrides" in config_args:
            config_args["type_overrides"] = dict(config_args["type_overrides"] or {})

        return Options(**config_args)

    def validate_options(self, options: Options) -> None:
        """Raise ConfigurationError for unusable option values."""
        if options.formatter not in VALID_FORMATTERS:
            raise ConfigurationError(
                f"Invalid formatter: {options.formatter} "
                f"(expected one of {', '.join(sorted(VALID_FORMATTERS))})"
            )

        if not isinstance(options.indent_size, int) or options.indent_size < 0:
            raise ConfigurationError(f"Invalid indent_size: {options.indent_size}")

        if not isinstance(options.max_workers, int) or options.max_workers < 1:
            raise ConfigurationError(f"Invalid max_workers: {options.max_workers}")

        for sql_type, ts_type in options.type_overrides.items():
            if not isinstance(ts_type, str) or not ts_type.strip():
                raise ConfigurationError(f"Invalid type override for {sql_type}: {ts_type!r}")


def load_options(custom_config: Optional[Dict[str, Any]] = None,
                 config_file: Optional[Union[str, Path]] = None) -> Options:
    """
    Convenience function to load options.

    Args:
        custom_config: Custom option overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged options
    """
    return ConfigManager().get_options(custom_config, config_file)

