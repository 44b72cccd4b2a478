"""Tests for option loading and validation."""

import json

import pytest

from schemats.codegen.core.config import ConfigurationError, Options, load_options
from schemats.codegen.core.naming import NamingCase


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults():
    options = load_options()
    assert options == Options()
    assert options.camel_case is False
    assert options.write_header is True
    assert options.formatter == "builtin"
    assert options.naming_case is NamingCase.VERBATIM


def test_camel_case_property():
    assert Options(camel_case=True).naming_case is NamingCase.CAMEL_CASE
    assert Options(camel_case=True).transform_type_name("user_accounts") == "userAccounts"
    assert Options().transform_column_name("user_id") == "user_id"


def test_overrides_accept_camel_case_keys():
    options = load_options({"camelCase": True, "writeHeader": False})
    assert options.camel_case is True
    assert options.write_header is False


def test_load_from_file(tmp_path):
    path = write_json(
        tmp_path / "schemats.json",
        {"camelCase": True, "typeOverrides": {"int8": "bigint"}, "maxWorkers": 2},
    )
    options = load_options(config_file=path)
    assert options.camel_case is True
    assert dict(options.type_overrides) == {"int8": "bigint"}
    assert options.max_workers == 2


def test_overrides_beat_file(tmp_path):
    path = write_json(tmp_path / "schemats.json", {"camel_case": True, "indent_size": 4})
    options = load_options({"camel_case": False}, path)
    assert options.camel_case is False
    assert options.indent_size == 4


def test_unknown_option():
    with pytest.raises(ConfigurationError, match="Unknown option"):
        load_options({"colour": "blue"})


@pytest.mark.parametrize(
    "overrides",
    [
        {"formatter": "prettier"},
        {"indent_size": -1},
        {"max_workers": 0},
        {"type_overrides": {"int8": ""}},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ConfigurationError):
        load_options(overrides)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_options(config_file=tmp_path / "missing.json")


def test_file_must_be_json(tmp_path):
    path = tmp_path / "schemats.yaml"
    path.write_text("camelCase: true", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="must be JSON"):
        load_options(config_file=path)


def test_invalid_json(tmp_path):
    path = tmp_path / "schemats.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_options(config_file=path)


def test_file_must_hold_object(tmp_path):
    path = write_json(tmp_path / "schemats.json", ["camelCase"])
    with pytest.raises(ConfigurationError, match="JSON object"):
        load_options(config_file=path)

