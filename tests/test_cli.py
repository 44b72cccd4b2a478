"""Tests for the command-line interface."""

import json

import pytest

from schemats import cli
from schemats.db.base import CatalogError
from schemats.logging_config import get_logger

from .conftest import ORDERS_COLUMNS, USERS_COLUMNS, FakeDatabase


@pytest.fixture
def fake_db(monkeypatch):
    created = []

    def factory(conn):
        db = FakeDatabase(
            {"users": USERS_COLUMNS, "user_orders": ORDERS_COLUMNS},
            connection_string=conn,
        )
        created.append(db)
        return db

    monkeypatch.setattr(cli, "get_database", factory)
    return created


def test_generate_to_file(fake_db, tmp_path):
    out = tmp_path / "schema.ts"
    code = cli.main(["generate", "-c", "postgres://u:p@h/app", "-o", str(out)])

    assert code == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("/* tslint:disable */\n\n/**\n * AUTO-GENERATED FILE @ ")
    assert " * $ schemats generate -c postgres://username:password@h/app\n" in text
    assert "export namespace user_orders {" in text


def test_generate_to_stdout(fake_db, capsys):
    code = cli.main(["generate", "-c", "postgres://h/app", "-o", "-", "--no-header", "-t", "users"])

    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("/* tslint:disable */")
    assert "export namespace users {" in out
    assert "user_orders" not in out


def test_camel_case_flag(fake_db, capsys):
    cli.main(["generate", "-c", "postgres://h/app", "-o", "-", "--no-header", "-C"])
    assert "export namespace userOrders {" in capsys.readouterr().out


def test_tables_and_schema_forwarded(fake_db, capsys):
    cli.main(["generate", "-c", "postgres://h/app", "-o", "-", "-s", "public",
              "-t", "user_orders", "-t", "users"])
    out = capsys.readouterr().out
    assert " * $ schemats generate -c postgres://h/app -t user_orders -t users -s public\n" in out
    assert out.index("namespace user_orders") < out.index("namespace users")


def test_config_file(fake_db, tmp_path, capsys):
    config = tmp_path / "schemats.json"
    config.write_text(json.dumps({"camelCase": True, "writeHeader": False}), encoding="utf-8")

    cli.main(["generate", "-c", "postgres://h/app", "-o", "-", "--config", str(config)])

    out = capsys.readouterr().out
    assert out.startswith("/* tslint:disable */")
    assert "export namespace userOrders {" in out


def test_catalog_error_exit_code(monkeypatch, capsys):
    def failing(conn):
        raise CatalogError("Schema not found: nope")

    monkeypatch.setattr(cli, "get_database", failing)
    assert cli.main(["generate", "-c", "postgres://h/app"]) == 1
    assert "Schema not found" in capsys.readouterr().err


def test_unsupported_connection(capsys):
    assert cli.main(["generate", "-c", "oracle://h/app", "-o", "-"]) == 1


def test_invalid_config(fake_db, tmp_path):
    config = tmp_path / "bad.json"
    config.write_text(json.dumps({"nope": 1}), encoding="utf-8")
    assert cli.main(["generate", "-c", "postgres://h/app", "--config", str(config)]) == 1


def test_unwritable_output(fake_db, tmp_path):
    target = tmp_path / "missing-dir" / "schema.ts"
    assert cli.main(["generate", "-c", "postgres://h/app", "-o", str(target)]) == 1


def test_connection_required():
    with pytest.raises(SystemExit):
        cli.main(["generate"])


def test_logger_names():
    assert get_logger("cli").name == "schemats.cli"
    assert get_logger("schemats.db").name == "schemats.db"
