"""Tests for the generic DB-API adapter, driver detection and connection binding."""

import sqlite3
from typing import Any

import pytest

import sqlprep
from sqlprep.adapters.dbapi import DBAPIConnection, driver_dialect
from sqlprep.adapters.sqlite import SqliteConnection
from sqlprep.builder import Sql
from sqlprep.config import EngineConfig, get_default_config, set_connection
from sqlprep.escaping import MySQLEscaper, StandardEscaper
from sqlprep.exceptions import ImproperConfigurationError, QueryError


class RecordingCursor:
    def __init__(self, connection: "RecordingConnection") -> None:
        self.connection = connection
        self.description = [("id",), ("name",)]
        self.rowcount = -1
        self.closed = False

    def execute(self, operation: str, *args: Any) -> None:
        if operation == "FAIL":
            msg = "driver failure"
            raise RuntimeError(msg)
        self.connection.statements.append(operation)
        self.rowcount = 2

    def fetchone(self) -> Any:
        return (1, "Alice")

    def fetchall(self) -> Any:
        return [(1, "Alice"), (2, "Bob")]

    def close(self) -> None:
        self.closed = True


class RecordingConnection:
    def __init__(self) -> None:
        self.statements: list[str] = []
        self.cursors: list[RecordingCursor] = []
        self.commits = 0

    def cursor(self) -> RecordingCursor:
        cursor = RecordingCursor(self)
        self.cursors.append(cursor)
        return cursor

    def commit(self) -> None:
        self.commits += 1

    def close(self) -> None:
        pass


@pytest.fixture
def driver() -> RecordingConnection:
    return RecordingConnection()


def test_driver_dialect(driver: RecordingConnection) -> None:
    connection = sqlite3.connect(":memory:")
    try:
        assert driver_dialect(connection) == "sqlite"
    finally:
        connection.close()
    assert driver_dialect(driver) == "standard"


def test_escaper_follows_driver(driver: RecordingConnection) -> None:
    assert isinstance(DBAPIConnection(driver).escaper, StandardEscaper)
    escaper = MySQLEscaper()
    assert DBAPIConnection(driver, escaper=escaper).escaper is escaper


def test_exec_commits_and_closes_cursor(driver: RecordingConnection) -> None:
    adapter = DBAPIConnection(driver)
    assert adapter.exec("DELETE FROM users") == 2
    assert driver.statements == ["DELETE FROM users"]
    assert driver.commits == 1
    assert all(cursor.closed for cursor in driver.cursors)


def test_exec_without_autocommit(driver: RecordingConnection) -> None:
    DBAPIConnection(driver, autocommit=False).exec("DELETE FROM users")
    assert driver.commits == 0


def test_row_helpers(driver: RecordingConnection) -> None:
    adapter = DBAPIConnection(driver)
    assert adapter.lookup("SELECT id, name FROM users") == {"id": 1, "name": "Alice"}
    assert adapter.fetch_all("SELECT id, name FROM users") == [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]
    assert adapter.fetch_all_indexed_by("SELECT id, name FROM users", "name") == {
        "Alice": {"id": 1, "name": "Alice"},
        "Bob": {"id": 2, "name": "Bob"},
    }
    assert adapter.fetch_all_as_rows("SELECT id, name FROM users") == [(1, "Alice"), (2, "Bob")]


def test_query_leaves_cursor_open(driver: RecordingConnection) -> None:
    cursor = DBAPIConnection(driver).query("SELECT 1")
    assert cursor.closed is False


def test_driver_error_is_wrapped_and_cursor_closed(driver: RecordingConnection) -> None:
    with pytest.raises(QueryError) as exc_info:
        DBAPIConnection(driver).exec("FAIL")
    assert "driver failure" in str(exc_info.value)
    assert driver.cursors[0].closed is True


class TestSetConnection:
    def test_raw_sqlite_connection_becomes_default(self) -> None:
        connection = sqlite3.connect(":memory:")
        try:
            config = set_connection(connection)
            assert get_default_config() is config
            assert isinstance(config.connection, SqliteConnection)
            assert isinstance(config.escaper, StandardEscaper)
            assert Sql("SELECT ?", "it's").lookup() == "it's"
        finally:
            connection.close()

    def test_generic_driver_is_wrapped(self, driver: RecordingConnection) -> None:
        config = set_connection(driver)
        assert isinstance(config.connection, DBAPIConnection)
        assert config.connection.connection is driver
        assert sqlprep.sql("DELETE FROM users WHERE id = ?", 5).exec() == 2
        assert driver.statements == ["DELETE FROM users WHERE id = 5"]

    def test_adapter_is_used_as_is(self, driver: RecordingConnection) -> None:
        adapter = DBAPIConnection(driver, escaper=MySQLEscaper("'"))
        config = set_connection(adapter)
        assert config.connection is adapter
        assert config.escaper is adapter.escaper

    def test_explicit_config_leaves_default_alone(self, driver: RecordingConnection) -> None:
        base = EngineConfig()
        default = get_default_config()
        config = set_connection(driver, config=base)
        assert get_default_config() is default
        assert base.connection is None
        assert isinstance(config.connection, DBAPIConnection)

    def test_unbinding_restores_default_escaper(self, driver: RecordingConnection) -> None:
        set_connection(driver)
        config = set_connection(None)
        assert config.connection is None
        assert isinstance(config.escaper, MySQLEscaper)

    def test_rejects_unsupported_objects(self) -> None:
        with pytest.raises(ImproperConfigurationError):
            set_connection(object())
