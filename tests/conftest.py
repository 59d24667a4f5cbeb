from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from sqlprep.adapters.sqlite import SqliteConnection
from sqlprep.config import EngineConfig, get_default_config, set_default_config
from sqlprep.escaping import MySQLEscaper, StandardEscaper
from sqlprep.parameters.registry import TypeRegistry, type_registry

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture(autouse=True)
def _restore_process_defaults() -> Generator[None, None, None]:
    """Undo changes tests make to the process default configuration and registry."""
    previous = get_default_config()
    yield
    set_default_config(previous)
    type_registry.clear()


@pytest.fixture
def registry() -> TypeRegistry:
    return TypeRegistry()


@pytest.fixture
def config(registry: TypeRegistry) -> EngineConfig:
    """Isolated configuration with MySQL escaping and an empty registry."""
    return EngineConfig(registry=registry, escaper=MySQLEscaper())


@pytest.fixture
def standard_config(registry: TypeRegistry) -> EngineConfig:
    return EngineConfig(registry=registry, escaper=StandardEscaper())


@pytest.fixture
def sqlite_connection() -> Generator[SqliteConnection, None, None]:
    """In-memory database with a small ``users`` table."""
    connection = SqliteConnection.connect(":memory:")
    connection.exec("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER)")
    connection.exec("INSERT INTO users (id, name, age) VALUES (1, 'Alice', 30), (2, 'Bob', 25), (3, 'O''Brien', 41)")
    yield connection
    connection.close()
