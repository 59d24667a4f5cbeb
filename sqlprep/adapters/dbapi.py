"""Connection adapter for DB-API 2.0 (PEP 249) drivers."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Final, Optional

from sqlprep.escaping import get_escaper
from sqlprep.exceptions import wrap_exceptions

if TYPE_CHECKING:
    from sqlprep.protocols import DBAPIConnectionProtocol, EscaperProtocol
    from sqlprep.typing import DictRow, TupleRow

__all__ = ("DRIVER_DIALECTS", "DBAPIConnection")

logger = logging.getLogger("sqlprep.adapters.dbapi")

DRIVER_DIALECTS: Final[dict[str, str]] = {
    "MySQLdb": "mysql",
    "mysql": "mysql",
    "pymysql": "mysql",
    "mariadb": "mariadb",
    "sqlite3": "sqlite",
    "psycopg": "postgres",
    "psycopg2": "postgres",
    "pg8000": "postgres",
    "duckdb": "standard",
    "oracledb": "oracle",
}


def driver_dialect(connection: Any) -> str:
    """Return the dialect name for the driver module that created ``connection``.

    Unknown drivers map to ``"standard"``.
    """
    module = type(connection).__module__.split(".", 1)[0]
    return DRIVER_DIALECTS.get(module, "standard")


class DBAPIConnection:
    """Connection capability backed by any DB-API 2.0 connection.

    Args:
        connection: The driver connection.
        escaper: String escaper. Defaults to the one matching the driver.
        autocommit: Commit after every :meth:`exec`.
    """

    __slots__ = ("autocommit", "connection", "escaper")

    def __init__(
        self,
        connection: "DBAPIConnectionProtocol",
        escaper: "Optional[EscaperProtocol]" = None,
        autocommit: bool = True,
    ) -> None:
        self.connection = connection
        self.escaper = escaper if escaper is not None else get_escaper(driver_dialect(connection))
        self.autocommit = autocommit

    @contextmanager
    def _cursor(self) -> Generator[Any, None, None]:
        cursor = self.connection.cursor()
        try:
            yield cursor
        finally:
            cursor.close()

    def _execute(self, cursor: Any, sql: str) -> None:
        logger.debug("Executing statement: %s", sql)
        cursor.execute(sql)

    def exec(self, sql: str) -> int:
        """Execute ``sql`` and return the affected row count."""
        with wrap_exceptions(), self._cursor() as cursor:
            self._execute(cursor, sql)
            rowcount = cursor.rowcount
            if self.autocommit:
                self.connection.commit()
        return max(rowcount or 0, 0)

    def query(self, sql: str) -> Any:
        """Execute ``sql`` and return the open cursor. The caller closes it."""
        with wrap_exceptions():
            cursor = self.connection.cursor()
            self._execute(cursor, sql)
        return cursor

    def lookup(self, sql: str) -> Any:
        """Return the first row of ``sql``.

        A single column result is returned as its bare value, wider rows as
        a dictionary, and an empty result as ``None``.
        """
        with wrap_exceptions(), self._cursor() as cursor:
            self._execute(cursor, sql)
            row = cursor.fetchone()
            if row is None:
                return None
            columns = [column[0] for column in cursor.description or []]
        if len(columns) == 1:
            return row[0]
        return dict(zip(columns, row))

    def fetch_all(self, sql: str) -> "list[DictRow]":
        with wrap_exceptions(), self._cursor() as cursor:
            self._execute(cursor, sql)
            rows = cursor.fetchall()
            columns = [column[0] for column in cursor.description or []]
        return [dict(zip(columns, row)) for row in rows]

    def fetch_all_indexed_by(self, sql: str, key: str = "id") -> "dict[Any, DictRow]":
        """Return all rows as dictionaries keyed by the ``key`` column.

        Later rows overwrite earlier rows with the same key.

        Raises:
            QueryError: If the result has no ``key`` column.
        """
        rows = self.fetch_all(sql)
        with wrap_exceptions():
            return {row[key]: row for row in rows}

    def fetch_all_as_rows(self, sql: str) -> "list[TupleRow]":
        with wrap_exceptions(), self._cursor() as cursor:
            self._execute(cursor, sql)
            return [tuple(row) for row in cursor.fetchall()]

    def close(self) -> None:
        with wrap_exceptions():
            self.connection.close()  # type: ignore[attr-defined]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self.connection).__module__}.{type(self.connection).__name__})"
