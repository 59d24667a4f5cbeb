"""Connection adapter for the standard library ``sqlite3`` module."""

import sqlite3
from typing import TYPE_CHECKING, Any, Optional

from sqlprep.adapters.dbapi import DBAPIConnection
from sqlprep.escaping import StandardEscaper

if TYPE_CHECKING:
    from sqlprep.protocols import EscaperProtocol

__all__ = ("SqliteConnection",)


class SqliteConnection(DBAPIConnection):
    """SQLite connection capability.

    SQLite string literals use single quotes with the quote doubled.

    Args:
        connection: An open ``sqlite3`` connection.
        escaper: String escaper. Defaults to :class:`~sqlprep.escaping.StandardEscaper`.
        autocommit: Commit after every :meth:`exec`.
    """

    __slots__ = ()

    def __init__(
        self,
        connection: "sqlite3.Connection",
        escaper: "Optional[EscaperProtocol]" = None,
        autocommit: bool = True,
    ) -> None:
        super().__init__(connection, escaper if escaper is not None else StandardEscaper(), autocommit)

    @classmethod
    def connect(cls, database: str = ":memory:", **kwargs: Any) -> "SqliteConnection":
        """Open ``database`` and wrap the new connection."""
        return cls(sqlite3.connect(database, **kwargs))
