"""Runtime-checkable protocols for SQLPrep to replace duck typing.

This module provides protocols that can be used for static type checking
and runtime isinstance() checks for the capabilities the engine and the
statement buffer depend on.
"""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlprep.typing import DictRow, TupleRow

__all__ = (
    "ConnectionProtocol",
    "CursorProtocol",
    "DBAPIConnectionProtocol",
    "EscaperProtocol",
)


@runtime_checkable
class EscaperProtocol(Protocol):
    """Protocol for dialect specific string escaping and quoting."""

    quote_char: str

    def escape(self, value: str) -> str:
        """Escape ``value`` for use inside a string literal."""
        ...

    def quote(self, value: str) -> str:
        """Escape ``value`` and wrap it in the dialect's quote character."""
        ...


@runtime_checkable
class CursorProtocol(Protocol):
    """Protocol for DB-API 2.0 cursors."""

    description: Any
    rowcount: int

    def execute(self, operation: str, *args: Any) -> Any:
        """Execute a statement."""
        ...

    def fetchone(self) -> Any:
        """Fetch the next row."""
        ...

    def fetchall(self) -> Any:
        """Fetch all remaining rows."""
        ...

    def close(self) -> None:
        """Close the cursor."""
        ...


@runtime_checkable
class DBAPIConnectionProtocol(Protocol):
    """Protocol for DB-API 2.0 connections."""

    def cursor(self) -> Any:
        """Return a new cursor."""
        ...

    def commit(self) -> None:
        """Commit the current transaction."""
        ...


@runtime_checkable
class ConnectionProtocol(Protocol):
    """Protocol for the connection capability used by the statement buffer."""

    escaper: "EscaperProtocol"

    def exec(self, sql: str) -> int:
        """Execute a statement and return the affected row count."""
        ...

    def query(self, sql: str) -> Any:
        """Execute a statement and return the driver cursor."""
        ...

    def lookup(self, sql: str) -> Any:
        """Return a single scalar, a single row, or ``None``."""
        ...

    def fetch_all(self, sql: str) -> "list[DictRow]":
        """Return all rows as dictionaries."""
        ...

    def fetch_all_indexed_by(self, sql: str, key: str = "id") -> "dict[Any, DictRow]":
        """Return all rows keyed by the value of ``key``."""
        ...

    def fetch_all_as_rows(self, sql: str) -> "list[TupleRow]":
        """Return all rows as tuples."""
        ...

    def close(self) -> Optional[Any]:
        """Release the underlying connection."""
        ...
