from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from sqlprep.builder.protocols import StatementBufferProtocol
    from sqlprep.typing import DictRow, TupleRow

__all__ = ("ExecuteMixin",)


class ExecuteMixin:
    """Mixin running the built statement on the configured connection.

    Every method raises :class:`~sqlprep.exceptions.ImproperConfigurationError`
    when no connection is configured.
    """

    def exec(self) -> int:
        """Execute the statement and return the affected row count."""
        builder = cast("StatementBufferProtocol", self)
        return builder.config.require_connection().exec(builder._sql)

    def query(self) -> Any:
        """Execute the statement and return the driver cursor."""
        builder = cast("StatementBufferProtocol", self)
        return builder.config.require_connection().query(builder._sql)

    def lookup(self) -> Any:
        """Return the single value or row the statement selects, or ``None``."""
        builder = cast("StatementBufferProtocol", self)
        return builder.config.require_connection().lookup(builder._sql)

    def fetch_all(self) -> "list[DictRow]":
        builder = cast("StatementBufferProtocol", self)
        return builder.config.require_connection().fetch_all(builder._sql)

    def fetch_all_indexed_by(self, key: str = "id") -> "dict[Any, DictRow]":
        builder = cast("StatementBufferProtocol", self)
        return builder.config.require_connection().fetch_all_indexed_by(builder._sql, key)

    def fetch_all_as_rows(self) -> "list[TupleRow]":
        builder = cast("StatementBufferProtocol", self)
        return builder.config.require_connection().fetch_all_as_rows(builder._sql)
