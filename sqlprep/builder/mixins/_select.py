from typing import TYPE_CHECKING, Any, Optional, cast

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlprep.builder.protocols import StatementBufferProtocol

__all__ = ("SelectClauseMixin",)


class SelectClauseMixin:
    """Mixin providing SELECT, FROM, UNION and EXPLAIN."""

    def select(self, *columns: str) -> "Self":
        """Append ``SELECT`` followed by the comma separated columns.

        Returns:
            The current builder instance for method chaining.
        """
        builder = cast("StatementBufferProtocol", self)
        return builder._append(builder.keywords["SELECT"] + ", ".join(columns))  # type: ignore[return-value]

    def select_distinct(self, *columns: str) -> "Self":
        builder = cast("StatementBufferProtocol", self)
        return builder._append(builder.keywords["SELECT_DISTINCT"] + ", ".join(columns))  # type: ignore[return-value]

    def select_with_modifier(self, modifier: str, *columns: str) -> "Self":
        """Append ``SELECT <modifier>`` followed by the columns, e.g. ``SQL_CALC_FOUND_ROWS``."""
        builder = cast("StatementBufferProtocol", self)
        return builder._append(f"{builder.keywords['SELECT']}{modifier} {', '.join(columns)}")  # type: ignore[return-value]

    def from_(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        """Append a ``FROM`` clause, preparing ``statement`` when parameters are given.

        Returns:
            The current builder instance for method chaining.
        """
        return cast("StatementBufferProtocol", self)._clause("FROM", statement, parameters)  # type: ignore[return-value]

    def union(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return cast("StatementBufferProtocol", self)._clause("UNION", statement, parameters)  # type: ignore[return-value]

    def union_all(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return cast("StatementBufferProtocol", self)._clause("UNION_ALL", statement, parameters)  # type: ignore[return-value]

    def explain(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        """Prefix the statement built so far with ``EXPLAIN``.

        With a ``statement`` argument, ``EXPLAIN <statement>`` is appended instead.
        """
        builder = cast("StatementBufferProtocol", self)
        if statement is None and not parameters:
            builder._sql = builder.keywords["EXPLAIN"] + builder._sql
            return builder  # type: ignore[return-value]
        return builder._clause("EXPLAIN", statement, parameters)  # type: ignore[return-value]
