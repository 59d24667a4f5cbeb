from typing import TYPE_CHECKING, Any, Optional, cast

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlprep.builder.protocols import StatementBufferProtocol

__all__ = ("JoinClauseMixin",)


class JoinClauseMixin:
    """Mixin providing the JOIN family, ON and USING.

    Every join method appends its keyword and ``statement`` verbatim, or
    prepares ``statement`` when parameters are given.
    """

    def _join(self, keyword: str, statement: Optional[str], parameters: "tuple[Any, ...]") -> "Self":
        return cast("StatementBufferProtocol", self)._clause(keyword, statement, parameters)  # type: ignore[return-value]

    def join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("JOIN", statement, parameters)

    def left_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("LEFT_JOIN", statement, parameters)

    def left_outer_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("LEFT_OUTER_JOIN", statement, parameters)

    def right_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("RIGHT_JOIN", statement, parameters)

    def right_outer_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("RIGHT_OUTER_JOIN", statement, parameters)

    def inner_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("INNER_JOIN", statement, parameters)

    def outer_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("OUTER_JOIN", statement, parameters)

    def cross_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("CROSS_JOIN", statement, parameters)

    def straight_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("STRAIGHT_JOIN", statement, parameters)

    def natural_join(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("NATURAL_JOIN", statement, parameters)

    def join_on(self, table: str, statement: Optional[str] = None, *parameters: Any) -> "Self":
        """Append ``JOIN <table> ON <statement>``.

        Args:
            table: The joined table, with an optional alias.
            statement: The join condition.
            *parameters: Values for the placeholders in ``statement``.

        Returns:
            The current builder instance for method chaining.
        """
        builder = cast("StatementBufferProtocol", self)
        keywords = builder.keywords
        template = f"{keywords['JOIN']}{table}{keywords['ON']}{statement or ''}"
        if not parameters:
            return builder._append(template)  # type: ignore[return-value]
        return builder.prepare(template, *parameters)  # type: ignore[return-value]

    def on(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return self._join("ON", statement, parameters)

    def using(self, *columns: str) -> "Self":
        """Append ``USING (<columns>)``."""
        builder = cast("StatementBufferProtocol", self)
        return builder._append(f"{builder.keywords['USING']}({', '.join(columns)})")  # type: ignore[return-value]
