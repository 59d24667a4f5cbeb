from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional, cast

from sqlprep.escaping import escape_like
from sqlprep.utils.type_guards import is_sequence_parameters

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlprep.builder.protocols import StatementBufferProtocol

__all__ = ("HavingClauseMixin", "WhereClauseMixin")


class WhereClauseMixin:
    """Mixin providing WHERE, IN and the LIKE helpers."""

    def where(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        """Append a ``WHERE`` clause.

        Example:
            ```python
            Sql().select("*").from_("users").where("age >= ? AND name = ?", 18, "O'Brien")
            ```

        Returns:
            The current builder instance for method chaining.
        """
        return cast("StatementBufferProtocol", self)._clause("WHERE", statement, parameters)  # type: ignore[return-value]

    def in_(self, *values: Any) -> "Self":
        """Append `` IN (...)`` with each value quoted and escaped.

        A single sequence argument supplies the whole list.

        Raises:
            SQLBuilderError: If a value is not a scalar.
        """
        builder = cast("StatementBufferProtocol", self)
        items: Any = values
        if len(values) == 1 and (is_sequence_parameters(values[0]) or isinstance(values[0], Mapping)):
            items = values[0].values() if isinstance(values[0], Mapping) else values[0]
        rendered = ", ".join(builder._render_value(item, "in_()") for item in items)
        return builder._append(f"{builder.keywords['IN']}({rendered})")  # type: ignore[return-value]

    def _like(self, keyword: str, pattern: str, value: str) -> "Self":
        builder = cast("StatementBufferProtocol", self)
        escaper = builder.config.escaper
        quote_char = escaper.quote_char
        pattern = pattern.strip(quote_char)
        needle = escape_like(escaper.escape(value))
        return builder._append(f"{builder.keywords[keyword]}{quote_char}{pattern.replace('?', needle)}{quote_char}")  # type: ignore[return-value]

    def like(self, pattern: str, value: str) -> "Self":
        """Append `` LIKE <pattern>`` with ``?`` in ``pattern`` replaced by the escaped ``value``.

        ``%`` and ``_`` inside ``value`` are escaped, so only the wildcards
        written in ``pattern`` take effect: ``like("%?%", "50%")`` matches
        the literal text ``50%`` anywhere.
        """
        return self._like("LIKE", pattern, value)

    def not_like(self, pattern: str, value: str) -> "Self":
        return self._like("NOT_LIKE", pattern, value)


class HavingClauseMixin:
    """Mixin providing HAVING."""

    def having(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return cast("StatementBufferProtocol", self)._clause("HAVING", statement, parameters)  # type: ignore[return-value]
