from typing import TYPE_CHECKING, Any, Optional, cast

from sqlprep.exceptions import SQLBuilderError
from sqlprep.parameters.classifier import classify, format_number
from sqlprep.parameters.types import ValueCategory

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlprep.builder.protocols import StatementBufferProtocol

__all__ = ("GroupByClauseMixin", "LimitOffsetClauseMixin", "OrderByClauseMixin")

_DIRECTIONS = frozenset({"ASC", "DESC"})


def _require_integer(value: Any, clause: str) -> str:
    if classify(value) is not ValueCategory.INTEGER:
        msg = f"{clause} requires an integer value, got {value!r}"
        raise SQLBuilderError(msg)
    return format_number(value)


class GroupByClauseMixin:
    """Mixin providing GROUP BY."""

    def group_by(self, *columns: str) -> "Self":
        builder = cast("StatementBufferProtocol", self)
        return builder._append(builder.keywords["GROUP_BY"] + ", ".join(columns))  # type: ignore[return-value]


class OrderByClauseMixin:
    """Mixin providing ORDER BY."""

    def order_by(self, *columns: str) -> "Self":
        """Append ``ORDER BY``.

        ``"ASC"`` and ``"DESC"`` arguments attach to the column before them
        instead of being listed as columns: ``order_by("name", "DESC", "id")``
        gives ``ORDER BY name DESC, id``.

        Returns:
            The current builder instance for method chaining.
        """
        builder = cast("StatementBufferProtocol", self)
        parts: list[str] = []
        for column in columns:
            if parts and column.strip().upper() in _DIRECTIONS:
                parts[-1] = f"{parts[-1]} {column.strip()}"
            else:
                parts.append(column)
        return builder._append(builder.keywords["ORDER_BY"] + ", ".join(parts))  # type: ignore[return-value]


class LimitOffsetClauseMixin:
    """Mixin providing LIMIT and OFFSET."""

    def limit(self, value: Any, count: Optional[Any] = None) -> "Self":
        """Append ``LIMIT value`` or the two-argument form ``LIMIT value, count``.

        Raises:
            SQLBuilderError: If a value is not an integer.
        """
        builder = cast("StatementBufferProtocol", self)
        text = _require_integer(value, "LIMIT")
        if count is not None:
            text = f"{text}, {_require_integer(count, 'LIMIT')}"
        return builder._append(builder.keywords["LIMIT"] + text)  # type: ignore[return-value]

    def offset(self, value: Any) -> "Self":
        """Append ``OFFSET value``.

        Raises:
            SQLBuilderError: If the value is not an integer.
        """
        builder = cast("StatementBufferProtocol", self)
        return builder._append(builder.keywords["OFFSET"] + _require_integer(value, "OFFSET"))  # type: ignore[return-value]
