from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, cast

from sqlprep.exceptions import SQLBuilderError
from sqlprep.utils.type_guards import is_sequence_parameters

if TYPE_CHECKING:
    from typing_extensions import Self

    from sqlprep.builder.protocols import StatementBufferProtocol

__all__ = ("CallMixin", "DeleteMixin", "InsertIntoMixin", "SetClauseMixin", "UpdateMixin", "ValuesClauseMixin")

RAW_PREFIX = "@"


def _split_raw(column: Any, context: str) -> "tuple[str, bool]":
    """Strip the raw marker from a column name.

    Returns:
        The bare column name and whether its value is emitted unescaped.
    """
    if not isinstance(column, str) or not column or column.lstrip("-").replace(".", "", 1).isdigit():
        msg = f"Invalid column name {column!r} supplied to {context}; column names must be non-empty strings"
        raise SQLBuilderError(msg)
    if column.startswith(RAW_PREFIX):
        return column[1:], True
    return column, False


class InsertIntoMixin:
    """Mixin providing INSERT and INTO.

    ``into`` accepts four forms::

        .into("users (name) VALUES (?)", "Bob")          # prepared template
        .into("users", {"name": "Bob", "@created": "NOW()"})
        .into("users", ["name", "@created"], ["Bob", "NOW()"])
        .into("users", ["name", "@created"], "Bob", "NOW()")

    A column name starting with ``@`` has the marker stripped and its value
    emitted verbatim; every other value is rendered like a ``?`` scalar.
    """

    def insert(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return cast("StatementBufferProtocol", self)._clause("INSERT", statement, parameters)  # type: ignore[return-value]

    def insert_into(self, statement: str, *parameters: Any) -> "Self":
        """Append ``INSERT INTO``, accepting the same forms as :meth:`into`."""
        return self._insert_into("", statement, parameters)

    def insert_ignore_into(self, statement: str, *parameters: Any) -> "Self":
        builder = cast("StatementBufferProtocol", self)
        return self._insert_into(builder.keywords["IGNORE"], statement, parameters)

    def insert_high_priority_into(self, statement: str, *parameters: Any) -> "Self":
        builder = cast("StatementBufferProtocol", self)
        return self._insert_into(builder.keywords["HIGH_PRIORITY"], statement, parameters)

    def insert_with_modifier_into(self, modifier: str, statement: str, *parameters: Any) -> "Self":
        """Append ``INSERT <modifier> INTO``, e.g. with ``DELAYED`` or ``LOW_PRIORITY``."""
        return self._insert_into(f"{modifier} ", statement, parameters)

    def _insert_into(self, modifier: str, statement: str, parameters: "tuple[Any, ...]") -> "Self":
        builder = cast("StatementBufferProtocol", self)
        builder._append(builder.keywords["INSERT"] + modifier)
        return self.into(statement, *parameters)

    def into(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        """Append an ``INTO`` clause.

        Raises:
            SQLBuilderError: If columns and values do not pair up or a value is not a scalar.

        Returns:
            The current builder instance for method chaining.
        """
        builder = cast("StatementBufferProtocol", self)
        if not parameters:
            return builder._append(builder.keywords["INTO"] + (statement or ""))  # type: ignore[return-value]
        first = parameters[0]
        if not (isinstance(first, Mapping) or is_sequence_parameters(first)):
            return builder.prepare(builder.keywords["INTO"] + (statement or ""), *parameters)  # type: ignore[return-value]

        context = f"into({statement!r})"
        columns: list[str]
        values: Optional[list[str]] = None
        if isinstance(first, Mapping):
            if len(parameters) != 1:
                msg = f"A column mapping supplied to {context} takes no further parameters"
                raise SQLBuilderError(msg)
            columns, values = self._pair(list(first.keys()), list(first.values()), context)
        elif len(parameters) == 1:
            columns = [_split_raw(column, context)[0] for column in first]
        elif len(parameters) == 2 and is_sequence_parameters(parameters[1]):  # noqa: PLR2004
            columns, values = self._pair(list(first), list(parameters[1]), context)
        else:
            columns, values = self._pair(list(first), list(parameters[1:]), context)

        text = f"{builder.keywords['INTO']}{statement or ''} ({', '.join(columns)})"
        if values is not None:
            text += f"{builder.keywords['VALUES']}({', '.join(values)})"
        return builder._append(text)  # type: ignore[return-value]

    def _pair(self, columns: "Sequence[Any]", values: "Sequence[Any]", context: str) -> "tuple[list[str], list[str]]":
        builder = cast("StatementBufferProtocol", self)
        if len(columns) != len(values):
            msg = (
                f"Mismatching number of columns and values supplied to {context}: "
                f"{len(columns)} columns vs {len(values)} values"
            )
            raise SQLBuilderError(msg)
        names: list[str] = []
        rendered: list[str] = []
        for column, value in zip(columns, values):
            name, raw = _split_raw(column, context)
            names.append(name)
            rendered.append(str(value) if raw else builder._render_value(value, context))
        return names, rendered


class ValuesClauseMixin:
    """Mixin providing VALUES."""

    def values(self, statement: "Any" = None, *parameters: Any) -> "Self":
        """Append `` VALUES (...)``.

        ``statement`` is either a template prepared with ``parameters``, a
        text appended verbatim, or a sequence or mapping of values. Mapping
        keys starting with ``@`` mark values emitted verbatim.
        """
        builder = cast("StatementBufferProtocol", self)
        prefix = builder.keywords["VALUES"]
        if parameters:
            return builder.prepare(f"{prefix}({statement or ''})", *parameters)  # type: ignore[return-value]
        if isinstance(statement, Mapping):
            items: list[str] = []
            for key, value in statement.items():
                if isinstance(key, str) and key.startswith(RAW_PREFIX) and isinstance(value, str):
                    items.append(value)
                else:
                    items.append(builder._render_value(value, "values()"))
            return builder._append(f"{prefix}({', '.join(items)})")  # type: ignore[return-value]
        if is_sequence_parameters(statement):
            rendered = ", ".join(builder._render_value(value, "values()") for value in statement)
            return builder._append(f"{prefix}({rendered})")  # type: ignore[return-value]
        return builder._append(f"{prefix}({'' if statement is None else statement})")  # type: ignore[return-value]


class SetClauseMixin:
    """Mixin providing SET."""

    def set(self, *args: Any) -> "Self":
        """Append `` SET col = value, ...``.

        Accepts one mapping of columns to values, or alternating column and
        value arguments: ``set("name", "Bob", "@updated", "NOW()")``.

        Raises:
            SQLBuilderError: If a column name is invalid, a value is missing or not a scalar.
        """
        builder = cast("StatementBufferProtocol", self)
        if len(args) == 1 and isinstance(args[0], Mapping):
            pairs = list(args[0].items())
        else:
            if len(args) % 2:
                msg = f"set() requires column and value pairs, got {len(args)} arguments"
                raise SQLBuilderError(msg)
            pairs = list(zip(args[::2], args[1::2]))
        assignments: list[str] = []
        for column, value in pairs:
            name, raw = _split_raw(column, "set()")
            text = str(value) if raw else builder._render_value(value, "set()")
            assignments.append(f"{name} = {text}")
        return builder._append(builder.keywords["SET"] + ", ".join(assignments))  # type: ignore[return-value]


class UpdateMixin:
    """Mixin providing UPDATE."""

    def update(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return cast("StatementBufferProtocol", self)._clause("UPDATE", statement, parameters)  # type: ignore[return-value]


class DeleteMixin:
    """Mixin providing DELETE and DELETE FROM."""

    def delete(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return cast("StatementBufferProtocol", self)._clause("DELETE", statement, parameters)  # type: ignore[return-value]

    def delete_from(self, statement: Optional[str] = None, *parameters: Any) -> "Self":
        return cast("StatementBufferProtocol", self)._clause("DELETE_FROM", statement, parameters)  # type: ignore[return-value]


class CallMixin:
    """Mixin providing CALL for stored procedures."""

    def call(self, procedure: str, *parameters: Any) -> "Self":
        """Append ``CALL <procedure>``.

        A bare procedure name gets one ``?`` per parameter, so
        ``call("sp_get_user", 5, "x")`` gives ``CALL sp_get_user(5, "x")``.
        A name that already has its argument list is prepared as a template.
        """
        builder = cast("StatementBufferProtocol", self)
        template = builder.keywords["CALL"] + procedure
        if "(" not in procedure:
            template += f"({', '.join(['?'] * len(parameters))})"
        if not parameters:
            return builder._append(template)  # type: ignore[return-value]
        return builder.prepare(template, *parameters)  # type: ignore[return-value]
