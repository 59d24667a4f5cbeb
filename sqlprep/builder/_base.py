"""Statement buffer.

:class:`Sql` accumulates SQL text. Clause methods append a keyword from the
configured :class:`~sqlprep.builder._keywords.Keywords` table followed by
their statement, which is run through the prepare engine whenever
parameters are supplied.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from typing_extensions import Self

from sqlprep.builder._keywords import DEFAULT_KEYWORDS
from sqlprep.builder.mixins import (
    CallMixin,
    DeleteMixin,
    ExecuteMixin,
    GroupByClauseMixin,
    HavingClauseMixin,
    InsertIntoMixin,
    JoinClauseMixin,
    LimitOffsetClauseMixin,
    OrderByClauseMixin,
    SelectClauseMixin,
    SetClauseMixin,
    UpdateMixin,
    ValuesClauseMixin,
    WhereClauseMixin,
)
from sqlprep.exceptions import SQLBuilderError
from sqlprep.parameters.classifier import classify, format_number
from sqlprep.parameters.engine import PrepareEngine
from sqlprep.parameters.rules import NULL
from sqlprep.parameters.types import ValueCategory

if TYPE_CHECKING:
    from sqlprep.builder._keywords import Keywords
    from sqlprep.config import EngineConfig

__all__ = ("Sql",)

logger = logging.getLogger("sqlprep.builder")


class Sql(
    SelectClauseMixin,
    JoinClauseMixin,
    WhereClauseMixin,
    HavingClauseMixin,
    GroupByClauseMixin,
    OrderByClauseMixin,
    LimitOffsetClauseMixin,
    InsertIntoMixin,
    ValuesClauseMixin,
    SetClauseMixin,
    UpdateMixin,
    DeleteMixin,
    CallMixin,
    ExecuteMixin,
):
    """Mutable SQL statement buffer with chainable clause methods.

    Args:
        statement: Initial text. Prepared when ``parameters`` are given.
        *parameters: Values for the placeholders in ``statement``.
        config: Engine configuration. Defaults to the process default,
            resolved whenever the buffer needs it.

    Example:
        ```python
        sql = (
            Sql()
            .select("id", "name")
            .from_("users")
            .where("status = ? AND age >= ?", "active", 18)
            .order_by("name", "DESC")
            .limit(10)
        )
        str(sql)
        ```
    """

    __slots__ = ("_config", "_sql")

    def __init__(self, statement: Optional[str] = None, *parameters: Any, config: "Optional[EngineConfig]" = None) -> None:
        self._config = config
        self._sql = ""
        if parameters:
            self.prepare(statement or "", *parameters)
        elif statement is not None:
            self._sql = statement

    @property
    def config(self) -> "EngineConfig":
        if self._config is not None:
            return self._config
        from sqlprep.config import get_default_config

        return get_default_config()

    @property
    def keywords(self) -> "Keywords":
        return self.config.keywords or DEFAULT_KEYWORDS

    @property
    def sql(self) -> str:
        """The statement built so far."""
        return self._sql

    def __str__(self) -> str:
        return self._sql

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sql!r})"

    def __len__(self) -> int:
        return len(self._sql)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sql):
            return self._sql == other._sql
        if isinstance(other, str):
            return self._sql == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __call__(self, statement: Optional[str] = None, *parameters: Any) -> Self:
        """Append ``statement``, preparing it when parameters are given.

        Calling without arguments appends ``NULL``.
        """
        if statement is None and not parameters:
            return self._append(self.keywords["NULL"])
        if not parameters:
            return self._append(statement or "")
        return self.prepare(statement or "", *parameters)

    def reset(self) -> Self:
        """Discard the text built so far."""
        self._sql = ""
        return self

    def prepare(self, template: str, *parameters: Any) -> Self:
        """Prepare ``template`` with the engine and append the result.

        Raises:
            ParameterError: Any error raised by the prepare engine.
        """
        return self._append(PrepareEngine(self.config).prepare(template, *parameters).sql)

    def sprintf(self, fmt: str, *args: Any) -> Self:
        """Append ``fmt % args`` without escaping."""
        return self._append(fmt % args if args else fmt)

    def clamp(self, value: Any, minimum: Any, maximum: Any, alias: Optional[str] = None) -> Self:
        """Append ``MIN(MAX(value, minimum), maximum)``, optionally with an alias."""
        text = f"MIN(MAX({value}, {minimum}), {maximum})"
        if alias is not None:
            text += f"{self.keywords['AS']}{alias}"
        return self._append(text)

    def _append(self, text: str) -> Self:
        self._sql += text
        return self

    def _clause(self, keyword: str, statement: Optional[str], parameters: "tuple[Any, ...]") -> Self:
        prefix = self.keywords[keyword]
        if not parameters:
            return self._append(prefix + ("" if statement is None else statement))
        return self.prepare(prefix + (statement or ""), *parameters)

    def _render_value(self, value: Any, context: str) -> str:
        """Render a scalar the way ``?`` renders it.

        Raises:
            SQLBuilderError: If ``value`` is not a scalar.
        """
        category = classify(value)
        if category.is_numeric:
            return format_number(value)
        if category is ValueCategory.STRING:
            return self.config.escaper.quote(value)
        if category is ValueCategory.NULL:
            return NULL
        if category is ValueCategory.BOOLEAN:
            return "1" if value else "0"
        msg = f"Invalid type {type(value).__name__!r} sent to {context}; only numeric, string, bool and None values are supported"
        raise SQLBuilderError(msg)
