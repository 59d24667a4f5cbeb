"""Prepare engine: template substitution.

One left-to-right pass over the scanner's tokens with an explicit cursor
into the parameter list. Positional tokens read the parameter under the
cursor and advance it; named tokens look their value up by key. Every
violation raises immediately and the partial output is discarded.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

from mypy_extensions import mypyc_attr

from sqlprep.exceptions import ArityError, NullabilityError, UnknownKeyError
from sqlprep.parameters.classifier import classify, is_numeric, to_number
from sqlprep.parameters.modifiers import Modifiers
from sqlprep.parameters.registry import BuiltinType
from sqlprep.parameters.rules import (
    NULL,
    SEPARATOR,
    RuleContext,
    render_clamp,
    render_escaped,
    render_numeric,
    render_passthrough,
    render_raw,
    render_string,
)
from sqlprep.parameters.scanner import count_positional, scan
from sqlprep.parameters.types import Placeholder, PlaceholderKind, ValueCategory
from sqlprep.utils.type_guards import is_mapping_parameters, is_sequence_parameters

if TYPE_CHECKING:
    from sqlprep.config import EngineConfig

__all__ = ("PrepareEngine", "PreparedStatement", "prepare", "prepare_statement")

logger = logging.getLogger("sqlprep.engine")

Parameters = Union[Sequence[Any], Mapping[str, Any]]


class PreparedStatement:
    """Result of a prepare pass."""

    __slots__ = ("compatibility_mode", "placeholder_count", "sql")

    def __init__(self, sql: str, placeholder_count: int, compatibility_mode: bool) -> None:
        self.sql = sql
        self.placeholder_count = placeholder_count
        """Parameters consumed by the pass, named lookups included."""
        self.compatibility_mode = compatibility_mode
        """Whether a single sequence or mapping argument was unpacked as the parameter list."""

    def __str__(self) -> str:
        return self.sql

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreparedStatement):
            return False
        return (
            self.sql == other.sql
            and self.placeholder_count == other.placeholder_count
            and self.compatibility_mode == other.compatibility_mode
        )

    def __hash__(self) -> int:
        return hash((self.sql, self.placeholder_count, self.compatibility_mode))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(sql={self.sql!r}, placeholder_count={self.placeholder_count!r}, "
            f"compatibility_mode={self.compatibility_mode!r})"
        )


class _Cursor:
    """Read-then-advance cursor over one parameter list."""

    __slots__ = ("compat", "consumed", "index", "keyed", "parameters", "skipped", "template", "values")

    def __init__(self, template: str, parameters: Parameters, compat: bool) -> None:
        self.template = template
        self.parameters = parameters
        self.compat = compat
        self.keyed = is_mapping_parameters(parameters)
        self.values: list[Any] = list(parameters.values()) if self.keyed else list(parameters)  # type: ignore[union-attr]
        self.index = 0
        self.consumed = 0
        self.skipped = 0

    def take(self) -> "tuple[int, Any]":
        """Return ``(index, value)`` under the cursor and advance.

        Raises:
            ArityError: If the parameter list is exhausted.
        """
        if self.index >= len(self.values):
            expected = max(count_positional(self.template) + self.skipped, self.consumed + 1)
            raise ArityError(self.template, expected, len(self.values))
        index = self.index
        self.index += 1
        self.consumed += 1
        return index, self.values[index]

    def skip_callable(self) -> None:
        """Consume the next parameter when it is a callable error-handler slot."""
        if self.index < len(self.values) and classify(self.values[self.index]) is ValueCategory.CALLABLE:
            self.index += 1
            self.consumed += 1
            self.skipped += 1

    def lookup(self, placeholder: Placeholder) -> "tuple[Any, bool]":
        """Resolve a named placeholder, returning ``(value, raw)``.

        ``:name`` tries ``name``, ``:name`` then ``@name`` (raw); ``@name``
        tries ``@name`` then ``name``, always raw. Digit names index a
        positional parameter list.

        Raises:
            UnknownKeyError: If no candidate key exists.
        """
        name = placeholder.name or ""
        at_sigil = placeholder.sigil == "@"
        if self.keyed:
            mapping: Mapping[str, Any] = self.parameters  # type: ignore[assignment]
            if at_sigil:
                candidates = ((f"@{name}", True), (name, True))
            else:
                candidates = ((name, False), (f":{name}", False), (f"@{name}", True))
            for key, raw in candidates:
                if key in mapping:
                    self.consumed += 1
                    return mapping[key], raw
        elif name.isdecimal() and name.isascii():
            position = int(name)
            if position < len(self.values):
                self.consumed += 1
                return self.values[position], at_sigil
        raise UnknownKeyError(name, self.template)

    def check_arity(self) -> None:
        if self.compat or self.keyed:
            return
        if self.consumed != len(self.values):
            raise ArityError(self.template, self.consumed, len(self.values))


@mypyc_attr(allow_interpreted_subclasses=False)
class PrepareEngine:
    """Substitutes placeholders in a template with rendered parameter values.

    Args:
        config: Registry and escaper to use. Defaults to the process default
            configuration, resolved at every call.
    """

    __slots__ = ("_config",)

    def __init__(self, config: "Optional[EngineConfig]" = None) -> None:
        self._config = config

    @property
    def config(self) -> "EngineConfig":
        if self._config is not None:
            return self._config
        from sqlprep.config import get_default_config

        return get_default_config()

    def prepare(self, template: str, *parameters: Any) -> PreparedStatement:
        """Prepare ``template`` with ``parameters``.

        A single sequence or mapping argument is unpacked as the whole
        parameter list (compatibility mode), which also disables the arity check.

        Raises:
            ArityError: Placeholder and parameter counts disagree.
            ParameterTypeError: A value does not fit its placeholder.
            ParameterRangeError: A string length is outside its declared range.
            UnknownKeyError: A named placeholder matches no key.
            NullabilityError: ``None`` was given to a non-nullable typed placeholder.
            PlaceholderSyntaxError: Malformed range or clamp arguments.
        """
        compat = len(parameters) == 1 and (
            is_sequence_parameters(parameters[0]) or is_mapping_parameters(parameters[0])
        )
        params: Parameters = parameters[0] if compat else parameters
        cursor = _Cursor(template, params, compat)
        sql = self._render(cursor, self.config)
        cursor.check_arity()
        logger.debug(
            "Prepared template %r: %d parameter(s) consumed, compatibility mode %s",
            template,
            cursor.consumed,
            compat,
        )
        return PreparedStatement(sql, cursor.consumed, compat)

    def _render(self, cursor: _Cursor, config: "EngineConfig") -> str:
        parts: list[str] = []
        for token in scan(cursor.template):
            if isinstance(token, str):
                parts.append(token)
            else:
                parts.append(self._render_token(token, cursor, config))
        return "".join(parts)

    def _render_token(self, token: Placeholder, cursor: _Cursor, config: "EngineConfig") -> str:
        kind = token.kind
        if kind is PlaceholderKind.LITERAL:
            return token.literal
        if kind is PlaceholderKind.DIRECTIVE:
            return token.text
        if kind is PlaceholderKind.ESCAPED:
            index, value = cursor.take()
            return render_escaped(value, self._context(cursor, token, index, config))
        if kind is PlaceholderKind.RAW:
            index, value = cursor.take()
            return render_raw(value, self._context(cursor, token, index, config))
        if kind is PlaceholderKind.ARRAY:
            return self._render_array(token, cursor, config)
        if kind is PlaceholderKind.RANGE:
            return self._render_range(token, cursor, config)
        if kind is PlaceholderKind.TYPED:
            index, value = cursor.take()
            cursor.skip_callable()
            compat_parameters = cursor.parameters if cursor.compat else None
            ctx = self._context(cursor, token, index, config, compat_parameters)
            return self._render_typed(token.name or "", value, Modifiers(token.modifiers, token.argument), ctx, config)
        return self._render_named(token, cursor, config)

    @staticmethod
    def _context(
        cursor: _Cursor,
        token: Placeholder,
        index: Any,
        config: "EngineConfig",
        compat_parameters: Optional[Parameters] = None,
    ) -> RuleContext:
        return RuleContext(cursor.template, token.text, index, config.escaper, compat_parameters)

    def _render_array(self, token: Placeholder, cursor: _Cursor, config: "EngineConfig") -> str:
        array: Any
        if cursor.compat:
            index: Any = 0
            array = cursor.parameters
        else:
            index, array = cursor.take()
        ctx = self._context(cursor, token, index, config)
        if not (is_sequence_parameters(array) or is_mapping_parameters(array)):
            raise ctx.type_error(array, "sequences and mappings in `[]` placeholders")

        content = token.content or ""
        if content in {"", "@"}:
            return render_raw(list(array.values()) if is_mapping_parameters(array) else array, ctx)
        if content == "?":
            return render_escaped(list(array.values()) if is_mapping_parameters(array) else array, ctx)

        nested = _Cursor(content, array, compat=False)
        sql = self._render(nested, config)
        nested.check_arity()
        return sql

    def _render_range(self, token: Placeholder, cursor: _Cursor, config: "EngineConfig") -> str:
        bounds: list[int] = []
        for written in (token.range_min or "", token.range_max or ""):
            if written != "?":
                bounds.append(int(written))
                continue
            index, value = cursor.take()
            number = to_number(value) if is_numeric(value) else None
            if number is None or number != int(number):
                ctx = self._context(cursor, token, index, config)
                raise ctx.type_error(value, "integer values as range bounds")
            bounds.append(int(number))
        start, stop = bounds
        step = 1 if start <= stop else -1
        return SEPARATOR.join(str(number) for number in range(start, stop + step, step))

    def _render_named(self, token: Placeholder, cursor: _Cursor, config: "EngineConfig") -> str:
        value, raw = cursor.lookup(token)
        ctx = self._context(cursor, token, token.name, config)
        if raw:
            return render_raw(value, ctx)

        modifiers = Modifiers(token.modifiers, token.argument)
        category = classify(value)
        if category is ValueCategory.NULL:
            return self._render_null(modifiers, ctx)
        if category.is_numeric:
            return self._render_typed("d", value, modifiers, ctx, config)
        if category is ValueCategory.STRING:
            return self._render_typed("s", value, modifiers, ctx, config)
        return render_escaped(value, ctx)

    @staticmethod
    def _render_null(modifiers: Modifiers, ctx: RuleContext) -> str:
        if modifiers.nullable:
            return NULL
        msg = f"NULL value detected for a non-nullable field at index {ctx.index} for `{ctx.token}`"
        raise NullabilityError(msg, ctx.template, ctx.index)

    def _render_typed(
        self, type_name: str, value: Any, modifiers: Modifiers, ctx: RuleContext, config: "EngineConfig"
    ) -> str:
        if value is None:
            return self._render_null(modifiers, ctx)

        registry = config.registry
        for _, handler in registry.modifier_handlers(modifiers.names):
            value = handler(value, modifiers)

        custom = registry.get_type_handler(type_name)
        if custom is not None:
            result = custom(value, modifiers)
            if isinstance(result, str):
                return result

        family = registry.builtin_type(type_name)
        if family is BuiltinType.STRING:
            return render_string(value, type_name, modifiers, ctx)
        if family is BuiltinType.NUMERIC:
            return render_numeric(value, type_name, modifiers, ctx)
        if family is BuiltinType.CLAMP:
            return render_clamp(value, modifiers, ctx)
        return render_passthrough(value, ctx)


def prepare_statement(template: str, *parameters: Any, config: "Optional[EngineConfig]" = None) -> PreparedStatement:
    """Prepare ``template`` and return the full :class:`PreparedStatement`."""
    return PrepareEngine(config).prepare(template, *parameters)


def prepare(template: str, *parameters: Any, config: "Optional[EngineConfig]" = None) -> str:
    """Substitute the placeholders of ``template`` and return the SQL text.

    Example:
        >>> prepare("SELECT * FROM users WHERE id IN (?) AND age >= ?", [1, 2, 3], 18)
        'SELECT * FROM users WHERE id IN (1, 2, 3) AND age >= 18'
    """
    return PrepareEngine(config).prepare(template, *parameters).sql
