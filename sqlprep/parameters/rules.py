"""Built-in value renderers and type rules.

The renderers turn a single parameter into SQL text for ``?`` (quoted and
escaped), ``@`` (verbatim) and the typed ``%type`` families. Every failure
raises a :class:`~sqlprep.exceptions.ParameterError` subclass naming the
template and the parameter index.
"""

import hashlib
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Final, Optional

from sqlprep._serialization import decode_json, encode_json
from sqlprep.exceptions import ParameterRangeError, ParameterTypeError, PlaceholderSyntaxError
from sqlprep.parameters.classifier import classify, format_number, to_number
from sqlprep.parameters.types import ValueCategory
from sqlprep.utils.text import pack_whitespace, ucfirst, ucwords

if TYPE_CHECKING:
    from sqlprep.parameters.modifiers import Modifiers, Range
    from sqlprep.protocols import EscaperProtocol

__all__ = (
    "HASH_MODIFIERS",
    "JSON_DECODE_MODIFIERS",
    "JSON_ENCODE_MODIFIERS",
    "RuleContext",
    "render_clamp",
    "render_escaped",
    "render_numeric",
    "render_passthrough",
    "render_raw",
    "render_string",
)

NULL: Final = "NULL"
SEPARATOR: Final = ", "

JSON_ENCODE_MODIFIERS: Final = ("jsonencode", "json_encode", "jsonify", "to_json")
JSON_DECODE_MODIFIERS: Final = ("json_decode", "from_json", "fromjson")
LOWER_MODIFIERS: Final = ("lower", "tolower", "lcase")
UPPER_MODIFIERS: Final = ("upper", "toupper", "ucase")
HASH_MODIFIERS: Final = ("md5", "sha1", "sha256", "sha384", "sha512")


class RuleContext:
    """Where a value is being rendered: used for escaping and error messages."""

    __slots__ = ("compat_parameters", "escaper", "index", "template", "token")

    def __init__(
        self,
        template: str,
        token: str,
        index: Any,
        escaper: "EscaperProtocol",
        compat_parameters: "Optional[Sequence[Any] | Mapping[str, Any]]" = None,
    ) -> None:
        self.template = template
        self.token = token
        """Matched placeholder text."""
        self.index = index
        """Parameter index, or key for named placeholders."""
        self.escaper = escaper
        self.compat_parameters = compat_parameters
        """The unpacked parameter list when a positional value was taken in compatibility mode."""

    def type_error(self, value: Any, expected: str) -> ParameterTypeError:
        msg = (
            f"Invalid data type `{type(value).__name__}` given at index {self.index} for `{self.token}`; "
            f"only {expected} are allowed"
        )
        return ParameterTypeError(msg, self.template, self.index)

    def syntax_error(self, detail: str) -> PlaceholderSyntaxError:
        msg = f"Invalid syntax in `{self.token}` at index {self.index}: {detail}"
        return PlaceholderSyntaxError(msg, self.template)


def _render_element(value: Any, ctx: RuleContext, *, escape: bool) -> str:
    category = classify(value)
    if category.is_numeric:
        return format_number(value)
    if category is ValueCategory.STRING:
        return ctx.escaper.quote(value) if escape else value
    if category is ValueCategory.NULL:
        return NULL
    if category is ValueCategory.BOOLEAN:
        return "1" if value else "0"
    raise ctx.type_error(value, "scalar (int, float, str, bool) and None values inside sequences")


def _join(values: "Sequence[Any] | Mapping[str, Any]", ctx: RuleContext, *, escape: bool) -> str:
    items = values.values() if isinstance(values, Mapping) else values
    return SEPARATOR.join(_render_element(item, ctx, escape=escape) for item in items)


def render_escaped(value: Any, ctx: RuleContext) -> str:
    """Render a value for ``?``: strings quoted and escaped, sequences joined element-wise."""
    category = classify(value)
    if category is ValueCategory.SEQUENCE:
        return _join(value, ctx, escape=True)
    if category.is_scalar:
        return _render_element(value, ctx, escape=True)
    raise ctx.type_error(value, "scalar (int, float, str, bool), None and single dimension sequences")


def render_raw(value: Any, ctx: RuleContext) -> str:
    """Render a value for ``@``: strings verbatim, sequences joined without escaping."""
    category = classify(value)
    if category is ValueCategory.SEQUENCE:
        return _join(value, ctx, escape=False)
    if category.is_scalar:
        return _render_element(value, ctx, escape=False)
    raise ctx.type_error(value, "scalar (int, float, str, bool), None and single dimension sequences")


def render_passthrough(value: Any, ctx: RuleContext) -> str:
    """Render a value for types without their own rule: unmodified, no quoting."""
    category = classify(value)
    if category is ValueCategory.SEQUENCE:
        return _join(value, ctx, escape=False)
    if category.is_scalar:
        return _render_element(value, ctx, escape=False)
    return str(value)


def _apply_json(value: Any, modifiers: "Modifiers", ctx: RuleContext) -> Any:
    if modifiers.has(*JSON_ENCODE_MODIFIERS):
        if ctx.compat_parameters is not None:
            value = ctx.compat_parameters
        if isinstance(value, Sequence) and not isinstance(value, str):
            if modifiers.has("pack"):
                value = [pack_whitespace(item) if isinstance(item, str) else item for item in value]
            elif modifiers.has("trim"):
                value = [item.strip() if isinstance(item, str) else item for item in value]
        return encode_json(value)
    if modifiers.has(*JSON_DECODE_MODIFIERS):
        if not isinstance(value, (str, bytes)):
            raise ctx.type_error(value, "JSON strings")
        return decode_json(value)
    return value


def _length_bounds(bounds: "Range", ctx: RuleContext) -> "tuple[int, Optional[int]]":
    minimum, maximum = bounds.minimum, bounds.maximum
    for bound in (minimum, maximum):
        if bound is not None and (not isinstance(bound, int) or bound < 0):
            msg = f"string length bounds must be non-negative integers, got {bound!r}"
            raise ctx.syntax_error(msg)
    return minimum or 0, maximum or None


def _apply_length_range(value: str, type_name: str, modifiers: "Modifiers", ctx: RuleContext) -> str:
    try:
        bounds = modifiers.range()
    except ValueError as exc:
        raise ctx.syntax_error(str(exc)) from exc
    if bounds is None:
        return value
    minimum, maximum = _length_bounds(bounds, ctx)
    length = len(value)
    if minimum and length < minimum:
        msg = (
            f"Invalid string length for `{ctx.token}` at index {ctx.index}: requires a minimum of {minimum} "
            f"characters but the value has {length}"
        )
        raise ParameterRangeError(msg, ctx.template, ctx.index)
    if maximum and length > maximum:
        if modifiers.has("crop"):
            return value[:maximum]
        msg = (
            f"Invalid string length for `{ctx.token}` at index {ctx.index}: allows a maximum of {maximum} "
            f"characters but the value has {length}; enable cropping with `%{type_name}:{minimum}:{maximum}:crop`"
        )
        raise ParameterRangeError(msg, ctx.template, ctx.index)
    return value


def _apply_case_and_hash(value: str, modifiers: "Modifiers") -> str:
    if modifiers.has(*LOWER_MODIFIERS):
        value = value.lower()
    if modifiers.has(*UPPER_MODIFIERS):
        value = value.upper()
    if modifiers.has("ucfirst"):
        value = ucfirst(value)
    if modifiers.has("ucwords"):
        value = ucwords(value)
    if modifiers.has("md5"):
        value = hashlib.md5(value.encode("utf-8")).hexdigest()  # noqa: S324
    algorithm = modifiers.first("sha1", "sha256", "sha384", "sha512")
    if algorithm is not None:
        value = hashlib.new(algorithm, value.encode("utf-8")).hexdigest()
    return value


def render_string(value: Any, type_name: str, modifiers: "Modifiers", ctx: RuleContext) -> str:
    """Rule for ``s``, ``string``, ``varchar``, ``char`` and ``text``.

    Applied in order: JSON encode/decode, ``pack``/``trim``, ``enull``,
    case and hash transforms, the ``min:max`` length check (``crop`` cuts
    instead of failing), then quoting (``raw``, ``noquot``, ``noescape``).
    """
    value = _apply_json(value, modifiers, ctx)
    if not isinstance(value, str):
        raise ctx.type_error(value, f"string values for %{type_name}")

    if modifiers.has("pack"):
        value = pack_whitespace(value)
    elif modifiers.has("trim"):
        value = value.strip()

    if modifiers.has("enull") and not value:
        return NULL

    value = _apply_case_and_hash(value, modifiers)
    value = _apply_length_range(value, type_name, modifiers, ctx)

    if modifiers.has("raw"):
        return value
    escaper = ctx.escaper
    if not modifiers.has("noescape"):
        value = escaper.escape(value)
    if modifiers.has("noquot"):
        return value
    return f"{escaper.quote_char}{value}{escaper.quote_char}"


def _clamp(value: Any, modifiers: "Modifiers", ctx: RuleContext) -> str:
    try:
        bounds = modifiers.range()
    except ValueError as exc:
        raise ctx.syntax_error(str(exc)) from exc
    if bounds is None:
        msg = "clamp requires a numeric range, e.g. `:clamp:10` or `:clamp:1:10`"
        raise ctx.syntax_error(msg)
    minimum = 0 if bounds.single else bounds.minimum
    maximum = bounds.maximum
    if minimum is not None and maximum is not None and minimum > maximum:
        msg = f"clamp minimum {minimum} is greater than maximum {maximum}"
        raise ctx.syntax_error(msg)
    number = to_number(value)
    clamped = number
    if minimum is not None and clamped < minimum:
        clamped = minimum
    if maximum is not None and clamped > maximum:
        clamped = maximum
    if clamped is number:
        return format_number(value)
    return format_number(clamped)


def render_numeric(value: Any, type_name: str, modifiers: "Modifiers", ctx: RuleContext) -> str:
    """Rule for ``d``, ``f``, ``e``, ``float``, ``id``, ``int``, ``byte``, ``bit``, ``integer`` and ``unsigned``.

    The value must be strictly numeric; ``:clamp[:min]:max`` limits it to a range.
    """
    if not classify(value).is_numeric:
        raise ctx.type_error(value, f"numeric values for %{type_name}")
    if modifiers.has("clamp"):
        return _clamp(value, modifiers, ctx)
    return format_number(value)


def render_clamp(value: Any, modifiers: "Modifiers", ctx: RuleContext) -> str:
    """Rule for ``%clamp:min:max``; a range is required."""
    if not classify(value).is_numeric:
        raise ctx.type_error(value, "numeric values for %clamp")
    return _clamp(value, modifiers, ctx)
