from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional, Union

from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from sqlprep.parameters.modifiers import Modifiers

__all__ = (
    "DictRow",
    "ModifierHandler",
    "ParameterValue",
    "ScalarValue",
    "StatementParameters",
    "TupleRow",
    "TypeHandler",
)

ScalarValue: TypeAlias = Union[None, bool, int, float, Decimal, str]
"""Values every placeholder kind accepts."""

ParameterValue: TypeAlias = Union[ScalarValue, Sequence[Any], Mapping[str, Any], Callable[..., Any]]
"""Anything that may appear in a parameter list."""

StatementParameters: TypeAlias = Union[Sequence[Any], Mapping[str, Any]]
"""A positional parameter list or a keyed parameter mapping."""

TypeHandler: TypeAlias = "Callable[[Any, Modifiers], Optional[str]]"
"""Custom ``%type`` rule; a ``str`` result is spliced verbatim, ``None`` falls back to the built-in rule."""

ModifierHandler: TypeAlias = "Callable[[Any, Modifiers], Any]"
"""Custom ``:modifier`` rule; returns the transformed value."""

DictRow: TypeAlias = dict[str, Any]
TupleRow: TypeAlias = tuple[Any, ...]
