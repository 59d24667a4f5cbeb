"""Value classification and canonical number formatting.

A string only counts as a number when formatting it as a float reproduces
the exact same text, so ``"18"`` and ``"1.5"`` are numbers while ``"007"``,
``"5.0"``, ``" 5"`` and ``"1e3"`` stay strings and get quoted.
"""

import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Final, Union

from sqlprep.parameters.types import ValueCategory

__all__ = (
    "classify",
    "format_float",
    "format_number",
    "is_numeric",
    "to_number",
)

_MAX_PLAIN_INTEGRAL: Final = 1e15

Number = Union[int, float, Decimal]


def format_float(value: float) -> str:
    """Format a float the canonical way.

    Integral values below 1e15 print without a fractional part
    (``18.0`` -> ``"18"``); everything else uses :func:`repr`.
    """
    if value.is_integer() and abs(value) < _MAX_PLAIN_INTEGRAL:
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


def _classify_numeric_string(value: str) -> ValueCategory:
    try:
        number = float(value)
    except ValueError:
        return ValueCategory.STRING
    if not math.isfinite(number) or format_float(number) != value:
        return ValueCategory.STRING
    return ValueCategory.INTEGER if value.lstrip("-").isdigit() else ValueCategory.FLOAT


def classify(value: Any) -> ValueCategory:
    """Classify a parameter value.

    Args:
        value: The value to classify.

    Returns:
        The value's :class:`ValueCategory`. Numeric strings classify as
        INTEGER or FLOAT; non-finite floats as OTHER.
    """
    if value is None:
        return ValueCategory.NULL
    if isinstance(value, bool):
        return ValueCategory.BOOLEAN
    if isinstance(value, int):
        return ValueCategory.INTEGER
    if isinstance(value, float):
        return ValueCategory.FLOAT if math.isfinite(value) else ValueCategory.OTHER
    if isinstance(value, Decimal):
        return ValueCategory.FLOAT if value.is_finite() else ValueCategory.OTHER
    if isinstance(value, str):
        return _classify_numeric_string(value)
    if isinstance(value, (bytes, bytearray)):
        return ValueCategory.OTHER
    if isinstance(value, Mapping):
        return ValueCategory.MAPPING
    if isinstance(value, Sequence):
        return ValueCategory.SEQUENCE
    if callable(value):
        return ValueCategory.CALLABLE
    return ValueCategory.OTHER


def is_numeric(value: Any) -> bool:
    """Strict numeric test used to decide whether a value is emitted unquoted."""
    return classify(value).is_numeric


def to_number(value: Any) -> Number:
    """Convert a numeric value (including a numeric string) to a number.

    Raises:
        ValueError: If ``value`` is not strictly numeric.
    """
    category = classify(value)
    if not category.is_numeric:
        msg = f"{value!r} is not numeric"
        raise ValueError(msg)
    if isinstance(value, str):
        return int(value) if category is ValueCategory.INTEGER else float(value)
    return value  # type: ignore[no-any-return]


def format_number(value: Any) -> str:
    """Render a numeric value as SQL text.

    Numeric strings are emitted as given, since they already equal their canonical form.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        return format_float(value)
    return str(value)
