"""Type guard functions for runtime type checking in SQLPrep.

These narrow parameter values for the type checker and keep the
``str``/``bytes`` exclusion in one place.
"""

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

    from sqlprep.protocols import ConnectionProtocol, DBAPIConnectionProtocol, EscaperProtocol

__all__ = (
    "is_connection",
    "is_dbapi_connection",
    "is_escaper",
    "is_mapping_parameters",
    "is_sequence_parameters",
)


def is_sequence_parameters(obj: Any) -> "TypeGuard[Sequence[Any]]":
    """Check if a value is a parameter sequence (but not a string, bytes or mapping).

    Args:
        obj: The value to check.

    Returns:
        True if the value is a sequence of parameters.
    """
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes, bytearray))


def is_mapping_parameters(obj: Any) -> "TypeGuard[Mapping[str, Any]]":
    """Check if a value is a keyed parameter mapping."""
    return isinstance(obj, Mapping)


def is_escaper(obj: Any) -> "TypeGuard[EscaperProtocol]":
    from sqlprep.protocols import EscaperProtocol

    return isinstance(obj, EscaperProtocol)


def is_connection(obj: Any) -> "TypeGuard[ConnectionProtocol]":
    """Check if an object already implements the statement buffer's connection capability."""
    from sqlprep.protocols import ConnectionProtocol

    return isinstance(obj, ConnectionProtocol)


def is_dbapi_connection(obj: Any) -> "TypeGuard[DBAPIConnectionProtocol]":
    """Check if an object looks like a raw DB-API 2.0 connection."""
    from sqlprep.protocols import DBAPIConnectionProtocol

    return isinstance(obj, DBAPIConnectionProtocol)
