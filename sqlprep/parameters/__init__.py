"""Template placeholder processing: scanner, classifier, registry and the prepare engine."""

from sqlprep.parameters.classifier import classify, format_float, format_number, is_numeric, to_number
from sqlprep.parameters.engine import PreparedStatement, PrepareEngine, prepare, prepare_statement
from sqlprep.parameters.modifiers import Modifiers, Range, parse_range
from sqlprep.parameters.registry import (
    BUILTIN_TYPES,
    BuiltinType,
    TypeRegistry,
    register_modifier,
    register_type,
    type_registry,
    unregister_modifier,
    unregister_type,
)
from sqlprep.parameters.scanner import count_positional, scan, tokenize
from sqlprep.parameters.types import Placeholder, PlaceholderKind, ValueCategory

__all__ = (
    "BUILTIN_TYPES",
    "BuiltinType",
    "Modifiers",
    "Placeholder",
    "PlaceholderKind",
    "PrepareEngine",
    "PreparedStatement",
    "Range",
    "TypeRegistry",
    "ValueCategory",
    "classify",
    "count_positional",
    "format_float",
    "format_number",
    "is_numeric",
    "parse_range",
    "prepare",
    "prepare_statement",
    "register_modifier",
    "register_type",
    "scan",
    "to_number",
    "tokenize",
    "type_registry",
    "unregister_modifier",
    "unregister_type",
)
