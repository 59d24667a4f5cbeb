"""Type and modifier registry.

Built-in type names map to a :class:`BuiltinType` family and can never be
removed. Custom handlers registered under the same name shadow the built-in
rule until they are unregistered.
"""

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING, Final, Optional

from mypy_extensions import mypyc_attr

if TYPE_CHECKING:
    from sqlprep.typing import ModifierHandler, TypeHandler

__all__ = (
    "BUILTIN_TYPES",
    "BuiltinType",
    "TypeRegistry",
    "register_modifier",
    "register_type",
    "type_registry",
    "unregister_modifier",
    "unregister_type",
)

logger = logging.getLogger("sqlprep.registry")


class BuiltinType(str, Enum):
    """Families of built-in type rules."""

    STRING = "string"
    NUMERIC = "numeric"
    CLAMP = "clamp"
    PASSTHROUGH = "passthrough"

    def __str__(self) -> str:
        return self.value


BUILTIN_TYPES: Final[dict[str, BuiltinType]] = {
    **dict.fromkeys(("s", "string", "varchar", "char", "text"), BuiltinType.STRING),
    **dict.fromkeys(
        ("d", "f", "e", "float", "id", "int", "byte", "bit", "integer", "unsigned"), BuiltinType.NUMERIC
    ),
    "clamp": BuiltinType.CLAMP,
    **dict.fromkeys(("bool", "boolean", "date", "datetime", "timestamp"), BuiltinType.PASSTHROUGH),
}


@mypyc_attr(allow_interpreted_subclasses=True)
class TypeRegistry:
    """Registry of custom type and modifier handlers.

    Mutation is serialized by a lock and replaces the handler tables
    wholesale, so lookups never observe a half-applied registration.

    Example:
        registry = TypeRegistry()
        registry.register_type("upper", lambda value, modifiers: repr(str(value).upper()))
    """

    __slots__ = ("_lock", "_modifiers", "_types")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._types: "dict[str, TypeHandler]" = {}
        self._modifiers: "dict[str, ModifierHandler]" = {}

    def register_type(self, name: str, handler: "TypeHandler") -> None:
        """Register a handler for ``%name`` placeholders.

        A later registration under the same name replaces the earlier one.

        Args:
            name: Type name as written after ``%``.
            handler: Called with ``(value, modifiers)``; a ``str`` result is
                spliced verbatim, ``None`` falls back to the built-in rule.
        """
        with self._lock:
            types = dict(self._types)
            types[name] = handler
            self._types = types
        logger.debug("Registered type handler %r (shadows built-in: %s)", name, name in BUILTIN_TYPES)

    def register_modifier(self, name: str, handler: "ModifierHandler") -> None:
        """Register a handler for the ``:name`` modifier.

        Args:
            name: Modifier name, matched case-insensitively.
            handler: Called with ``(value, modifiers)``; returns the transformed value.
        """
        key = name.lower()
        with self._lock:
            modifiers = dict(self._modifiers)
            modifiers[key] = handler
            self._modifiers = modifiers
        logger.debug("Registered modifier handler %r", key)

    def unregister_type(self, name: str) -> None:
        """Remove a custom type handler, restoring the built-in rule if there is one."""
        with self._lock:
            types = dict(self._types)
            types.pop(name, None)
            self._types = types

    def unregister_modifier(self, name: str) -> None:
        with self._lock:
            modifiers = dict(self._modifiers)
            modifiers.pop(name.lower(), None)
            self._modifiers = modifiers

    def get_type_handler(self, name: str) -> "Optional[TypeHandler]":
        return self._types.get(name)

    def get_modifier_handler(self, name: str) -> "Optional[ModifierHandler]":
        return self._modifiers.get(name.lower())

    def modifier_handlers(self, names: "tuple[str, ...]") -> "list[tuple[str, ModifierHandler]]":
        """Return the custom handlers for ``names`` in the order they were written."""
        modifiers = self._modifiers
        return [(name, modifiers[name]) for name in names if name in modifiers]

    @staticmethod
    def builtin_type(name: str) -> Optional[BuiltinType]:
        """Return the built-in family of ``name``, or ``None`` for unknown names."""
        return BUILTIN_TYPES.get(name)

    def has_type(self, name: str) -> bool:
        """Whether ``name`` has a custom handler or a built-in rule."""
        return name in self._types or name in BUILTIN_TYPES

    def copy(self) -> "TypeRegistry":
        """Return an independent registry with the same custom handlers."""
        registry = TypeRegistry()
        registry._types = dict(self._types)
        registry._modifiers = dict(self._modifiers)
        return registry

    def clear(self) -> None:
        """Drop every custom handler."""
        with self._lock:
            self._types = {}
            self._modifiers = {}

    @property
    def custom_types(self) -> "tuple[str, ...]":
        return tuple(self._types)

    @property
    def custom_modifiers(self) -> "tuple[str, ...]":
        return tuple(self._modifiers)


type_registry = TypeRegistry()
"""Process default registry used when no registry is configured explicitly."""


def register_type(name: str, handler: "TypeHandler", registry: Optional[TypeRegistry] = None) -> None:
    """Register a custom type handler on ``registry`` (default: the process registry)."""
    (registry or type_registry).register_type(name, handler)


def register_modifier(name: str, handler: "ModifierHandler", registry: Optional[TypeRegistry] = None) -> None:
    """Register a custom modifier handler on ``registry`` (default: the process registry)."""
    (registry or type_registry).register_modifier(name, handler)


def unregister_type(name: str, registry: Optional[TypeRegistry] = None) -> None:
    (registry or type_registry).unregister_type(name)


def unregister_modifier(name: str, registry: Optional[TypeRegistry] = None) -> None:
    (registry or type_registry).unregister_modifier(name)
