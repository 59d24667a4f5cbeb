"""Token and value category types shared by the scanner and the engine."""

from enum import Enum
from typing import Optional

__all__ = (
    "CONSUMING_KINDS",
    "Placeholder",
    "PlaceholderKind",
    "ValueCategory",
)


class PlaceholderKind(str, Enum):
    """Placeholder kinds recognized in a template."""

    LITERAL = "literal"
    """``??``, ``@@``, ``%%``, ``\\?``, ``\\@`` or ``\\%``: a single literal character."""
    RANGE = "range"
    """``a..b``: inclusive integer list, either bound may be ``?``."""
    ARRAY = "array"
    """``[...]``: array expansion or a sub-template."""
    ESCAPED = "escaped"
    """``?``: quoted and escaped value."""
    RAW = "raw"
    """``@``: value emitted without quoting or escaping."""
    TYPED = "typed"
    """``%type:modifier{arg}``: positional value run through a type rule."""
    NAMED = "named"
    """``:name`` or ``@name``: value looked up by key."""
    DIRECTIVE = "directive"
    """sprintf style directive kept verbatim."""

    def __str__(self) -> str:
        return self.value


class ValueCategory(str, Enum):
    """Categories a parameter value is classified into."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    CALLABLE = "callable"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @property
    def is_numeric(self) -> bool:
        return self in {ValueCategory.INTEGER, ValueCategory.FLOAT}

    @property
    def is_scalar(self) -> bool:
        return self in {
            ValueCategory.NULL,
            ValueCategory.BOOLEAN,
            ValueCategory.INTEGER,
            ValueCategory.FLOAT,
            ValueCategory.STRING,
        }


class Placeholder:
    """A placeholder token found in a template.

    Carries the full matched text, its offset in the template and every
    captured group, so the engine never has to re-scan the template.
    """

    __slots__ = (
        "argument",
        "content",
        "kind",
        "modifiers",
        "name",
        "position",
        "range_max",
        "range_min",
        "sigil",
        "text",
    )

    def __init__(
        self,
        kind: PlaceholderKind,
        text: str,
        position: int,
        *,
        sigil: Optional[str] = None,
        name: Optional[str] = None,
        modifiers: str = "",
        argument: Optional[str] = None,
        content: Optional[str] = None,
        range_min: Optional[str] = None,
        range_max: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.text = text
        self.position = position
        self.sigil = sigil
        """``%``, ``:`` or ``@`` for typed and named tokens."""
        self.name = name
        """Type name for ``%type``, key for named tokens."""
        self.modifiers = modifiers
        """Raw ``:modifier`` text including the leading colon."""
        self.argument = argument
        """Content of the ``{...}`` blob without braces."""
        self.content = content
        """Content of a ``[...]`` token without brackets."""
        self.range_min = range_min
        self.range_max = range_max

    @property
    def literal(self) -> str:
        """Character a LITERAL token stands for."""
        return self.text[-1]

    @property
    def is_raw(self) -> bool:
        """Whether the token emits its value without quoting or escaping."""
        return self.kind is PlaceholderKind.RAW or (self.kind is PlaceholderKind.NAMED and self.sigil == "@")

    @property
    def consumes(self) -> int:
        """Number of parameters this token takes from a positional list."""
        if self.kind is PlaceholderKind.RANGE:
            return (self.range_min == "?") + (self.range_max == "?")
        return 1 if self.kind in CONSUMING_KINDS else 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return False
        return self.kind == other.kind and self.text == other.text and self.position == other.position

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.position))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, text={self.text!r}, position={self.position!r})"


CONSUMING_KINDS = frozenset(
    {
        PlaceholderKind.ARRAY,
        PlaceholderKind.ESCAPED,
        PlaceholderKind.RAW,
        PlaceholderKind.TYPED,
        PlaceholderKind.NAMED,
    }
)
"""Kinds that count one parameter each towards the arity check."""
