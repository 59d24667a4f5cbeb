"""Modifier parsing for typed placeholders.

``%varchar:trim:crop:8:100{...}`` carries the modifier text
``:trim:crop:8:100`` and an optional ``{...}`` argument. The argument is
treated as one more colon separated modifier string, so
``%clamp{1:10}`` and ``%clamp:1:10`` are equivalent.
"""

import re
from typing import Final, NamedTuple, Optional, Union

__all__ = (
    "NULLABLE_MODIFIERS",
    "Modifiers",
    "Range",
    "parse_range",
)

NULLABLE_MODIFIERS: Final = frozenset({"n", "null", "nullable"})

_NUMBER_SEGMENT_RE: Final = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")
_INTEGER_SEGMENT_RE: Final = re.compile(r"[-+]?\d+")
_MAX_RANGE_SEGMENTS: Final = 2

Bound = Union[int, float]


class Range(NamedTuple):
    """A parsed ``min:max`` range; ``None`` means unbounded on that side."""

    minimum: Optional[Bound]
    maximum: Optional[Bound]
    single: bool
    """True when only one bound was written (``:max``)."""


def _is_range_segment(segment: str) -> bool:
    return segment == "" or _NUMBER_SEGMENT_RE.fullmatch(segment) is not None


def _to_bound(segment: str) -> Optional[Bound]:
    if segment == "":
        return None
    if _INTEGER_SEGMENT_RE.fullmatch(segment):
        return int(segment)
    return float(segment)


def parse_range(segments: "tuple[str, ...]") -> Optional[Range]:
    """Find the range in a modifier segment list.

    The range is the first run of consecutive numeric or empty segments that
    holds at least one number: ``8:100``, ``100`` (maximum only), ``8:``
    (minimum only) or ``:100``.

    Args:
        segments: Colon separated modifier segments.

    Raises:
        ValueError: If the run holds more than two bounds.

    Returns:
        The parsed :class:`Range`, or ``None`` when no range was written.
    """
    index = 0
    count = len(segments)
    while index < count:
        if not _is_range_segment(segments[index]):
            index += 1
            continue
        end = index
        while end < count and _is_range_segment(segments[end]):
            end += 1
        run = segments[index:end]
        if not any(run):
            index = end
            continue
        if len(run) > _MAX_RANGE_SEGMENTS:
            msg = f"expected at most {_MAX_RANGE_SEGMENTS} range bounds but found `{':'.join(run)}`"
            raise ValueError(msg)
        if len(run) == 1:
            return Range(None, _to_bound(run[0]), single=True)
        return Range(_to_bound(run[0]), _to_bound(run[1]), single=False)
    return None


class Modifiers:
    """Parsed modifiers of a typed or named placeholder."""

    __slots__ = ("argument", "names", "segments", "text")

    def __init__(self, text: str = "", argument: Optional[str] = None) -> None:
        self.text = text
        """Modifier text as written, including the leading colon."""
        self.argument = argument
        """Content of the ``{...}`` blob, if any."""
        combined = text + (f":{argument}" if argument else "")
        self.segments: tuple[str, ...] = tuple(combined[1:].split(":")) if combined else ()
        self.names: tuple[str, ...] = tuple(
            segment.lower() for segment in self.segments if segment and not _is_range_segment(segment)
        )
        """Non-numeric segments, lowercased, in written order."""

    def has(self, *names: str) -> bool:
        """Whether any of ``names`` was given."""
        return any(name in self.names for name in names)

    def first(self, *names: str) -> Optional[str]:
        """Return the first of ``names`` (in argument order) that was given."""
        for name in names:
            if name in self.names:
                return name
        return None

    @property
    def nullable(self) -> bool:
        return any(name in NULLABLE_MODIFIERS for name in self.names)

    def range(self) -> Optional[Range]:
        """Parse the length or clamp range. See :func:`parse_range`."""
        return parse_range(self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Modifiers):
            return False
        return self.segments == other.segments

    def __hash__(self) -> int:
        return hash(self.segments)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(text={self.text!r}, argument={self.argument!r})"
