"""String helpers used by the string modifiers."""

import re

__all__ = (
    "pack_whitespace",
    "ucfirst",
    "ucwords",
)

_WHITESPACE_RUN_RE = re.compile(r"\s+")
_WORD_START_RE = re.compile(r"(^|[ \t\r\n\f\v])(\S)")


def pack_whitespace(value: str) -> str:
    """Collapse every whitespace run to a single space and strip both ends.

    Args:
        value: The string to pack.

    Returns:
        str: The packed string.
    """
    return _WHITESPACE_RUN_RE.sub(" ", value).strip()


def ucfirst(value: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return value[:1].upper() + value[1:]


def ucwords(value: str) -> str:
    """Uppercase the first character of every whitespace separated word.

    Unlike :meth:`str.title`, characters after the first of each word keep their case.
    """
    return _WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), value)
