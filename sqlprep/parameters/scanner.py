"""Placeholder scanner.

Splits a template into literal spans and :class:`Placeholder` tokens with a
single compiled pattern. Alternatives are listed in priority order; the first
one that matches at a position wins, so ``??`` is a literal rather than two
``?`` placeholders and ``@id`` is a named raw lookup rather than a bare ``@``.
"""

import re
from collections.abc import Iterator
from functools import lru_cache
from typing import Final, Union

from sqlprep.parameters.types import Placeholder, PlaceholderKind

__all__ = (
    "TOKEN_REGEX",
    "Token",
    "count_positional",
    "has_placeholders",
    "scan",
    "tokenize",
)

Token = Union[str, Placeholder]

TOKEN_REGEX: Final = re.compile(
    r"""
    (?P<literal>\?\?|@@|%%|\\[?@%])
    | (?P<range>(?P<range_min>\?|\d+)\.\.(?P<range_max>\?|\d+))
    | (?P<array>\[(?P<content>.*?)\])
    | (?P<escaped>\?)
    | (?P<raw>@(?![A-Za-z]))
    | (?P<typed>
        (?P<sigil>[%:@])
        (?P<name>[A-Za-z0-9][A-Za-z0-9_-]*)
        (?P<modifiers>(?::[A-Za-z0-9_.+-]*)*)
        (?:\{(?P<argument>[^{}]*)\})?
      )
    | (?P<directive>%(?:sn?(?::?\d+)?|d|u\d*|f|h|H|x|X))
    """,
    re.VERBOSE | re.DOTALL,
)
"""Template grammar: literal escapes, ranges, arrays, bare ``?``/``@``, typed/named, sprintf directives."""

_TEMPLATE_CACHE_SIZE: Final = 512


def _placeholder_from_match(match: "re.Match[str]") -> Placeholder:
    text = match.group(0)
    position = match.start()
    if match.group("literal") is not None:
        return Placeholder(PlaceholderKind.LITERAL, text, position)
    if match.group("range") is not None:
        return Placeholder(
            PlaceholderKind.RANGE,
            text,
            position,
            range_min=match.group("range_min"),
            range_max=match.group("range_max"),
        )
    if match.group("array") is not None:
        return Placeholder(PlaceholderKind.ARRAY, text, position, content=match.group("content"))
    if match.group("escaped") is not None:
        return Placeholder(PlaceholderKind.ESCAPED, text, position)
    if match.group("raw") is not None:
        return Placeholder(PlaceholderKind.RAW, text, position)
    if match.group("typed") is not None:
        sigil = match.group("sigil")
        return Placeholder(
            PlaceholderKind.TYPED if sigil == "%" else PlaceholderKind.NAMED,
            text,
            position,
            sigil=sigil,
            name=match.group("name"),
            modifiers=match.group("modifiers") or "",
            argument=match.group("argument"),
        )
    return Placeholder(PlaceholderKind.DIRECTIVE, text, position)


@lru_cache(maxsize=_TEMPLATE_CACHE_SIZE)
def tokenize(template: str) -> "tuple[Token, ...]":
    """Split ``template`` into literal spans and placeholder tokens.

    Empty literal spans are never produced. Results are cached per template.

    Args:
        template: The template to scan.

    Returns:
        A tuple of ``str`` spans and :class:`Placeholder` tokens in template order.
    """
    tokens: list[Token] = []
    last_end = 0
    for match in TOKEN_REGEX.finditer(template):
        start = match.start()
        if start > last_end:
            tokens.append(template[last_end:start])
        tokens.append(_placeholder_from_match(match))
        last_end = match.end()
    if last_end < len(template):
        tokens.append(template[last_end:])
    return tuple(tokens)


def scan(template: str) -> Iterator[Token]:
    """Lazily yield the literal spans and placeholder tokens of ``template``.

    Every call returns a fresh iterator, so a template can be scanned any number of times.
    """
    yield from tokenize(template)


def count_positional(template: str) -> int:
    """Number of parameters ``template`` expects from a positional parameter list.

    Named tokens count once each, the same way the engine accounts for them
    when checking arity. ``?`` bounds of a range count once each.
    """
    return sum(token.consumes for token in tokenize(template) if isinstance(token, Placeholder))


def has_placeholders(template: str) -> bool:
    """Whether ``template`` contains anything besides literal text."""
    return any(isinstance(token, Placeholder) for token in tokenize(template))
