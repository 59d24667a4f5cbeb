"""Keyword table used by the statement builder methods.

Clause keywords carry their own line breaks and indentation, so a chained
statement reads like hand-formatted SQL. :meth:`Keywords.single_line` and
:meth:`Keywords.lower_case` derive alternative tables.
"""

import re
from collections.abc import Iterator, Mapping
from typing import Final, Optional

__all__ = ("DEFAULT_KEYWORDS", "Keywords")

_WHITESPACE_RE: Final = re.compile(r"\s+")

_DEFAULT_TABLE: Final[dict[str, str]] = {
    "EXPLAIN": "EXPLAIN ",
    "SELECT": "SELECT ",
    "DELETE": "DELETE ",
    "INSERT": "INSERT ",
    "UPDATE": "UPDATE ",
    "CALL": "CALL ",
    "INSERT_INTO": "INSERT INTO ",
    "DELETE_FROM": "DELETE FROM ",
    "SELECT_DISTINCT": "SELECT DISTINCT ",
    "DISTINCT": "DISTINCT ",
    "IGNORE": "IGNORE ",
    "HIGH_PRIORITY": "HIGH_PRIORITY ",
    "INTO": "INTO ",
    "FROM": "\nFROM\n\t",
    "JOIN": "\n\tJOIN\n\t\t",
    "LEFT_JOIN": "\n\tLEFT JOIN\n\t\t",
    "LEFT_OUTER_JOIN": "\n\tLEFT OUTER JOIN\n\t\t",
    "RIGHT_JOIN": "\n\tRIGHT JOIN\n\t\t",
    "RIGHT_OUTER_JOIN": "\n\tRIGHT OUTER JOIN\n\t\t",
    "INNER_JOIN": "\n\tINNER JOIN\n\t\t",
    "OUTER_JOIN": "\n\tOUTER JOIN\n\t\t",
    "CROSS_JOIN": "\n\tCROSS JOIN\n\t\t",
    "STRAIGHT_JOIN": "\n\tSTRAIGHT_JOIN\n\t\t",
    "NATURAL_JOIN": "\n\tNATURAL JOIN\n\t\t",
    "WHERE": "\nWHERE\n\t",
    "GROUP_BY": "\nGROUP BY ",
    "HAVING": "\nHAVING ",
    "ORDER_BY": "\nORDER BY ",
    "LIMIT": "\nLIMIT ",
    "OFFSET": " OFFSET ",
    "UNION": "\nUNION\n",
    "UNION_ALL": "\nUNION ALL\n",
    "VALUES": " VALUES ",
    "SET": " SET ",
    "ON": " ON ",
    "USING": " USING ",
    "AS": " AS ",
    "IN": " IN ",
    "LIKE": " LIKE ",
    "NOT_LIKE": " NOT LIKE ",
    "ASC": " ASC",
    "DESC": " DESC",
    "NULL": "NULL",
}


class Keywords(Mapping[str, str]):
    """Immutable mapping from keyword name to the text the builder appends.

    Args:
        table: Base table. Defaults to the built-in keyword table.
        **overrides: Individual keyword texts to replace.
    """

    __slots__ = ("_table",)

    def __init__(self, table: Optional[Mapping[str, str]] = None, **overrides: str) -> None:
        self._table: dict[str, str] = {**(table if table is not None else _DEFAULT_TABLE), **overrides}

    def __getitem__(self, key: str) -> str:
        return self._table[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def single_line(self) -> "Keywords":
        """Return a table with every whitespace run collapsed to one space."""
        return Keywords({key: _WHITESPACE_RE.sub(" ", text) for key, text in self._table.items()})

    def lower_case(self) -> "Keywords":
        """Return a table with lowercase keyword texts."""
        return Keywords({key: text.lower() for key, text in self._table.items()})

    def replace(self, **overrides: str) -> "Keywords":
        return Keywords(self._table, **overrides)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._table)} keywords)"


DEFAULT_KEYWORDS: Final = Keywords()
