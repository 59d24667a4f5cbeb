"""String escaping and quoting for SQL literals.

Every escaper implements :class:`~sqlprep.protocols.EscaperProtocol`:
``escape`` makes a string safe to sit between quote characters and
``quote`` also adds the quotes.
"""

import logging
import re
from typing import TYPE_CHECKING, Final, Optional

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect, DialectType
from sqlglot.errors import SqlglotError

from sqlprep.exceptions import ImproperConfigurationError

if TYPE_CHECKING:
    from sqlprep.protocols import EscaperProtocol

__all__ = (
    "DialectEscaper",
    "MySQLEscaper",
    "StandardEscaper",
    "escape_like",
    "get_escaper",
)

logger = logging.getLogger("sqlprep.escaping")

_MYSQL_TRANSLATION: Final = str.maketrans(
    {
        "'": "\\'",
        '"': '\\"',
        "\\": "\\\\",
        "\n": "\\n",
        "\r": "\\r",
        "\x00": "\\0",
        "\x1a": "\\Z",
    }
)
_LIKE_WILDCARD_RE: Final = re.compile(r"[%_]")
_BACKSLASH_DIALECTS: Final = frozenset({"mysql", "mariadb"})
_STANDARD_DIALECTS: Final = frozenset({"standard", "ansi", "sqlite", "postgres", "postgresql"})


class MySQLEscaper:
    """Backslash escaping as done by ``mysql_real_escape_string``.

    Escapes ``'``, ``"`` and ``\\`` with a backslash and encodes NUL, LF, CR
    and Ctrl-Z as ``\\0``, ``\\n``, ``\\r`` and ``\\Z``.
    """

    __slots__ = ("quote_char",)

    def __init__(self, quote_char: str = '"') -> None:
        self.quote_char = quote_char

    def escape(self, value: str) -> str:
        return value.translate(_MYSQL_TRANSLATION)

    def quote(self, value: str) -> str:
        return f"{self.quote_char}{self.escape(value)}{self.quote_char}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(quote_char={self.quote_char!r})"


class StandardEscaper:
    """SQL standard escaping: the quote character is doubled, nothing else changes.

    Matches SQLite and PostgreSQL with ``standard_conforming_strings`` on.
    """

    __slots__ = ("quote_char",)

    def __init__(self, quote_char: str = "'") -> None:
        self.quote_char = quote_char

    def escape(self, value: str) -> str:
        return value.replace(self.quote_char, self.quote_char * 2)

    def quote(self, value: str) -> str:
        return f"{self.quote_char}{self.escape(value)}{self.quote_char}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(quote_char={self.quote_char!r})"


class DialectEscaper:
    """Render string literals with sqlglot's generator for ``dialect``.

    Args:
        dialect: Any dialect name or instance sqlglot understands.

    Raises:
        ImproperConfigurationError: If sqlglot does not know the dialect.
    """

    __slots__ = ("_dialect", "quote_char")

    def __init__(self, dialect: DialectType) -> None:
        try:
            self._dialect = Dialect.get_or_raise(dialect)
        except (SqlglotError, ValueError) as exc:
            msg = f"Unknown SQL dialect {dialect!r}"
            raise ImproperConfigurationError(msg) from exc
        self.quote_char = self.quote("")[0]

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def quote(self, value: str) -> str:
        return exp.Literal.string(value).sql(dialect=self._dialect)

    def escape(self, value: str) -> str:
        return self.quote(value)[1:-1]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dialect={type(self._dialect).__name__})"


def get_escaper(dialect: Optional[str] = None) -> "EscaperProtocol":
    """Return the escaper for a dialect name.

    ``None``, ``mysql`` and ``mariadb`` use backslash escaping; ``standard``,
    ``ansi``, ``sqlite`` and ``postgres`` double the quote character; any
    other name is handed to sqlglot.
    """
    if dialect is None:
        return MySQLEscaper()
    name = dialect.lower()
    if name in _BACKSLASH_DIALECTS:
        return MySQLEscaper()
    if name in _STANDARD_DIALECTS:
        return StandardEscaper()
    logger.debug("Using sqlglot literal rendering for dialect %r", name)
    return DialectEscaper(name)


def escape_like(value: str, escape_char: str = "\\") -> str:
    """Prefix the ``LIKE`` wildcards ``%`` and ``_`` with ``escape_char``.

    Other characters are left alone, so the result can be string-escaped
    before or after without doubling backslashes.
    """
    return _LIKE_WILDCARD_RE.sub(lambda match: escape_char + match.group(0), value)
