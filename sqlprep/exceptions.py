from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, Optional

__all__ = (
    "ArityError",
    "ImproperConfigurationError",
    "NullabilityError",
    "ParameterError",
    "ParameterRangeError",
    "ParameterTypeError",
    "PlaceholderSyntaxError",
    "QueryError",
    "SQLBuilderError",
    "SQLPrepError",
    "SerializationError",
    "UnknownKeyError",
    "wrap_exceptions",
)


class SQLPrepError(Exception):
    """Base exception class from which all SQLPrep exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLPrepError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(SQLPrepError):
    """Improper Configuration error.

    Raised when an operation needs a connection or escaper that has not been configured.
    """


class SerializationError(SQLPrepError):
    """Encoding or decoding of an object failed."""


class SQLBuilderError(SQLPrepError):
    """Issues building SQL statements."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class QueryError(SQLPrepError):
    """Raised when the database driver fails to run a statement."""


# -- Template Parameter Errors --
class ParameterError(SQLPrepError):
    """Base class for errors raised while preparing a template."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional template context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class ArityError(ParameterError):
    """Raised when the number of placeholders and supplied parameters disagree."""

    expected: int
    received: int

    def __init__(self, sql: str, expected: int, received: int, message: Optional[str] = None) -> None:
        if message is None:
            message = (
                f"Invalid number of parameters ({received}) supplied to prepare(`{sql}`): "
                f"expected {expected} but received {received}"
            )
        super().__init__(message)
        self.sql = sql
        self.expected = expected
        self.received = received


class ParameterTypeError(ParameterError, TypeError):
    """Raised when a value's category does not fit the placeholder or declared type."""

    index: Any

    def __init__(self, message: str, sql: Optional[str] = None, index: Any = None) -> None:
        super().__init__(message, sql)
        self.index = index


class ParameterRangeError(ParameterError, ValueError):
    """Raised when a string length falls outside a declared ``min:max`` range."""

    index: Any

    def __init__(self, message: str, sql: Optional[str] = None, index: Any = None) -> None:
        super().__init__(message, sql)
        self.index = index


class UnknownKeyError(ParameterError, KeyError):
    """Raised when a named placeholder matches no key of the parameter mapping."""

    key: str

    def __init__(self, key: str, sql: Optional[str] = None) -> None:
        super().__init__(f"Invalid parameter key `{key}`", sql)
        self.key = key


class NullabilityError(ParameterError, ValueError):
    """Raised when ``None`` is supplied to a typed placeholder that is not nullable."""

    index: Any

    def __init__(self, message: str, sql: Optional[str] = None, index: Any = None) -> None:
        super().__init__(message, sql)
        self.index = index


class PlaceholderSyntaxError(ParameterError, ValueError):
    """Raised when a placeholder carries malformed range or clamp arguments."""


@contextmanager
def wrap_exceptions(wrap_exceptions: bool = True) -> Generator[None, None, None]:
    try:
        yield

    except SQLPrepError:
        raise
    except Exception as exc:
        if wrap_exceptions is False:
            raise
        msg = f"An error occurred during the operation: {exc}"
        raise QueryError(detail=msg) from exc
