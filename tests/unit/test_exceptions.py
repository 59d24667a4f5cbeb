"""Tests for the exception hierarchy and the exception wrapper."""

import pytest

from sqlprep.exceptions import (
    ArityError,
    NullabilityError,
    ParameterError,
    ParameterRangeError,
    ParameterTypeError,
    PlaceholderSyntaxError,
    QueryError,
    SQLBuilderError,
    SQLPrepError,
    UnknownKeyError,
    wrap_exceptions,
)


def test_detail_and_repr() -> None:
    error = SQLPrepError("first", "second")
    assert error.detail == "first"
    assert str(error) == "second first"
    assert repr(error) == "SQLPrepError - first"
    assert repr(SQLPrepError()) == "SQLPrepError"


def test_builder_error_default_message() -> None:
    assert str(SQLBuilderError()) == "Issues building SQL statement."


def test_parameter_error_carries_template() -> None:
    error = ParameterError("Bad value", sql="SELECT ?")
    assert error.sql == "SELECT ?"
    assert str(error) == "Bad value\nSQL: SELECT ?"


def test_arity_error() -> None:
    error = ArityError("a = ? AND b = ?", expected=2, received=1)
    assert (error.expected, error.received) == (2, 1)
    assert "expected 2 but received 1" in str(error)
    assert error.sql == "a = ? AND b = ?"


@pytest.mark.parametrize(
    ("error", "builtin"),
    [
        (ParameterTypeError("x"), TypeError),
        (ParameterRangeError("x"), ValueError),
        (NullabilityError("x"), ValueError),
        (PlaceholderSyntaxError("x"), ValueError),
        (UnknownKeyError("name"), KeyError),
    ],
)
def test_parameter_errors_are_builtin_errors(error: ParameterError, builtin: type) -> None:
    assert isinstance(error, builtin)
    assert isinstance(error, ParameterError)
    assert isinstance(error, SQLPrepError)


def test_unknown_key_error() -> None:
    error = UnknownKeyError("name", sql=":name")
    assert error.key == "name"
    assert "Invalid parameter key `name`" in str(error)


def test_wrap_exceptions() -> None:
    with pytest.raises(QueryError) as exc_info, wrap_exceptions():
        raise RuntimeError("boom")
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert "boom" in str(exc_info.value)


def test_wrap_exceptions_passes_library_errors() -> None:
    with pytest.raises(SQLBuilderError), wrap_exceptions():
        raise SQLBuilderError("bad")


def test_wrap_exceptions_disabled() -> None:
    with pytest.raises(RuntimeError), wrap_exceptions(wrap_exceptions=False):
        raise RuntimeError("boom")
