"""Error class hierarchy tests."""

import pytest

from pyjson2sql._errors import (
    JSONToSQLError,
    MaxDepthExceededError,
    ParseError,
    UnexpectedValueTypeError,
)


class TestJSONToSQLErrorBase:
    def test_str_returns_user_message(self):
        err = JSONToSQLError("user msg", "internal detail")
        assert str(err) == "user msg"

    def test_internal_returns_details(self):
        err = JSONToSQLError("user msg", "internal detail")
        assert err.internal() == "internal detail"

    def test_internal_defaults_to_user_message(self):
        err = JSONToSQLError("same message")
        assert err.internal() == "same message"

    def test_wrapped_exception(self):
        cause = ValueError("root cause")
        err = JSONToSQLError("user msg", wrapped=cause)
        assert err.wrapped is cause


class TestErrorHierarchy:
    @pytest.mark.parametrize("cls", [ParseError, MaxDepthExceededError])
    def test_recoverable(self, cls):
        assert issubclass(cls, JSONToSQLError)

    def test_depth_is_parse_error(self):
        assert issubclass(MaxDepthExceededError, ParseError)

    def test_invariant_violation_outside_hierarchy(self):
        assert not issubclass(UnexpectedValueTypeError, JSONToSQLError)
        assert issubclass(UnexpectedValueTypeError, RuntimeError)
