"""Tests for fallible.core.result module."""

import json

import pytest

from fallible.core.errors import DomainError, UnwrapError
from fallible.core.result import (
    SUCCEEDED,
    Failure,
    Result,
    Success,
    catching,
    failed,
    from_bool,
    from_optional,
    from_sentinel,
    succeeded,
)


class TestSuccess:
    """Test Success class."""

    def test_create_success(self):
        result = succeeded(42)
        assert result.value == 42
        assert result.error is None
        assert result.is_success() is True
        assert result.is_failure() is False

    @pytest.mark.parametrize("value", [0, "", None, [], {"k": 1}, False])
    def test_value_round_trips_falsy_values(self, value):
        result = succeeded(value)
        assert result.is_success()
        assert result.value == value

    def test_unwrap(self):
        assert succeeded("hello").unwrap() == "hello"

    def test_unwrap_or(self):
        assert succeeded(10).unwrap_or(99) == 10

    def test_unwrap_or_else(self):
        assert succeeded(20).unwrap_or_else(lambda e: 99) == 20

    def test_unwrap_error_raises(self):
        with pytest.raises(UnwrapError):
            succeeded(1).unwrap_error()

    def test_to_dict(self):
        d = succeeded({"key": "value"}).to_dict()
        assert d == {"ok": True, "value": {"key": "value"}}

    def test_repr(self):
        assert repr(succeeded("hi")) == "Success('hi')"

    def test_success_is_immutable(self):
        result = succeeded(42)
        with pytest.raises(Exception):  # FrozenInstanceError or AttributeError
            result.value = 99

    def test_equality_is_structural(self):
        assert succeeded(1) == Success(1)
        assert succeeded(1) != succeeded(2)

    def test_succeeded_constant(self):
        assert SUCCEEDED.is_success()
        assert SUCCEEDED.value is None
        assert succeeded() == SUCCEEDED


class TestFailure:
    """Test Failure class."""

    def test_create_failure(self, not_found):
        result = failed(not_found)
        assert result.error is not_found
        assert result.value is None
        assert result.is_success() is False
        assert result.is_failure() is True

    def test_unwrap_raises_held_error(self, not_found):
        with pytest.raises(DomainError, match="No such file"):
            failed(not_found).unwrap()

    def test_unwrap_or(self, not_found):
        assert failed(not_found).unwrap_or(99) == 99

    def test_unwrap_or_else(self, not_found):
        assert failed(not_found).unwrap_or_else(lambda e: e.code) == 260

    def test_unwrap_error(self, not_found):
        assert failed(not_found).unwrap_error() is not_found

    def test_failed_rejects_non_exceptions(self):
        with pytest.raises(TypeError):
            failed("not an exception")

    def test_to_dict_domain_error(self, corrupt):
        d = failed(corrupt).to_dict()
        assert d["ok"] is False
        assert d["error"]["domain"] == "storage.read"
        assert d["error"]["code"] == 259
        assert d["error"]["detail"] == {"path": "/tmp/notes.plist"}

    def test_to_dict_plain_exception(self):
        d = failed(KeyError("missing")).to_dict()
        assert d["error"]["error_type"] == "KeyError"
        assert d["error"]["domain"] == "builtins.KeyError"
        assert d["error"]["code"] == 0

    def test_repr_includes_domain_code_and_detail(self, corrupt):
        text = repr(failed(corrupt))
        assert text.startswith("Failure(storage.read/259 ")
        assert "The data was not saved correctly." in text
        assert "/tmp/notes.plist" in text

    def test_failure_is_immutable(self, not_found):
        result = failed(not_found)
        with pytest.raises(Exception):  # FrozenInstanceError or AttributeError
            result.error = ValueError("new")


class TestPatternMatching:
    """Test pattern matching with Result."""

    def test_match_success(self):
        match succeeded(42):
            case Success(value):
                assert value == 42
            case Failure(error):
                pytest.fail("Should not match Failure")

    def test_match_failure(self, not_found):
        match failed(not_found):
            case Success(value):
                pytest.fail("Should not match Success")
            case Failure(error):
                assert error is not_found


class TestCatching:
    """Test bridging exception-raising calls into results."""

    def test_return_value_becomes_success(self):
        assert catching(json.loads, '{"a": 1}').value == {"a": 1}

    def test_exception_becomes_failure(self):
        result = catching(json.loads, "invalid")
        assert result.is_failure()
        assert isinstance(result.error, json.JSONDecodeError)

    def test_keyword_arguments_are_forwarded(self):
        assert catching(int, "ff", base=16).value == 255

    def test_narrowed_exceptions(self):
        assert catching(int, "x", exceptions=(ValueError,)).is_failure()

    def test_other_exceptions_propagate(self):
        def boom():
            raise KeyError("boom")

        with pytest.raises(KeyError):
            catching(boom, exceptions=(ValueError,))


class TestConversions:
    """Test None/False/sentinel failure conventions."""

    def test_from_optional_value(self, not_found):
        assert from_optional({"a": 1}.get("a"), not_found).value == 1

    def test_from_optional_none(self, not_found):
        result = from_optional({}.get("a"), not_found)
        assert result.error is not_found

    def test_from_optional_keeps_falsy_values(self, not_found):
        assert from_optional(0, not_found).value == 0

    def test_from_bool_true(self, denied):
        result = from_bool(True, denied)
        assert result == SUCCEEDED

    def test_from_bool_true_with_value(self, denied):
        assert from_bool(True, denied, value="written").value == "written"

    def test_from_bool_false(self, denied):
        assert from_bool(False, denied).error is denied

    def test_from_sentinel(self, not_found):
        assert from_sentinel("abc".find("b"), -1, not_found).value == 1
        assert from_sentinel("abc".find("z"), -1, not_found).error is not_found


class TestMonadLaws:
    """Identity and associativity of then()."""

    @pytest.fixture(params=["success", "failure"])
    def result(self, request, not_found) -> Result[int]:
        return succeeded(3) if request.param == "success" else failed(not_found)

    def test_right_identity(self, result):
        assert result.then(succeeded) == result

    def test_left_identity(self):
        def f(x):
            return succeeded(x + 1)

        assert succeeded(3).then(f) == f(3)

    def test_associativity(self, result, denied):
        def f(x):
            return succeeded(x * 2)

        def g(x):
            return succeeded(x + 1) if x < 5 else failed(denied)

        assert result.then(f).then(g) == result.then(lambda x: f(x).then(g))
