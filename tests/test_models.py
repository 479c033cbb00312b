# SPDX-License-Identifier: Apache-2.0
"""Tests for validation helpers and the error hierarchy."""

import pytest

from belocal import (
    ALLOWED_CONTEXT_KEYS,
    BeLocalError,
    BeLocalException,
    CacheType,
    ConfigurationError,
    ContextKey,
    ErrorCode,
    InvalidInputError,
)
from belocal.models import validate_context, validate_texts


class TestValidateTexts:
    """Test validate_texts."""

    def test_accepts_list_and_tuple(self) -> None:
        assert validate_texts(["a", "b"]) == ["a", "b"]
        assert validate_texts(("a", "")) == ["a", ""]

    @pytest.mark.parametrize("bad", [123, None, ["nested"], True])
    def test_rejects_non_string_element(self, bad: object) -> None:
        """Any non-string element should raise with its index."""
        with pytest.raises(InvalidInputError) as exc_info:
            validate_texts(["Hello", bad, "World"])
        assert "element at index 1" in str(exc_info.value)

    def test_rejects_plain_string(self) -> None:
        """A bare string is not a list of texts."""
        with pytest.raises(InvalidInputError):
            validate_texts("Hello")


class TestValidateContext:
    """Test validate_context."""

    def test_none_is_empty(self) -> None:
        assert validate_context(None) == {}

    def test_all_allowed_keys(self) -> None:
        """Every allowed key should pass."""
        context = {key: "value" for key in ALLOWED_CONTEXT_KEYS}
        assert validate_context(context) == context

    def test_enum_keys_and_values_normalized(self) -> None:
        """Enum members should become plain strings."""
        result = validate_context({ContextKey.CACHE_TYPE: CacheType.MANAGED})
        assert result == {"cache_type": "managed"}
        assert type(next(iter(result))) is str

    def test_non_string_key(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            validate_context({123: "value"})
        assert "Context keys and values must be strings" in str(exc_info.value)

    def test_non_string_value(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            validate_context({"entity_id": 123})
        assert "Context keys and values must be strings" in str(exc_info.value)

    def test_unknown_key(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            validate_context({"unknown": "value"})
        assert "Allowed keys" in str(exc_info.value)


class TestExceptions:
    """Test exception hierarchy."""

    def test_invalid_input_error_is_value_error(self) -> None:
        """InvalidInputError should be catchable as ValueError."""
        assert issubclass(InvalidInputError, BeLocalException)
        assert issubclass(InvalidInputError, ValueError)

    def test_configuration_error_inherits_from_base(self) -> None:
        assert issubclass(ConfigurationError, BeLocalException)

    def test_invalid_input_error_carries_code(self) -> None:
        error = InvalidInputError("bad input")
        assert error.error.code == ErrorCode.INVALID_INPUT
        assert str(error) == "bad input"

    def test_belocal_error_str(self) -> None:
        error = BeLocalError(ErrorCode.NETWORK, "connection refused")
        assert str(error) == "NETWORK: connection refused"
        assert error.code == "NETWORK"
