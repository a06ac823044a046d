"""Tests for FieldError and ValidationResult."""

from dataclasses import FrozenInstanceError

import pytest

from treep.contracts.results import FieldError, ValidationResult


class TestValidationResult:
    def test_empty_is_valid(self) -> None:
        result = ValidationResult()
        assert result.is_valid is True
        assert bool(result) is True
        assert result.messages == []

    def test_any_error_is_invalid(self) -> None:
        result = ValidationResult(errors=(FieldError("a", "a is required", "REQUIRED_FIELD"),))
        assert result.is_valid is False
        assert bool(result) is False

    def test_errors_for(self) -> None:
        a1 = FieldError("a", "a must be >= 0", "MIN_VALUE")
        b = FieldError("b", "b is required", "REQUIRED_FIELD")
        a2 = FieldError("a", "a must be one of: 1, 2", "ENUM_MISMATCH")
        result = ValidationResult(errors=(a1, b, a2))

        assert result.errors_for("a") == [a1, a2]
        assert result.errors_for("missing") == []

    def test_to_dict(self) -> None:
        result = ValidationResult(errors=(FieldError("a", "a is required", "REQUIRED_FIELD"),))
        assert result.to_dict() == {
            "is_valid": False,
            "errors": [{"field": "a", "message": "a is required", "code": "REQUIRED_FIELD"}],
        }

    def test_frozen(self) -> None:
        result = ValidationResult()
        with pytest.raises(FrozenInstanceError):
            result.errors = ()  # type: ignore[misc]


class TestFieldError:
    def test_str_is_message(self) -> None:
        assert str(FieldError("a", "a is required", "REQUIRED_FIELD")) == "a is required"
