"""Tests for FieldRule and parse_schema."""

import re

import pytest
from pydantic import ValidationError


class TestFieldRule:
    """Tests for FieldRule construction."""

    def test_defaults(self) -> None:
        from treep.contracts.schema import FieldRule

        rule = FieldRule(type="string")
        assert rule.required is False
        assert rule.min is None
        assert rule.max is None
        assert rule.min_length is None
        assert rule.max_length is None
        assert rule.pattern is None
        assert rule.enum is None

    def test_camel_case_aliases(self) -> None:
        from treep.contracts.schema import FieldRule

        rule = FieldRule.model_validate({"type": "string", "minLength": 1, "maxLength": 5})
        assert rule.min_length == 1
        assert rule.max_length == 5

    def test_snake_case_names(self) -> None:
        from treep.contracts.schema import FieldRule

        rule = FieldRule.model_validate({"type": "string", "min_length": 2})
        assert rule.min_length == 2

    def test_integer_bounds_stay_integers(self) -> None:
        from treep.contracts.schema import FieldRule

        rule = FieldRule(type="number", min=0, max=1.5)
        assert rule.min == 0
        assert isinstance(rule.min, int)
        assert rule.max == 1.5

    def test_unsupported_type_rejected(self) -> None:
        from treep.contracts.schema import FieldRule

        with pytest.raises(ValidationError):
            FieldRule.model_validate({"type": "object"})

    def test_unknown_option_rejected(self) -> None:
        from treep.contracts.schema import FieldRule

        with pytest.raises(ValidationError):
            FieldRule.model_validate({"type": "string", "format": "email"})

    def test_negative_length_rejected(self) -> None:
        from treep.contracts.schema import FieldRule

        with pytest.raises(ValidationError):
            FieldRule.model_validate({"type": "string", "minLength": -1})

    def test_inverted_numeric_bounds_rejected(self) -> None:
        from treep.contracts.schema import FieldRule

        with pytest.raises(ValidationError, match="min"):
            FieldRule(type="number", min=10, max=1)

    def test_inverted_length_bounds_rejected(self) -> None:
        from treep.contracts.schema import FieldRule

        with pytest.raises(ValidationError, match="min_length"):
            FieldRule.model_validate({"type": "string", "minLength": 5, "maxLength": 2})

    def test_invalid_pattern_rejected(self) -> None:
        from treep.contracts.schema import FieldRule

        with pytest.raises(ValidationError, match="Invalid pattern"):
            FieldRule(type="string", pattern="[unclosed")

    def test_compiled_pattern(self) -> None:
        from treep.contracts.schema import FieldRule

        rule = FieldRule(type="string", pattern=r"^\d+$")
        assert isinstance(rule.compiled_pattern, re.Pattern)
        assert FieldRule(type="string").compiled_pattern is None

    def test_frozen(self) -> None:
        from treep.contracts.schema import FieldRule

        rule = FieldRule(type="boolean")
        with pytest.raises(ValidationError):
            rule.required = True  # type: ignore[misc]

    def test_to_dict_omits_unset_bounds(self) -> None:
        from treep.contracts.schema import FieldRule

        rule = FieldRule.model_validate({"type": "string", "required": True, "minLength": 1})
        assert rule.to_dict() == {"type": "string", "required": True, "min_length": 1}


class TestParseSchema:
    """Tests for parse_schema()."""

    def test_mixed_rule_forms(self) -> None:
        from treep.contracts.schema import FieldRule, parse_schema

        prebuilt = FieldRule(type="number")
        rules = parse_schema({"a": {"type": "string"}, "b": prebuilt})

        assert list(rules) == ["a", "b"]
        assert rules["a"] == FieldRule(type="string")
        assert rules["b"] is prebuilt

    def test_rejects_non_mapping(self) -> None:
        from treep.contracts.errors import SchemaError
        from treep.contracts.schema import parse_schema

        with pytest.raises(SchemaError, match="must be a mapping"):
            parse_schema([("a", {"type": "string"})])  # type: ignore[arg-type]

    def test_rejects_non_string_field_name(self) -> None:
        from treep.contracts.errors import SchemaError
        from treep.contracts.schema import parse_schema

        with pytest.raises(SchemaError, match="field names must be strings"):
            parse_schema({1: {"type": "string"}})  # type: ignore[dict-item]

    def test_rejects_scalar_rule(self) -> None:
        from treep.contracts.errors import SchemaError
        from treep.contracts.schema import parse_schema

        with pytest.raises(SchemaError, match="Rule for field 'a'"):
            parse_schema({"a": "string"})  # type: ignore[dict-item]

    def test_schema_error_is_value_error(self) -> None:
        from treep.contracts.errors import SchemaError, TreepError

        assert issubclass(SchemaError, ValueError)
        assert issubclass(SchemaError, TreepError)
        assert SchemaError("x").code == "INVALID_SCHEMA"
