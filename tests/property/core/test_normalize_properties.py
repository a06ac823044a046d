# tests/property/core/test_normalize_properties.py
"""Property-based tests for normalize().

Properties:
- Idempotence: normalize(normalize(v)) == normalize(v)
- Shape preservation: objects keep their keys, arrays keep their length
- Non-mutation: the input compares equal before and after
- Disabled conversions: output equals input
"""

from __future__ import annotations

import copy
from typing import Any

from hypothesis import given

from tests.property.conftest import json_values, literal_like_strings
from tests.property.settings import STANDARD_SETTINGS, THOROUGH_SETTINGS
from treep.core.normalize import convert_scalar, normalize


def _same_shape(before: Any, after: Any) -> bool:
    if isinstance(before, dict):
        return isinstance(after, dict) and list(before) == list(after) and all(
            _same_shape(before[key], after[key]) for key in before
        )
    if isinstance(before, list):
        return isinstance(after, list) and len(before) == len(after) and all(
            _same_shape(b, a) for b, a in zip(before, after, strict=True)
        )
    return not isinstance(after, dict | list)


class TestNormalizeProperties:
    @given(value=json_values)
    @THOROUGH_SETTINGS
    def test_idempotent(self, value: Any) -> None:
        once = normalize(value)
        assert normalize(once) == once

    @given(value=json_values)
    @STANDARD_SETTINGS
    def test_shape_preserved(self, value: Any) -> None:
        assert _same_shape(value, normalize(value))

    @given(value=json_values)
    @STANDARD_SETTINGS
    def test_input_not_mutated(self, value: Any) -> None:
        snapshot = copy.deepcopy(value)
        normalize(value)
        assert value == snapshot

    @given(value=json_values)
    @STANDARD_SETTINGS
    def test_disabled_conversions_copy(self, value: Any) -> None:
        assert normalize(value, type_conversions=False) == value


class TestConvertScalarProperties:
    @given(raw=literal_like_strings)
    @THOROUGH_SETTINGS
    def test_result_is_string_or_native(self, raw: str) -> None:
        result = convert_scalar(raw)
        if isinstance(result, str):
            assert result == raw
            # Unconverted strings stay unconverted
            assert convert_scalar(result) == result
        else:
            assert type(result) in (bool, int, float)

    @given(raw=literal_like_strings)
    @STANDARD_SETTINGS
    def test_converted_numbers_are_finite(self, raw: str) -> None:
        result = convert_scalar(raw)
        if isinstance(result, float):
            assert result == result
            assert result not in (float("inf"), float("-inf"))
