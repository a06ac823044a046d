# src/treep/core/validate.py
"""Schema validation for individual records.

validate() interprets a schema (field name -> FieldRule) against one record
and reports every violation it finds. It never raises for bad records:
missing and mistyped fields become FieldError entries in the returned
ValidationResult.

Per field, in schema order:
    1. required and absent (missing or null)  -> "<field> is required"
    2. wrong runtime type                     -> "<field> must be of type <type>"
    3. string bounds: min_length, max_length, pattern
    4. number bounds: min, max
    5. enum membership (strings and numbers)
Steps 1 and 2 stop checking that field; everything else accumulates.
Fields the record carries but the schema does not name are ignored.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from treep.contracts.results import FieldError, ValidationResult
from treep.contracts.schema import FieldRule, parse_schema

if TYPE_CHECKING:
    from treep.core.graph import Graph, Node

# Violation codes
REQUIRED_FIELD = "REQUIRED_FIELD"
TYPE_MISMATCH = "TYPE_MISMATCH"
MIN_LENGTH = "MIN_LENGTH"
MAX_LENGTH = "MAX_LENGTH"
PATTERN_MISMATCH = "PATTERN_MISMATCH"
MIN_VALUE = "MIN_VALUE"
MAX_VALUE = "MAX_VALUE"
ENUM_MISMATCH = "ENUM_MISMATCH"
INVALID_RECORD = "INVALID_RECORD"

ROOT_FIELD = "root"


def validate(value: Any, schema: Mapping[str, FieldRule | Mapping[str, Any]]) -> ValidationResult:
    """Validate one record against a schema.

    Args:
        value: The record (normally a JSON object)
        schema: Mapping of field name to FieldRule or rule mapping

    Returns:
        ValidationResult listing every violation (empty when valid)

    Raises:
        SchemaError: If the schema itself is malformed
        pydantic.ValidationError: If a rule mapping has invalid options
    """
    return _validate_parsed(value, parse_schema(schema))


def validate_leaf(node: Node, schema: Mapping[str, FieldRule | Mapping[str, Any]]) -> ValidationResult:
    """Validate the record held by a graph node."""
    return validate(node.value, schema)


def validate_graph(
    graph: Graph,
    schema: Mapping[str, FieldRule | Mapping[str, Any]],
    *,
    include_branches: bool = False,
) -> dict[Any, ValidationResult]:
    """Validate every leaf record of a graph.

    Args:
        graph: Built Graph
        schema: Mapping of field name to FieldRule or rule mapping
        include_branches: Also validate branch records

    Returns:
        Node id -> ValidationResult, in input order
    """
    rules = parse_schema(schema)
    return {node.id: _validate_parsed(node.value, rules) for node in graph if include_branches or node.is_leaf}


def _validate_parsed(value: Any, rules: Mapping[str, FieldRule]) -> ValidationResult:
    if not isinstance(value, Mapping):
        return ValidationResult(errors=(FieldError(ROOT_FIELD, f"{ROOT_FIELD} must be an object", INVALID_RECORD),))

    errors: list[FieldError] = []
    for name, rule in rules.items():
        errors.extend(_check_field(name, value.get(name), rule))
    return ValidationResult(errors=tuple(errors))


def _check_field(name: str, value: Any, rule: FieldRule) -> list[FieldError]:
    if value is None:
        if rule.required:
            return [FieldError(name, f"{name} is required", REQUIRED_FIELD)]
        return []

    if not _matches_type(value, rule.type):
        return [FieldError(name, f"{name} must be of type {rule.type}", TYPE_MISMATCH)]

    errors: list[FieldError] = []
    if rule.type == "string":
        errors.extend(_check_string(name, value, rule))
    elif rule.type == "number":
        errors.extend(_check_number(name, value, rule))

    if rule.enum is not None and rule.type != "boolean" and value not in rule.enum:
        allowed = ", ".join(str(option) for option in rule.enum)
        errors.append(FieldError(name, f"{name} must be one of: {allowed}", ENUM_MISMATCH))
    return errors


def _matches_type(value: Any, field_type: str) -> bool:
    if field_type == "string":
        return isinstance(value, str)
    if field_type == "boolean":
        return isinstance(value, bool)
    # bool is an int subclass but never a number here; NaN is not a number either
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def _check_string(name: str, value: str, rule: FieldRule) -> list[FieldError]:
    errors: list[FieldError] = []
    if rule.min_length is not None and len(value) < rule.min_length:
        errors.append(FieldError(name, f"{name} must be at least {rule.min_length} characters", MIN_LENGTH))
    if rule.max_length is not None and len(value) > rule.max_length:
        errors.append(FieldError(name, f"{name} must be at most {rule.max_length} characters", MAX_LENGTH))
    pattern = rule.compiled_pattern
    if pattern is not None and pattern.search(value) is None:
        errors.append(FieldError(name, f"{name} does not match required pattern", PATTERN_MISMATCH))
    return errors


def _check_number(name: str, value: int | float, rule: FieldRule) -> list[FieldError]:
    errors: list[FieldError] = []
    if rule.min is not None and value < rule.min:
        errors.append(FieldError(name, f"{name} must be >= {_format_bound(rule.min)}", MIN_VALUE))
    if rule.max is not None and value > rule.max:
        errors.append(FieldError(name, f"{name} must be <= {_format_bound(rule.max)}", MAX_VALUE))
    return errors


def _format_bound(bound: int | float) -> str:
    """Render 0.0 as "0" so messages read the same for int and float bounds."""
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)
