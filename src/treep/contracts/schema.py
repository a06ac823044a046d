"""Declarative validation contracts.

A schema is a plain mapping of field name to FieldRule. Each FieldRule is a
uniform record with optional bound fields; the validator interprets whichever
bounds are present for the declared type rather than dispatching over a
hierarchy of constraint classes.

Example (schemas are usually written as plain dicts):
    schema = {
        "name": {"type": "string", "required": True, "minLength": 1},
        "age": {"type": "number", "min": 0, "max": 150},
        "active": {"type": "boolean"},
    }

Bounds that do not apply to the declared type are accepted and ignored:
min/max only constrain numbers, min_length/max_length/pattern only constrain
strings, and enum constrains strings and numbers.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from treep.contracts.errors import SchemaError

# Declared types a FieldRule may name
SUPPORTED_TYPES = frozenset({"string", "number", "boolean"})

type FieldType = Literal["string", "number", "boolean"]


class FieldRule(BaseModel):
    """Constraint set for a single field.

    Attributes:
        type: Expected runtime type ("string", "number" or "boolean")
        required: If True, a missing or null value is a violation
        min: Inclusive lower bound (numbers only)
        max: Inclusive upper bound (numbers only)
        min_length: Minimum character count (strings only)
        max_length: Maximum character count (strings only)
        pattern: Regular expression the value must contain a match for
            (strings only, re.search semantics)
        enum: Allowed values (strings and numbers)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    type: FieldType
    required: bool = False
    min: int | float | None = None
    max: int | float | None = None
    min_length: int | None = Field(default=None, ge=0, alias="minLength")
    max_length: int | None = Field(default=None, ge=0, alias="maxLength")
    pattern: str | None = None
    enum: tuple[str | int | float, ...] | None = None

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str | None) -> str | None:
        """Reject patterns that do not compile, at schema construction time."""
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid pattern {v!r}: {e}") from e
        return v

    @model_validator(mode="after")
    def validate_bounds_order(self) -> FieldRule:
        """Lower bounds must not exceed upper bounds."""
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min}) must be <= max ({self.max})")
        if self.min_length is not None and self.max_length is not None and self.min_length > self.max_length:
            raise ValueError(f"min_length ({self.min_length}) must be <= max_length ({self.max_length})")
        return self

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        """Compiled form of ``pattern`` (re keeps its own compile cache)."""
        if self.pattern is None:
            return None
        return re.compile(self.pattern)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization, omitting unset bounds."""
        return self.model_dump(exclude_none=True)


type Schema = Mapping[str, FieldRule]


def parse_schema(schema: Mapping[str, FieldRule | Mapping[str, Any]]) -> dict[str, FieldRule]:
    """Parse a schema definition into FieldRule instances.

    Accepts FieldRule instances or plain rule mappings (camelCase keys such
    as ``minLength`` are accepted alongside ``min_length``). Field order is
    preserved.

    Args:
        schema: Mapping of field name to rule

    Returns:
        New dict of field name to FieldRule

    Raises:
        SchemaError: If schema is not a mapping, a field name is not a string,
            or a rule is neither a FieldRule nor a mapping
        pydantic.ValidationError: If a rule mapping has invalid options
    """
    if not isinstance(schema, Mapping):
        raise SchemaError(f"Schema must be a mapping of field name to rule, got {type(schema).__name__}")

    rules: dict[str, FieldRule] = {}
    for name, rule in schema.items():
        if not isinstance(name, str):
            raise SchemaError(f"Schema field names must be strings, got {type(name).__name__}: {name!r}")
        if isinstance(rule, FieldRule):
            rules[name] = rule
        elif isinstance(rule, Mapping):
            rules[name] = FieldRule.model_validate(dict(rule))
        else:
            raise SchemaError(f"Rule for field '{name}' must be a mapping or FieldRule, got {type(rule).__name__}")
    return rules
