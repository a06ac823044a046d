"""Shared contracts for cross-component data types.

Errors, schema rules and validation results used by more than one
component live here. This package is a LEAF MODULE: it imports nothing
from treep.core, so the normalizer, graph builder and validator can all
depend on it without import cycles.

Import patterns:
    from treep.contracts import FieldRule, ValidationResult, DuplicateIdError
"""

from treep.contracts.errors import (
    CycleError,
    DuplicateIdError,
    GraphError,
    InvalidRecordError,
    MissingFieldError,
    SchemaError,
    TreepError,
)
from treep.contracts.results import FieldError, ValidationResult
from treep.contracts.schema import SUPPORTED_TYPES, FieldRule, FieldType, Schema, parse_schema
from treep.contracts.types import JSONScalar, JSONValue, Record, RecordID

__all__ = [
    "SUPPORTED_TYPES",
    "CycleError",
    "DuplicateIdError",
    "FieldError",
    "FieldRule",
    "FieldType",
    "GraphError",
    "InvalidRecordError",
    "JSONScalar",
    "JSONValue",
    "MissingFieldError",
    "Record",
    "RecordID",
    "Schema",
    "SchemaError",
    "TreepError",
    "ValidationResult",
    "parse_schema",
]
