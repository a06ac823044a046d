"""
Treep: normalize, connect and validate loosely-typed JSON records.

Three independent, stateless building blocks for data-import pipelines:
string-to-native type coercion, cycle-safe leaf/branch graph construction
from cross-referencing records, and declarative per-record validation.
"""

from treep.contracts import (
    CycleError,
    DuplicateIdError,
    FieldError,
    FieldRule,
    GraphError,
    InvalidRecordError,
    MissingFieldError,
    Schema,
    SchemaError,
    TreepError,
    ValidationResult,
)
from treep.core.config import GraphConfig, LoggingConfig, NormalizeConfig, TreepSettings, load_settings
from treep.core.graph import Branch, DanglingReference, Graph, Leaf, from_json, from_tree
from treep.core.logging import configure_logging
from treep.core.normalize import normalize
from treep.core.validate import validate, validate_graph, validate_leaf

__version__ = "0.3.0"

__all__ = [
    "Branch",
    "CycleError",
    "DanglingReference",
    "DuplicateIdError",
    "FieldError",
    "FieldRule",
    "Graph",
    "GraphConfig",
    "GraphError",
    "InvalidRecordError",
    "Leaf",
    "LoggingConfig",
    "MissingFieldError",
    "NormalizeConfig",
    "Schema",
    "SchemaError",
    "TreepError",
    "TreepSettings",
    "ValidationResult",
    "configure_logging",
    "from_json",
    "from_tree",
    "load_settings",
    "normalize",
    "validate",
    "validate_graph",
    "validate_leaf",
]
