"""Exception hierarchy for structural failures.

Structural problems (duplicate identities, missing required fields,
records that are not objects) abort the operation that found them and are
raised as TreepError subclasses. Content problems (dangling references,
schema violations) are never raised - they are returned as data on the
Graph or in a ValidationResult.

Every error carries a stable ``code`` so callers can branch on the failure
kind without matching message text.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class TreepError(Exception):
    """Base class for all treep errors.

    Attributes:
        code: Stable machine-readable failure kind (e.g. "DUPLICATE_ID")
    """

    code: str = "TREEP_ERROR"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class MissingFieldError(TreepError):
    """Raised when one or more required fields are absent from a record.

    Lists every missing name, not just the first.

    Attributes:
        missing: Missing field names, in the order they were required
        index: Position of the offending record in its collection, or None
            when the checked value was a single top-level object
    """

    code = "MISSING_FIELD"

    def __init__(self, missing: Sequence[str], *, index: int | None = None) -> None:
        self.missing = tuple(missing)
        self.index = index
        names = ", ".join(f"'{name}'" for name in self.missing)
        where = f" (record {index})" if index is not None else ""
        noun = "field" if len(self.missing) == 1 else "fields"
        super().__init__(f"Missing required {noun}{where}: {names}")


class GraphError(TreepError):
    """Base class for graph construction failures."""

    code = "GRAPH_ERROR"


class DuplicateIdError(GraphError):
    """Raised when two or more records share an identity value.

    A graph cannot consistently index non-unique identities, so construction
    halts and no Graph is produced.

    Attributes:
        record_id: The colliding identity value
        positions: Every input position carrying that identity, ascending
    """

    code = "DUPLICATE_ID"

    def __init__(self, record_id: Any, positions: Sequence[int]) -> None:
        self.record_id = record_id
        self.positions = tuple(positions)
        at = ", ".join(str(p) for p in self.positions)
        super().__init__(f"Duplicate record id {record_id!r} at positions {at}")


class CycleError(GraphError):
    """Raised when an operation needs an acyclic reference structure.

    Attributes:
        cycle: Node ids along one offending cycle, in reference order
    """

    code = "CYCLE_DETECTED"

    def __init__(self, cycle: Sequence[Any]) -> None:
        self.cycle = tuple(cycle)
        path = " -> ".join(repr(node_id) for node_id in (*self.cycle, self.cycle[0])) if self.cycle else ""
        super().__init__(f"Graph contains a cycle: {path}")


class InvalidRecordError(GraphError):
    """Raised when an input record cannot be indexed.

    Covers records that are not JSON objects and identity values that
    cannot be used as index keys (lists, objects).

    Attributes:
        index: Position of the offending record
    """

    code = "INVALID_RECORD"

    def __init__(self, message: str, *, index: int) -> None:
        self.index = index
        super().__init__(f"Record {index}: {message}")


class SchemaError(TreepError, ValueError):
    """Raised when a schema definition itself is malformed.

    This is a caller programming error, distinct from a record failing
    validation (which is reported in ValidationResult, never raised).
    """

    code = "INVALID_SCHEMA"
