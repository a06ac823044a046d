"""Semantic type aliases shared across treep.

Records are plain JSON-shaped Python values; these aliases only document
intent at function boundaries.
"""

from collections.abc import Hashable
from typing import Any

type JSONScalar = str | int | float | bool | None
type JSONValue = JSONScalar | list[Any] | dict[str, Any]

# Identity values are whatever the record carries in its id field. JSON
# producers use strings or integers, but any hashable value indexes fine.
type RecordID = Hashable
"""Identity of a record within one collection (e.g. 1, 'user_42')."""

type Record = dict[str, Any]
"""A JSON object from the input collection."""
