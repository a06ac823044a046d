# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- JSON values (nested objects, arrays and scalars)
- Loosely-typed scalars (strings that look like booleans and numbers)
- Record collections (unique ids, references that may dangle or cycle)
- Schemas (FieldRule mappings)

Usage:
    from tests.property.conftest import json_values, record_collections

    @given(value=json_values)
    def test_normalize_idempotent(value) -> None:
        ...
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

# =============================================================================
# Core JSON Strategies
# =============================================================================

# Strings that the coercion rules might (or might not) convert
literal_like_strings = st.one_of(
    st.sampled_from(["true", "false", "True", "null", "", " 1", "1 ", "1e999", "inf", "NaN", "-", ".", "1."]),
    st.integers(min_value=-(10**20), max_value=10**20).map(str),
    st.floats(allow_nan=False, allow_infinity=False).map(repr),
    st.text(alphabet="0123456789.-+eE", max_size=8),
)

json_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**53 - 1), max_value=2**53 - 1),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(max_size=20),
    literal_like_strings,
)

json_keys = st.text(min_size=1, max_size=10)

json_values = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(json_keys, children, max_size=5),
    ),
    max_leaves=30,
)

json_objects = st.dictionaries(json_keys, json_values, max_size=6)


# =============================================================================
# Record Collections
# =============================================================================

record_ids = st.one_of(
    st.integers(min_value=0, max_value=10_000),
    st.text(alphabet="abcdefghij", min_size=1, max_size=4),
)


@st.composite
def record_collections(draw: st.DrawFn, *, max_size: int = 25) -> list[dict[str, Any]]:
    """Records with unique ids whose "children" reference arbitrary ids.

    References are drawn from the collection's own ids (so cycles and
    self-references are common) plus a few ids that do not exist.
    """
    ids = draw(st.lists(record_ids, unique=True, max_size=max_size))
    # 1 and "1" are distinct, but 1 and 1.0 would collide; ints and strings never do
    ghosts = draw(st.lists(st.integers(min_value=20_000, max_value=20_010), max_size=3))
    candidates = ids + ghosts

    records: list[dict[str, Any]] = []
    for record_id in ids:
        record: dict[str, Any] = {"id": record_id, "label": draw(st.text(max_size=5))}
        shape = draw(st.sampled_from(["absent", "empty", "refs", "scalar"]))
        if shape == "empty":
            record["children"] = []
        elif shape == "refs" and candidates:
            record["children"] = draw(st.lists(st.sampled_from(candidates), min_size=1, max_size=6))
        elif shape == "scalar":
            record["children"] = draw(json_scalars)
        records.append(record)
    return records


# =============================================================================
# Schema Strategies
# =============================================================================

field_names = st.text(alphabet="abcdefgh_", min_size=1, max_size=6)


@st.composite
def field_rules(draw: st.DrawFn) -> dict[str, Any]:
    """Rule mappings with only well-ordered bounds."""
    field_type = draw(st.sampled_from(["string", "number", "boolean"]))
    rule: dict[str, Any] = {"type": field_type, "required": draw(st.booleans())}
    if field_type == "string":
        low = draw(st.none() | st.integers(min_value=0, max_value=5))
        if low is not None:
            rule["minLength"] = low
        if draw(st.booleans()):
            rule["maxLength"] = (low or 0) + draw(st.integers(min_value=0, max_value=5))
    elif field_type == "number":
        low = draw(st.none() | st.integers(min_value=-100, max_value=100))
        if low is not None:
            rule["min"] = low
        if draw(st.booleans()):
            rule["max"] = (low if low is not None else 0) + draw(st.integers(min_value=0, max_value=100))
    return rule


schemas = st.dictionaries(field_names, field_rules(), max_size=6)
