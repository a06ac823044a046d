# src/treep/core/graph/builder.py
"""Graph construction from JSON records.

The Graph.from_json() classmethod facade delegates here via lazy import to
avoid circular dependencies.

Algorithm:
    1. Indexing pass: id -> position list in input order. Any id seen at
       more than one position fails the whole build with DuplicateIdError.
    2. Classification: a record is a Branch iff its branch field holds a
       non-empty array; every other record is a Leaf. The field's literal
       content decides, not what the field means.
    3. Resolution: each referenced id is looked up in the index. Misses
       are recorded as DanglingReference diagnostics, never raised.

No step recurses over the reference structure, so cycles and
self-references are harmless during construction.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

import structlog

from treep.contracts.errors import DuplicateIdError, GraphError, InvalidRecordError, MissingFieldError
from treep.contracts.types import Record, RecordID
from treep.core.config import GraphConfig, coerce_config
from treep.core.graph.graph import Graph
from treep.core.graph.models import Branch, DanglingReference, Leaf, Node

logger = structlog.get_logger(__name__)


def _is_hashable(value: Any) -> bool:
    if not isinstance(value, Hashable):
        return False
    try:
        hash(value)
    except TypeError:
        # e.g. tuples containing lists
        return False
    return True


def _as_record_list(records: Any) -> list[Any]:
    """Materialize the input collection, rejecting non-array inputs."""
    if isinstance(records, Mapping | str | bytes) or not isinstance(records, Iterable):
        raise GraphError(f"Records must be an array of objects, got {type(records).__name__}")
    return list(records)


def _index_records(records: list[Any], id_field: str) -> dict[RecordID, list[int]]:
    """Indexing pass: map each identity to every position it occurs at.

    Raises:
        InvalidRecordError: If a record is not an object or its id is unhashable
        MissingFieldError: If a record has no (or a null) identity
        DuplicateIdError: If any identity occurs more than once
    """
    positions: dict[RecordID, list[int]] = {}
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise InvalidRecordError(f"expected an object, got {type(record).__name__}", index=index)
        record_id = record.get(id_field)
        if record_id is None:
            raise MissingFieldError([id_field], index=index)
        if not _is_hashable(record_id):
            raise InvalidRecordError(
                f"identity field '{id_field}' must be a string or number, got {type(record_id).__name__}",
                index=index,
            )
        positions.setdefault(record_id, []).append(index)

    for record_id, seen_at in positions.items():
        if len(seen_at) > 1:
            logger.warning("Duplicate record id", record_id=record_id, positions=seen_at)
            raise DuplicateIdError(record_id, seen_at)
    return positions


def _classify(
    record: Mapping[str, Any],
    record_id: RecordID,
    index: int,
    branch_field: str,
    known_ids: Mapping[Any, Any],
    dangling: list[DanglingReference],
) -> Node:
    """Classification and resolution for one record."""
    references = record.get(branch_field)
    if not isinstance(references, list | tuple) or not references:
        return Leaf(id=record_id, value=record, position=index)

    resolved: list[Any] = []
    unresolved: list[Any] = []
    for target_id in references:
        if _is_hashable(target_id) and target_id in known_ids:
            resolved.append(target_id)
            continue
        unresolved.append(target_id)
        dangling.append(DanglingReference(source_id=record_id, target_id=target_id, position=index))
        logger.debug("Dangling reference", source_id=record_id, target_id=target_id, position=index)

    return Branch(
        id=record_id,
        value=record,
        position=index,
        child_ids=tuple(references),
        resolved_ids=tuple(resolved),
        dangling_ids=tuple(unresolved),
    )


def from_json(
    records: Iterable[Record],
    config: GraphConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> Graph:
    """Build a Graph from an ordered collection of records.

    Args:
        records: Array of JSON objects, each carrying the identity field
        config: GraphConfig, an equivalent mapping, or None for defaults
            (id_field="id", branch_field="children")
        **options: Overrides for individual config options

    Returns:
        Immutable Graph; size() + branch_count() == len(records)

    Raises:
        DuplicateIdError: If two or more records share an identity
        MissingFieldError: If a record lacks the identity field
        InvalidRecordError: If a record is not an object or has an
            unhashable identity
        GraphError: If records is not an array
        pydantic.ValidationError: If the options are invalid

    Example:
        >>> graph = from_json(
        ...     [{"id": 1, "friends": [2]}, {"id": 2, "friends": []}],
        ...     id_field="id",
        ...     branch_field="friends",
        ... )
        >>> graph.size(), graph.branch_count()
        (1, 1)
    """
    cfg = coerce_config(GraphConfig, config, options)
    items = _as_record_list(records)

    known_ids = _index_records(items, cfg.id_field)

    dangling: list[DanglingReference] = []
    nodes = [
        _classify(record, record[cfg.id_field], index, cfg.branch_field, known_ids, dangling)
        for index, record in enumerate(items)
    ]

    graph = Graph(nodes, dangling)
    logger.debug(
        "Graph built",
        nodes=graph.node_count,
        leaves=graph.size(),
        branches=graph.branch_count(),
        dangling=len(dangling),
    )
    return graph


def from_tree(
    root: Mapping[str, Any],
    config: GraphConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> Graph:
    """Build a Graph from a nested object whose branch field holds child objects.

    The tree is flattened with an explicit work-list (pre-order, children in
    array order) into records whose branch field lists child ids, then built
    with from_json(). Non-object entries in a branch field are kept as plain
    references, so a nested document may mix inline children and ids.

    Raises:
        GraphError: If root is not an object
        MissingFieldError: If an inline child lacks the identity field
            (index is the child's pre-order position)
        DuplicateIdError: If an id occurs twice anywhere in the tree
    """
    cfg = coerce_config(GraphConfig, config, options)
    if not isinstance(root, Mapping):
        raise GraphError(f"Tree root must be an object, got {type(root).__name__}")

    flat: list[Record] = []
    stack: list[Mapping[str, Any]] = [root]
    # Object identities, so a child object shared by two parents (or a
    # self-containing structure) is flattened once
    expanded: set[int] = set()
    while stack:
        current = stack.pop()
        if id(current) in expanded:
            continue
        expanded.add(id(current))
        if current.get(cfg.id_field) is None:
            raise MissingFieldError([cfg.id_field], index=len(flat))
        record = dict(current)
        children = current.get(cfg.branch_field)
        if isinstance(children, list | tuple):
            record[cfg.branch_field] = [
                child.get(cfg.id_field) if isinstance(child, Mapping) else child for child in children
            ]
            stack.extend(child for child in reversed(children) if isinstance(child, Mapping))
        flat.append(record)

    return from_json(flat, cfg)
