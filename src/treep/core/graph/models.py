# src/treep/core/graph/models.py
"""Node, diagnostic and view types for record graphs.

Imports nothing from treep.core (prevents import cycles).

Nodes never hold references to other nodes, only identity values. Edges
are resolved through the Graph's id index on demand, so cyclic reference
structures never become cyclic object ownership.
"""

from __future__ import annotations

from collections.abc import Collection, Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from treep.contracts.types import RecordID

type NodeKind = Literal["leaf", "branch"]


@dataclass(frozen=True, slots=True)
class Leaf:
    """A record with no outgoing references.

    Attributes:
        id: Identity value taken from the record's id field
        value: The original record (caller-owned, never mutated)
        position: Index of the record in the input collection
    """

    id: RecordID
    value: Mapping[str, Any]
    position: int

    @property
    def kind(self) -> NodeKind:
        return "leaf"

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def is_branch(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Branch:
    """A record whose reference field lists other record ids.

    Attributes:
        id: Identity value taken from the record's id field
        value: The original record (caller-owned, never mutated)
        position: Index of the record in the input collection
        child_ids: Every referenced id, mirroring the reference field
            (order and repeats preserved)
        resolved_ids: The referenced ids that exist in the collection,
            in reference order
        dangling_ids: The referenced ids with no record in the collection,
            in reference order
    """

    id: RecordID
    value: Mapping[str, Any]
    position: int
    child_ids: tuple[Any, ...]
    resolved_ids: tuple[Any, ...]
    dangling_ids: tuple[Any, ...] = ()

    @property
    def kind(self) -> NodeKind:
        return "branch"

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def is_branch(self) -> bool:
        return True


type Node = Leaf | Branch


@dataclass(frozen=True, slots=True)
class DanglingReference:
    """Non-fatal diagnostic: a branch references an id with no record.

    Unlike DuplicateIdError, dangling references don't prevent graph
    construction. They are collected on the Graph for the caller to inspect.

    Attributes:
        source_id: Id of the referencing branch
        target_id: The referenced id that could not be resolved
        position: Input index of the referencing record
    """

    source_id: RecordID
    target_id: Any
    position: int

    def __str__(self) -> str:
        return f"Record {self.source_id!r} (position {self.position}) references unknown id {self.target_id!r}"


class NodeView[NodeT: (Leaf, Branch)](Collection[NodeT]):
    """Lazy, restartable view over a subset of a graph's nodes.

    Every iteration walks the graph's id index afresh in input order; the
    view holds no copies of the nodes themselves.
    """

    __slots__ = ("_ids", "_nodes")

    def __init__(self, nodes: Mapping[Any, Any], ids: tuple[Any, ...]) -> None:
        self._nodes = nodes
        self._ids = ids

    def __iter__(self) -> Iterator[NodeT]:
        for node_id in self._ids:
            yield self._nodes[node_id]

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, node: object) -> bool:
        if not isinstance(node, Leaf | Branch):
            return False
        return self._nodes.get(node.id) is node and node.id in self._ids

    @property
    def ids(self) -> tuple[Any, ...]:
        """Node ids in view order."""
        return self._ids

    def __repr__(self) -> str:
        return f"NodeView(ids={list(self._ids)!r})"


@dataclass(frozen=True, slots=True)
class GraphStatistics:
    """Summary metrics of a graph's resolved reference structure.

    Degrees count incoming plus outgoing resolved references; a
    self-reference adds two. Density is edges / (n * (n - 1)), 0.0 for
    graphs of fewer than two nodes.
    """

    node_count: int
    leaf_count: int
    branch_count: int
    edge_count: int
    dangling_count: int
    density: float
    average_degree: float
    max_degree: int
    min_degree: int
    isolated_count: int
    component_count: int
    is_acyclic: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "node_count": self.node_count,
            "leaf_count": self.leaf_count,
            "branch_count": self.branch_count,
            "edge_count": self.edge_count,
            "dangling_count": self.dangling_count,
            "density": self.density,
            "average_degree": self.average_degree,
            "max_degree": self.max_degree,
            "min_degree": self.min_degree,
            "isolated_count": self.isolated_count,
            "component_count": self.component_count,
            "is_acyclic": self.is_acyclic,
        }
