# src/treep/core/graph/graph.py
"""Graph class: query and traversal operations over built record graphs.

Construction logic lives in builder.py; this module contains the graph
class with all read-only methods. The from_json() classmethod is a thin
facade that delegates to builder.from_json().

Every traversal here works on an explicit work-list with a visited-id set,
never structural recursion, so self-references and cycles terminate in
O(nodes + edges). Path, ordering and component queries delegate to
networkx, whose implementations are iterative as well.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Any, cast

import networkx as nx
from networkx import DiGraph

from treep.contracts.errors import CycleError
from treep.core.graph.models import Branch, DanglingReference, GraphStatistics, Leaf, Node, NodeView

if TYPE_CHECKING:
    from treep.core.config import GraphConfig


class Graph:
    """Id-indexed graph of leaf and branch records.

    Wraps a NetworkX DiGraph of resolved references with record-specific
    operations. Immutable once constructed: no method mutates it, and
    get_nx_graph() only hands out frozen copies.
    """

    def __init__(
        self,
        nodes: Sequence[Node] = (),
        dangling_references: Sequence[DanglingReference] = (),
    ) -> None:
        """Build a graph from already-classified nodes.

        Most callers want from_json() instead.

        Args:
            nodes: Leaf and Branch nodes in input order (ids must be unique)
            dangling_references: Diagnostics collected during resolution

        Raises:
            ValueError: If two nodes share an id
        """
        nodes = tuple(nodes)
        self._nodes: dict[Any, Node] = {}
        for node in nodes:
            if node.id in self._nodes:
                raise ValueError(f"Duplicate node id: {node.id!r}")
            self._nodes[node.id] = node

        self._leaf_ids = tuple(node.id for node in nodes if isinstance(node, Leaf))
        self._branch_ids = tuple(node.id for node in nodes if isinstance(node, Branch))
        self._dangling = tuple(dangling_references)

        self._graph: DiGraph[Any] = nx.DiGraph()
        self._graph.add_nodes_from(self._nodes)
        for node_id in self._branch_ids:
            branch = cast(Branch, self._nodes[node_id])
            for child_id in branch.resolved_ids:
                if child_id not in self._nodes:
                    raise ValueError(f"Branch {node_id!r} resolves to unknown id {child_id!r}")
                self._graph.add_edge(node_id, child_id)

    @classmethod
    def from_json(
        cls,
        records: Sequence[Mapping[str, Any]],
        config: GraphConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Graph:
        """Build a Graph from a collection of records.

        See treep.core.graph.builder.from_json for details.
        """
        from treep.core.graph.builder import from_json

        return from_json(records, config, **options)

    # ------------------------------------------------------------------
    # Counts and membership
    # ------------------------------------------------------------------

    def size(self) -> int:
        """Number of Leaf nodes."""
        return len(self._leaf_ids)

    def branch_count(self) -> int:
        """Number of Branch nodes."""
        return len(self._branch_ids)

    @property
    def node_count(self) -> int:
        """Number of nodes of either kind."""
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        """Number of distinct resolved references."""
        return self._graph.number_of_edges()

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __contains__(self, node_id: object) -> bool:
        return self.has_node(node_id)

    def has_node(self, node_id: Any) -> bool:
        """Check if a node with this id exists."""
        try:
            return node_id in self._nodes
        except TypeError:
            # Unhashable ids can never be present
            return False

    def is_empty(self) -> bool:
        """Check if the graph has no nodes."""
        return not self._nodes

    # ------------------------------------------------------------------
    # Node access
    # ------------------------------------------------------------------

    def leaves(self) -> NodeView[Leaf]:
        """Leaf nodes in input order (lazy, restartable view)."""
        return NodeView(self._nodes, self._leaf_ids)

    def branches(self) -> NodeView[Branch]:
        """Branch nodes in input order (lazy, restartable view)."""
        return NodeView(self._nodes, self._branch_ids)

    def get_node(self, node_id: Any) -> Node:
        """Get the node with this id.

        Raises:
            KeyError: If node doesn't exist
        """
        if not self.has_node(node_id):
            raise KeyError(f"Node not found: {node_id!r}")
        return self._nodes[node_id]

    def get_leaf(self, node_id: Any) -> Leaf | None:
        """Get a Leaf by id, or None if absent or not a leaf."""
        node = self._nodes.get(node_id) if self.has_node(node_id) else None
        return node if isinstance(node, Leaf) else None

    def get_branch(self, node_id: Any) -> Branch | None:
        """Get a Branch by id, or None if absent or not a branch."""
        node = self._nodes.get(node_id) if self.has_node(node_id) else None
        return node if isinstance(node, Branch) else None

    @property
    def dangling_references(self) -> tuple[DanglingReference, ...]:
        """Unresolvable references found during construction, in input order."""
        return self._dangling

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def children(self, node_id: Any) -> list[Node]:
        """Get resolved child nodes in first-reference order.

        Leaves have no children. Repeated references yield the child once.

        Raises:
            KeyError: If node doesn't exist
        """
        node = self.get_node(node_id)
        if isinstance(node, Leaf):
            return []
        seen: set[Any] = set()
        result: list[Node] = []
        for child_id in node.resolved_ids:
            if child_id in seen:
                continue
            seen.add(child_id)
            result.append(self._nodes[child_id])
        return result

    def parents(self, node_id: Any) -> list[Branch]:
        """Get the branches that reference this node, in input order.

        Raises:
            KeyError: If node doesn't exist
        """
        self.get_node(node_id)
        parent_ids = set(self._graph.predecessors(node_id))
        return [cast(Branch, self._nodes[pid]) for pid in self._branch_ids if pid in parent_ids]

    def reachable(self, node_id: Any, *, include_start: bool = False) -> list[Node]:
        """Get every node reachable from node_id via resolved references.

        Breadth-first, children visited in reference order. Each node
        appears once even when the reference structure is cyclic. The start
        node is only included when include_start is True or when it is
        reachable from itself through a cycle.

        Raises:
            KeyError: If node doesn't exist
        """
        self.get_node(node_id)

        visited: set[Any] = set()
        order: list[Node] = []
        if include_start:
            visited.add(node_id)
            order.append(self._nodes[node_id])

        pending: deque[Any] = deque([node_id])
        expanded: set[Any] = {node_id}
        while pending:
            current = self._nodes[pending.popleft()]
            if isinstance(current, Leaf):
                continue
            for child_id in current.resolved_ids:
                if child_id not in visited:
                    visited.add(child_id)
                    order.append(self._nodes[child_id])
                if child_id not in expanded:
                    expanded.add(child_id)
                    pending.append(child_id)
        return order

    def walk(self) -> Iterator[Node]:
        """Yield every node once, depth-first from each root in input order.

        Roots are nodes nobody references; nodes only reachable through
        cycles are picked up afterwards in input order. Uses an explicit
        stack and a visited set.
        """
        visited: set[Any] = set()
        roots = [node_id for node_id in self._nodes if self._graph.in_degree(node_id) == 0]
        starts = [*roots, *self._nodes]
        for start in starts:
            if start in visited:
                continue
            stack: list[Any] = [start]
            while stack:
                current_id = stack.pop()
                if current_id in visited:
                    continue
                visited.add(current_id)
                current = self._nodes[current_id]
                yield current
                if isinstance(current, Branch):
                    # Reverse so the first reference is visited first
                    stack.extend(c for c in reversed(current.resolved_ids) if c not in visited)

    # ------------------------------------------------------------------
    # Cycle analysis
    # ------------------------------------------------------------------

    def is_acyclic(self) -> bool:
        """Check if the resolved reference structure has no cycles.

        Self-references count as cycles.
        """
        return nx.is_directed_acyclic_graph(self._graph)

    def find_cycle(self) -> tuple[Any, ...] | None:
        """Find one reference cycle.

        Returns:
            Node ids along the cycle in reference order (a self-reference
            yields a single id), or None if the graph is acyclic.
        """
        try:
            cycle = nx.find_cycle(self._graph)
        except nx.NetworkXNoCycle:
            return None
        return tuple(edge[0] for edge in cycle)

    def get_nx_graph(self) -> DiGraph[Any]:
        """Return a frozen copy of the underlying NetworkX graph.

        Use this for topology analysis and other NetworkX algorithms.
        Mutation attempts raise nx.NetworkXError.
        """
        return nx.freeze(self._graph.copy())  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # Paths and ordering
    # ------------------------------------------------------------------

    def shortest_path(self, source_id: Any, target_id: Any) -> list[Node]:
        """Get a path with the fewest references from source to target.

        Both ends are included. A node is its own shortest path.

        Returns:
            Nodes along the path, or an empty list if target is unreachable

        Raises:
            KeyError: If either node doesn't exist
        """
        self.get_node(source_id)
        self.get_node(target_id)
        try:
            path = nx.shortest_path(self._graph, source_id, target_id)
        except nx.NetworkXNoPath:
            return []
        return [self._nodes[node_id] for node_id in path]

    def all_paths(self, source_id: Any, target_id: Any, *, max_length: int | None = None) -> list[list[Node]]:
        """Get every simple path from source to target.

        No node repeats within a path, so cycles never extend one. The
        number of simple paths can grow exponentially with density; bound
        it with max_length (references per path).

        Raises:
            KeyError: If either node doesn't exist
        """
        self.get_node(source_id)
        self.get_node(target_id)
        if source_id == target_id:
            return [[self._nodes[source_id]]]
        paths = nx.all_simple_paths(self._graph, source_id, target_id, cutoff=max_length)
        return [[self._nodes[node_id] for node_id in path] for path in paths]

    def topological_order(self) -> list[Node]:
        """Get all nodes with every branch before the nodes it references.

        Among nodes whose order is otherwise free, input order wins.

        Raises:
            CycleError: If the resolved references contain a cycle
        """
        cycle = self.find_cycle()
        if cycle is not None:
            raise CycleError(cycle)
        order = nx.lexicographical_topological_sort(self._graph, key=lambda node_id: self._nodes[node_id].position)
        return [self._nodes[node_id] for node_id in order]

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def connected_components(self) -> list[list[Node]]:
        """Group nodes linked by references in either direction.

        Components are ordered by their first node; nodes within a
        component follow input order.
        """
        return self._ordered_groups(nx.weakly_connected_components(self._graph))

    def strongly_connected_components(self) -> list[list[Node]]:
        """Group nodes that can all reach each other.

        A node on no cycle is a component of its own. Ordered like
        connected_components().
        """
        return self._ordered_groups(nx.strongly_connected_components(self._graph))

    def _ordered_groups(self, groups: Iterable[set[Any]]) -> list[list[Node]]:
        ordered = [sorted((self._nodes[node_id] for node_id in group), key=_by_position) for group in groups]
        ordered.sort(key=lambda component: component[0].position)
        return ordered

    # ------------------------------------------------------------------
    # Queries and subgraphs
    # ------------------------------------------------------------------

    def find_leaves(self, predicate: Callable[[Leaf], bool]) -> list[Leaf]:
        """Get the Leaf nodes matching predicate, in input order."""
        return [leaf for leaf in self.leaves() if predicate(leaf)]

    def find_branches(self, predicate: Callable[[Branch], bool]) -> list[Branch]:
        """Get the Branch nodes matching predicate, in input order."""
        return [branch for branch in self.branches() if predicate(branch)]

    def subgraph(self, node_ids: Iterable[Any]) -> Graph:
        """Build a new Graph holding only the given nodes.

        Nodes keep their kind, value and input position. References to
        nodes left out become dangling in the new graph, exactly as if it
        had been built from the selected records alone.

        Raises:
            KeyError: If any id doesn't exist
        """
        selected = {self.get_node(node_id).id for node_id in node_ids}
        nodes: list[Node] = []
        dangling: list[DanglingReference] = []
        for node_id, node in self._nodes.items():
            if node_id not in selected:
                continue
            if isinstance(node, Branch):
                node = _restrict(node, selected, dangling)
            nodes.append(node)
        return Graph(nodes, dangling)

    def reachable_subgraph(self, node_id: Any, *, max_depth: int | None = None) -> Graph:
        """Build the subgraph of node_id and the nodes reachable from it.

        max_depth limits how many references away a node may be; 0 keeps
        only the start node.

        Raises:
            KeyError: If node doesn't exist
        """
        self.get_node(node_id)
        depths = nx.single_source_shortest_path_length(self._graph, node_id, cutoff=max_depth)
        return self.subgraph(depths)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def statistics(self) -> GraphStatistics:
        """Compute summary metrics over the resolved references."""
        degrees = [degree for _, degree in self._graph.degree()]
        node_count = self.node_count
        return GraphStatistics(
            node_count=node_count,
            leaf_count=self.size(),
            branch_count=self.branch_count(),
            edge_count=self.edge_count,
            dangling_count=len(self._dangling),
            density=nx.density(self._graph),
            average_degree=sum(degrees) / node_count if node_count else 0.0,
            max_degree=max(degrees, default=0),
            min_degree=min(degrees, default=0),
            isolated_count=nx.number_of_isolates(self._graph),
            component_count=nx.number_weakly_connected_components(self._graph),
            is_acyclic=self.is_acyclic(),
        )

    def __repr__(self) -> str:
        return (
            f"Graph(leaves={self.size()}, branches={self.branch_count()}, "
            f"edges={self.edge_count}, dangling={len(self._dangling)})"
        )


def _by_position(node: Node) -> int:
    return node.position


def _restrict(branch: Branch, selected: set[Any], dangling: list[DanglingReference]) -> Branch:
    """Re-resolve a branch's references against a subset of node ids."""
    resolved: list[Any] = []
    unresolved: list[Any] = []
    for target_id in branch.child_ids:
        # Tuple membership first: unhashable references never reach the set
        if target_id in branch.resolved_ids and target_id in selected:
            resolved.append(target_id)
            continue
        unresolved.append(target_id)
        dangling.append(DanglingReference(source_id=branch.id, target_id=target_id, position=branch.position))
    return replace(branch, resolved_ids=tuple(resolved), dangling_ids=tuple(unresolved))
