# src/treep/core/graph/__init__.py
"""Leaf/branch graphs built from cross-referencing JSON records.

Package re-exports. Construction lives in builder.py, the Graph class in
graph.py, and node/diagnostic types in models.py.
"""

from treep.core.graph.builder import from_json, from_tree
from treep.core.graph.graph import Graph
from treep.core.graph.models import (
    Branch,
    DanglingReference,
    GraphStatistics,
    Leaf,
    Node,
    NodeKind,
    NodeView,
)

__all__ = [
    "Branch",
    "DanglingReference",
    "Graph",
    "GraphStatistics",
    "Leaf",
    "Node",
    "NodeKind",
    "NodeView",
    "from_json",
    "from_tree",
]
