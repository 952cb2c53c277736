"""
graph/
-----
Editor data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import NodeState, EdgeState
    from graph import GraphError, InvalidInput, …
"""

from graph.node   import Node,  NodeState
from graph.edge   import Edge,  EdgeState, validate_weight
from graph.graph  import Graph, Adjacency, DEFAULT_ADJACENCY, DEFAULT_POSITIONS
from graph.errors import (
    GraphError,
    InvalidInput,
    UnknownNode,
    DuplicateNode,
    UnknownEdge,
    CyclicGraphError,
)

__all__ = [
    "Node",      "NodeState",
    "Edge",      "EdgeState",   "validate_weight",
    "Graph",     "Adjacency",   "DEFAULT_ADJACENCY", "DEFAULT_POSITIONS",
    "GraphError",
    "InvalidInput",
    "UnknownNode",
    "DuplicateNode",
    "UnknownEdge",
    "CyclicGraphError",
]
