"""
errors.py — Graph Error Hierarchy
==================================
Every library-level failure is one of these.  The Flask layer maps them
to HTTP status codes in one place (see main.py error handlers), so the
model and the algorithms never need to know about requests.

    GraphError
     ├── InvalidInput          (also a ValueError)
     │    ├── UnknownNode
     │    ├── DuplicateNode
     │    └── UnknownEdge
     └── CyclicGraphError
"""

from typing import List, Optional


class GraphError(Exception):
    """Base class for graph model and algorithm errors."""


class InvalidInput(GraphError, ValueError):
    """Bad ids, bad weights, unknown source / destination, bad import text."""


class UnknownNode(InvalidInput):
    def __init__(self, node_id: str, role: Optional[str] = None):
        self.node_id = node_id
        self.role    = role
        what = f"{role} node" if role else "Node"
        super().__init__(f"{what.capitalize()} '{node_id}' does not exist")


class DuplicateNode(InvalidInput):
    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' already exists")


class UnknownEdge(InvalidInput):
    def __init__(self, source: str, target: str):
        self.source = source
        self.target = target
        super().__init__(f"Edge '{source}' -> '{target}' does not exist")


class CyclicGraphError(GraphError):
    """The exact solver met a cycle reachable from the source."""

    def __init__(self, remaining: List[str]):
        self.remaining = list(remaining)
        super().__init__(
            f"Cycle detected: {len(self.remaining)} node(s) involved "
            f"({', '.join(self.remaining)})"
        )
