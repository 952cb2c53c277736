"""
graph.py — Editable Directed Weighted Graph
============================================
Single source of truth for the editor.  The canvas, the tables and the
forms all talk to this object; the algorithms never do — they receive
an adjacency-map snapshot from `to_adjacency()`.

Responsibilities:
  1. CRUD on nodes & edges                  (create / move / rename / remove)
  2. Adjacency queries                      (neighbours, get_edge_between, …)
  3. Snapshot for the algorithms            (to_adjacency / from_adjacency)
  4. Import / export adjacency-list text    (text ↔ graph)
  5. Serialisation round-trip               (to_dict / from_dict)
  6. The built-in sample graph              (Graph.default)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
    Insertion order is display order (node table, edge table).
  - A separate adjacency dict `_adj[source][target] → Edge` is kept in
    step with `edges`, so "one weight per (source, target)" is enforced
    structurally: setting an existing pair overwrites its weight.
  - Every mutation validates first and mutates second, so a rejected
    edit leaves the graph untouched.
"""

import logging
import math
import re
from typing import Dict, List, Mapping, Optional, Tuple

from graph.node import Node, NodeState
from graph.edge import Edge, validate_weight
from graph.errors import DuplicateNode, InvalidInput, UnknownEdge, UnknownNode

log = logging.getLogger(__name__)

Adjacency = Dict[str, Dict[str, float]]


# ---------------------------------------------------------------------------
# Sample graph shown on first visit and after "reset"
# ---------------------------------------------------------------------------
DEFAULT_ADJACENCY: Adjacency = {
    "A": {"B": 2, "C": 1, "D": 4},
    "B": {"E": 1, "C": 2, "D": 3},
    "C": {"E": 4, "F": 5},
    "D": {"C": 3, "F": 1},
    "E": {"G": 5, "F": 6},
    "F": {"G": 2},
    "G": {},
}

DEFAULT_POSITIONS: Dict[str, Tuple[float, float]] = {
    "A": (150, 280),
    "B": (300, 170),
    "C": (420, 280),
    "D": (270, 380),
    "E": (550, 170),
    "F": (550, 380),
    "G": (700, 280),
}

# "/" breaks the edge URLs; the rest are separators of the adjacency-list text
_FORBIDDEN_IN_ID = ("/", "->", ":", "→", ",", "(", ")")
_WEIGHTED_TOKEN  = re.compile(r"^(?P<target>[^()]+)\((?P<weight>[^()]*)\)$")


def clean_node_id(node_id) -> str:
    """Normalise a user-supplied node id or raise InvalidInput."""
    if not isinstance(node_id, str):
        raise InvalidInput(f"Node id must be a string, got {node_id!r}")
    cleaned = node_id.strip()
    if not cleaned:
        raise InvalidInput("Node id must not be empty")
    for bad in _FORBIDDEN_IN_ID:
        if bad in cleaned:
            raise InvalidInput(f"Node id {cleaned!r} must not contain {bad!r}")
    if any(ch.isspace() for ch in cleaned):
        raise InvalidInput(f"Node id {cleaned!r} must not contain whitespace")
    if cleaned.startswith("#"):
        raise InvalidInput(f"Node id {cleaned!r} must not start with '#'")
    return cleaned


def _format_weight(weight: float) -> str:
    return str(int(weight)) if float(weight).is_integer() else repr(float(weight))


class Graph:
    """
    Attributes:
        nodes : {node_id: Node}          — display order
        edges : {edge_id: Edge}          — display order, edge_id = "src->tgt"
        _adj  : {node_id: {target_id: Edge}}
    """

    def __init__(self):
        self.nodes: Dict[str, Node]             = {}
        self.edges: Dict[str, Edge]             = {}
        self._adj:  Dict[str, Dict[str, Edge]]  = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def create_node(self, node_id: str, x: float = 100.0, y: float = 100.0) -> Node:
        node_id = clean_node_id(node_id)
        if node_id in self.nodes:
            raise DuplicateNode(node_id)
        node = Node(node_id, x=x, y=y)
        self.nodes[node_id] = node
        self._adj[node_id] = {}
        log.debug("node added: %s at (%.0f, %.0f)", node_id, node.x, node.y)
        return node

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        node = self.require_node(node_id)
        node.move_to(x, y)
        return node

    def rename_node(self, old_id: str, new_id: str) -> Node:
        """
        Give a node a new id.  Every edge touching the old id is re-pointed
        at the new one with its weight untouched; display order is kept.
        """
        node = self.require_node(old_id)
        new_id = clean_node_id(new_id)
        if new_id == old_id:
            return node
        if new_id in self.nodes:
            raise DuplicateNode(new_id)

        node.id = new_id
        self.nodes = {(new_id if nid == old_id else nid): n for nid, n in self.nodes.items()}

        edges = list(self.edges.values())
        for e in edges:
            if e.source == old_id:
                e.source = new_id
            if e.target == old_id:
                e.target = new_id
        self.edges = {e.id: e for e in edges}
        self._rebuild_adjacency()

        log.debug("node renamed: %s → %s", old_id, new_id)
        return node

    def remove_node(self, node_id: str) -> None:
        self.require_node(node_id)
        for eid in [eid for eid, e in self.edges.items() if e.touches(node_id)]:
            e = self.edges.pop(eid)
            self._adj[e.source].pop(e.target, None)
        del self.nodes[node_id]
        del self._adj[node_id]
        log.debug("node removed: %s", node_id)

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def require_node(self, node_id: str, role: Optional[str] = None) -> Node:
        if not isinstance(node_id, str) or node_id not in self.nodes:
            raise UnknownNode(node_id, role)
        return self.nodes[node_id]

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def set_edge(self, source: str, target: str, weight) -> Edge:
        """Add source → target, or overwrite the weight if it already exists."""
        self.require_node(source, "source")
        self.require_node(target, "target")
        w = validate_weight(weight)

        existing = self._adj[source].get(target)
        if existing is not None:
            existing.weight = w
            log.debug("edge reweighted: %s = %s", existing.id, w)
            return existing

        edge = Edge(source, target, w)
        self.edges[edge.id] = edge
        self._adj[source][target] = edge
        log.debug("edge added: %s = %s", edge.id, w)
        return edge

    def update_edge(
        self,
        old_source: str,
        old_target: str,
        source: str,
        target: str,
        weight,
    ) -> Edge:
        """
        Edit an existing edge.  Same endpoints → weight change in place;
        different endpoints → the old edge goes and the new pair is set
        (overwriting whatever that pair held before).
        """
        self.require_edge(old_source, old_target)
        self.require_node(source, "source")
        self.require_node(target, "target")
        validate_weight(weight)

        if (old_source, old_target) != (source, target):
            self.remove_edge(old_source, old_target)
        return self.set_edge(source, target, weight)

    def remove_edge(self, source: str, target: str) -> None:
        edge = self.require_edge(source, target)
        del self.edges[edge.id]
        del self._adj[source][target]
        log.debug("edge removed: %s", edge.id)

    def get_edge_between(self, source: str, target: str) -> Optional[Edge]:
        return self._adj.get(source, {}).get(target)

    def require_edge(self, source: str, target: str) -> Edge:
        edge = self.get_edge_between(source, target)
        if edge is None:
            raise UnknownEdge(source, target)
        return edge

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Tuple[str, Edge]]:
        """Return [(target_id, edge)] for every outgoing edge."""
        return list(self._adj.get(node_id, {}).items())

    def path_edges(self, path: Optional[List[str]]) -> List[Edge]:
        """Edges joining consecutive path nodes (missing links are skipped)."""
        if not path:
            return []
        result = []
        for a, b in zip(path, path[1:]):
            e = self.get_edge_between(a, b)
            if e:
                result.append(e)
        return result

    # ==================================================================
    # VISUAL STATE
    # ==================================================================
    def mark_endpoints(self, source: Optional[str], destination: Optional[str]) -> None:
        """Reset every state, then tag the chosen source / destination."""
        for node in self.nodes.values():
            node.reset_state()
        for edge in self.edges.values():
            edge.reset_state()
        if source in self.nodes:
            self.nodes[source].state = NodeState.SOURCE
        if destination in self.nodes and destination != source:
            self.nodes[destination].state = NodeState.DESTINATION

    # ==================================================================
    # SNAPSHOT FOR THE ALGORITHMS
    # ==================================================================
    def to_adjacency(self) -> Adjacency:
        """
        {node_id: {target_id: weight}} with every node present as a key.
        Fresh dicts every call: the caller may hold on to it while the
        editor keeps mutating this graph.
        """
        return {
            nid: {tgt: e.weight for tgt, e in self._adj[nid].items()}
            for nid in self.nodes
        }

    @classmethod
    def from_adjacency(
        cls,
        adjacency: Mapping[str, Mapping[str, float]],
        positions: Optional[Mapping[str, Tuple[float, float]]] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Build a visual graph from an adjacency map.  Vertices that only
        appear as targets become nodes too.  Vertices without a position
        are laid out on a circle.
        """
        order: List[str] = []
        seen = set()
        for src, targets in adjacency.items():
            for nid in [src, *targets]:
                if nid not in seen:
                    seen.add(nid)
                    order.append(nid)

        positions = positions or {}
        g = cls()
        n = len(order)
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        for i, nid in enumerate(order):
            if nid in positions:
                x, y = positions[nid]
            else:
                angle = 2 * math.pi * i / max(n, 1)
                x = cx + radius * math.cos(angle)
                y = cy + radius * math.sin(angle)
            g.create_node(nid, round(x, 1), round(y, 1))

        for src, targets in adjacency.items():
            for tgt, w in targets.items():
                g.set_edge(src, tgt, w)
        return g

    @classmethod
    def default(cls) -> "Graph":
        return cls.from_adjacency(DEFAULT_ADJACENCY, positions=DEFAULT_POSITIONS)

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            g.create_node(nd["id"], nd.get("x", 100.0), nd.get("y", 100.0))
        for ed in data.get("edges", []):
            g.set_edge(ed["source"], ed["target"], ed.get("weight", 1.0))
        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            A -> B(3), C        → arrow syntax, comma separated, C weight 1
            G:                  → G with no outgoing edges
            G                   → same
            # comment

        A repeated (source, target) pair keeps the last weight.
        Nodes are auto-laid-out in a circle.
        """
        adjacency: Dict[str, Dict[str, float]] = {}

        for lineno, raw in enumerate(text.strip().splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            # split on ':' or '→' or '->'
            for sep in (":", "→", "->"):
                if sep in line:
                    head, rest = line.split(sep, 1)
                    break
            else:
                head, rest = line, ""

            try:
                src = clean_node_id(head)
            except InvalidInput as exc:
                raise InvalidInput(f"line {lineno}: {exc}") from None
            targets = adjacency.setdefault(src, {})

            for token in rest.replace(",", " ").split():
                m = _WEIGHTED_TOKEN.match(token)
                tgt, w = (m.group("target"), m.group("weight")) if m else (token, 1.0)
                try:
                    tgt = clean_node_id(tgt)
                    targets[tgt] = validate_weight(w)
                except InvalidInput as exc:
                    raise InvalidInput(f"line {lineno}: {exc}") from None
                adjacency.setdefault(tgt, {})

        return cls.from_adjacency(adjacency, canvas_w=canvas_w, canvas_h=canvas_h)

    def to_adjacency_list(self) -> str:
        lines = []
        for nid in self.nodes:
            targets = " ".join(
                f"{tgt}({_format_weight(e.weight)})" for tgt, e in self._adj[nid].items()
            )
            lines.append(f"{nid}: {targets}".rstrip())
        return "\n".join(lines)

    # ==================================================================
    # INTERNAL
    # ==================================================================
    def _rebuild_adjacency(self) -> None:
        self._adj = {nid: {} for nid in self.nodes}
        for e in self.edges.values():
            self._adj[e.source][e.target] = e

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __contains__(self, node_id) -> bool:
        return node_id in self.nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
