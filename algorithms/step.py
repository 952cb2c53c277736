"""
step.py — Algorithm Step Snapshot
==================================
Every algorithm is a generator that yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • Which nodes are settled / frontier / current / on-path
    • Which edges were relaxed / ignored / chosen
    • The best-known longest distances (for the live distance panel)
    • Which line of pseudocode is executing right now
    • A plain-English explanation of *why* this step happened
      (Learning Mode reads this)

Design decisions:
  - Step is a plain dataclass (no methods that mutate the graph).
    It is a SNAPSHOT. The algorithm generator is the only writer;
    the stepper / renderer are pure readers.
  - Distances are longest-so-far, so "unknown" is -inf, not +inf.
  - `overlay` is a free-form dict so different algorithms can push
    whatever extra info they want (unsettled set, topological order, …).
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional


NEG_INF = float("-inf")


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        current_node    : ID of the node selected / processed right now.
        current_edge    : ID of the edge being examined right now (or None).
        node_states     : {node_id: state_string}  — only nodes that CHANGED.
        edge_states     : {edge_id: state_string}  — only edges that CHANGED.
        settled         : node_ids whose distance is fixed, in settle order.
        frontier        : node_ids with a finite distance, not yet settled.
        path            : Ordered node_ids of the longest path (final step only).
        distances       : {node_id: float} — best-known longest distances.
        pseudocode_line : 0-based index of the pseudocode line executing now.
        explanation     : Human-readable "why" text for Learning Mode.
        overlay         : Free-form dict for algo-specific overlay data:
                            • "unsettled"  – node_ids still in play
                            • "order"      – topological order (DAG solver)
        metrics         : Running tally: nodes_settled, edges_relaxed, path_edges.
        is_final        : True on the very last step.
    """

    step_number:      int                          = 0
    current_node:     Optional[str]                = None
    current_edge:     Optional[str]                = None
    node_states:      Dict[str, str]               = field(default_factory=dict)
    edge_states:      Dict[str, str]               = field(default_factory=dict)
    settled:          List[str]                    = field(default_factory=list)
    frontier:         List[str]                    = field(default_factory=list)
    path:             List[str]                    = field(default_factory=list)
    distances:        Dict[str, float]             = field(default_factory=dict)
    pseudocode_line:  int                          = 0
    explanation:      str                          = ""
    overlay:          Dict[str, Any]               = field(default_factory=dict)
    metrics:          Dict[str, Any]               = field(default_factory=dict)
    is_final:         bool                         = False

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; -inf distances become None."""
        data = asdict(self)
        data["distances"] = json_distances(self.distances)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        kwargs["distances"] = {
            k: (NEG_INF if v is None else v)
            for k, v in kwargs.get("distances", {}).items()
        }
        return cls(**kwargs)


def json_distances(distances: Dict[str, float]) -> Dict[str, Optional[float]]:
    """JSON has no -Infinity, so unreached nodes are sent as null."""
    return {k: (None if v == NEG_INF else v) for k, v in distances.items()}


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that algorithms use to construct Steps cleanly.

    Usage inside an algorithm generator:
        sb = StepBuilder(settled, dist)
        sb.set_current("A")
        sb.explanation = "A has the greatest distance among unsettled nodes."
        yield sb.build(step_number=3)
    """

    def __init__(
        self,
        settled: Optional[List[str]] = None,
        distances: Optional[Dict[str, float]] = None,
        edges_relaxed: int = 0,
    ):
        self.current_node:     Optional[str]       = None
        self.current_edge:     Optional[str]       = None
        self.node_states:      Dict[str, str]      = {}
        self.edge_states:      Dict[str, str]      = {}
        self.settled:          List[str]           = list(settled or [])
        self.frontier:         List[str]           = []
        self.path:             List[str]           = []
        self.distances:        Dict[str, float]    = dict(distances or {})
        self.pseudocode_line:  int                 = 0
        self.explanation:      str                 = ""
        self.overlay:          Dict[str, Any]      = {}
        self.metrics:          Dict[str, Any]      = {
            "nodes_settled": len(self.settled),
            "edges_relaxed": edges_relaxed,
            "path_edges":    0,
        }

        for n in self.settled:
            self.node_states[n] = "settled"
        # anything reached but not yet settled is on the frontier
        self.frontier = [
            n for n, d in self.distances.items()
            if d != NEG_INF and n not in self.settled
        ]
        for n in self.frontier:
            self.node_states.setdefault(n, "frontier")

    # -- helpers --
    def set_current(self, node_id: str):
        self.current_node = node_id
        self.node_states[node_id] = "current"

    def relax_edge(self, edge_id: Optional[str]):
        self.metrics["edges_relaxed"] = self.metrics.get("edges_relaxed", 0) + 1
        if edge_id:
            self.current_edge = edge_id
            self.edge_states[edge_id] = "relaxed"

    def ignore_edge(self, edge_id: Optional[str]):
        if edge_id:
            self.current_edge = edge_id
            self.edge_states[edge_id] = "ignored"

    def choose_edge(self, edge_id: str):
        self.edge_states[edge_id] = "chosen"

    def set_path(self, path: List[str]):
        self.path = list(path)
        self.metrics["path_edges"] = len(path) - 1 if len(path) > 1 else 0
        for n in path:
            self.node_states[n] = "path"

    def build(self, step_number: int = 0, is_final: bool = False) -> Step:
        return Step(
            step_number=step_number,
            current_node=self.current_node,
            current_edge=self.current_edge,
            node_states=dict(self.node_states),
            edge_states=dict(self.edge_states),
            settled=list(self.settled),
            frontier=list(self.frontier),
            path=list(self.path),
            distances=dict(self.distances),
            pseudocode_line=self.pseudocode_line,
            explanation=self.explanation,
            overlay=dict(self.overlay),
            metrics=dict(self.metrics),
            is_final=is_final,
        )
