"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the editor can run.

    from algorithms import REGISTRY, get_algorithm, compute

REGISTRY is a dict:
    {
        "longest_path": AlgoInfo(key, label, fn, solve, pseudocode, …),
        …
    }

Each entry carries two callables over the same semantics:
    fn    – step generator  (graph, source, target) → Step*   (playback)
    solve – pure function   (adjacency, source, destination) → LongestPathResult
"""

from dataclasses import dataclass, field
from typing import Callable, List, Dict, Optional

from algorithms.step import Step, StepBuilder, NEG_INF, json_distances
from algorithms.longest_path import (
    LongestPathResult,
    compute,
    longest_path       as _longest_path,
    PSEUDOCODE         as _lp_pc,
)
from algorithms.dag_longest_path import (
    solve              as _dag_solve,
    dag_longest_path   as _dag_longest_path,
    topological_order,
    PSEUDOCODE         as _dag_pc,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "longest_path"
    label:             str                    # human label
    fn:                Callable               # the step generator
    solve:             Callable               # the pure function
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)
    exact:             bool     = False       # true longest path guaranteed?
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""          # one-liner for the UI card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "longest_path": AlgoInfo(
        key="longest_path", label="Max-Distance Dijkstra",
        fn=_longest_path, solve=compute, pseudocode=_lp_pc,
        tags=["weighted", "longest-path", "greedy"],
        complexity_time="O(V² + E)", complexity_space="O(V)",
        description="Dijkstra with the comparison flipped: settle the farthest node first. "
                    "Fast, but not guaranteed to find the true longest path.",
    ),

    "dag_longest_path": AlgoInfo(
        key="dag_longest_path", label="Topological DP (DAG)",
        fn=_dag_longest_path, solve=_dag_solve, pseudocode=_dag_pc,
        tags=["weighted", "longest-path", "exact", "dag"],
        exact=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Relax edges in topological order. Exact on acyclic graphs; "
                    "refuses graphs with a reachable cycle.",
    ),
}

DEFAULT_ALGORITHM = "longest_path"


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "DEFAULT_ALGORITHM",
    "get_algorithm",
    "list_algorithms",
    "compute",
    "topological_order",
    "LongestPathResult",
    "Step",
    "StepBuilder",
    "NEG_INF",
    "json_distances",
]
