"""
longest_path.py — Max-Distance Dijkstra
========================================
Single-source longest distances by running Dijkstra with the comparison
flipped: repeatedly settle the unsettled node with the GREATEST known
distance and relax its outgoing edges upward.

Two entry points share the same selection rule and path reconstruction:

    compute(adjacency, source, destination=None) -> LongestPathResult
        Pure function over an adjacency-map snapshot.  This is what the
        "Compute" button and the JSON API call.

    longest_path(graph, source, target) -> Generator[Step]
        The same algorithm, narrated one Step at a time for playback.

Tie-break: among unsettled nodes sharing the greatest distance, the
lexicographically smallest id is selected.  The choice changes which
path is reconstructed, not just the numbers, so it is fixed here rather
than left to set iteration order.

Correctness note: flipping Dijkstra's comparator does NOT give true
longest paths in general.  A node is settled as soon as it is the
farthest unsettled node, so a later, longer route into it is never
considered.  Positive cycles reachable from the source are not detected
either; the loop still ends because every round settles exactly one
node.  Use the DAG solver (dag_longest_path.py) for exact answers on
acyclic graphs.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Generator, Iterable, List, Mapping, Optional, Set

from graph import Graph, UnknownNode
from algorithms.step import NEG_INF, Step, StepBuilder

log = logging.getLogger(__name__)

AdjacencyMap = Mapping[str, Mapping[str, float]]


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def LongestPath(graph, source, dest):",               # 0
    "    dist ← {v: -∞ for v in V}",                       # 1
    "    dist[source] ← 0",                                # 2
    "    unsettled ← V",                                   # 3
    "    while unsettled is not empty:",                   # 4
    "        u ← argmax(dist[v] for v in unsettled)",      # 5
    "        if u == dest: break",                         # 6
    "        unsettled.remove(u)",                         # 7
    "        for (v, w) in adj(u):",                       # 8
    "            if v not in unsettled: continue",         # 9
    "            if dist[u] + w > dist[v]:",               # 10
    "                dist[v] ← dist[u] + w",               # 11
    "                prev[v] ← u",                         # 12
    "    return dist, path(prev, source, dest)",           # 13
]


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LongestPathResult:
    """
    Attributes:
        distances : {node_id: longest distance found}, -inf when unreached.
        path      : source … destination inclusive, or None when no
                    destination was asked for or it is unreachable.
    """

    distances: Dict[str, float]
    path:      Optional[List[str]] = None

    def distance_to(self, node_id: str) -> float:
        return self.distances.get(node_id, NEG_INF)

    def reachable(self, node_id: str) -> bool:
        return self.distance_to(node_id) != NEG_INF

    def path_weight(self, adjacency: AdjacencyMap) -> float:
        """Sum of edge weights along `path` (0 for a missing / one-node path)."""
        if not self.path:
            return 0.0
        return float(sum(adjacency[a][b] for a, b in zip(self.path, self.path[1:])))


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------
def known_vertices(adjacency: AdjacencyMap) -> List[str]:
    """Every key plus every node that only shows up as an edge target."""
    order: List[str] = []
    seen: Set[str] = set()
    for src, targets in adjacency.items():
        for nid in (src, *targets):
            if nid not in seen:
                seen.add(nid)
                order.append(nid)
    return order


def check_endpoints(
    vertices: Iterable[str],
    source: str,
    destination: Optional[str] = None,
) -> None:
    known = set(vertices)
    if not isinstance(source, str) or source not in known:
        raise UnknownNode(source, "source")
    if destination is not None and (not isinstance(destination, str) or destination not in known):
        raise UnknownNode(destination, "destination")


def select_farthest(unsettled: Set[str], dist: Mapping[str, float]) -> str:
    """Greatest distance wins; equal distances go to the smallest id."""
    return min(unsettled, key=lambda v: (-dist[v], v))


def reconstruct_path(
    previous: Mapping[str, Optional[str]],
    source: str,
    destination: str,
) -> Optional[List[str]]:
    """
    Walk predecessors back from `destination`.  The walk is a valid path
    only if it ends at `source`; otherwise the destination was never
    reached and None is returned.
    """
    path = [destination]
    cur = previous.get(destination)
    while cur is not None:
        path.append(cur)
        if cur == source:
            break
        cur = previous.get(cur)
    path.reverse()
    return path if path[0] == source else None


# ---------------------------------------------------------------------------
# Pure computation
# ---------------------------------------------------------------------------
def compute(
    adjacency: AdjacencyMap,
    source: str,
    destination: Optional[str] = None,
) -> LongestPathResult:
    """
    Longest distances from `source` (and a path to `destination` if given).

    Raises InvalidInput (UnknownNode) when source or destination is not a
    vertex of `adjacency`.  The mapping is only read, never modified.
    """
    vertices = known_vertices(adjacency)
    check_endpoints(vertices, source, destination)

    dist: Dict[str, float] = {v: NEG_INF for v in vertices}
    previous: Dict[str, Optional[str]] = {v: None for v in vertices}
    dist[source] = 0.0
    unsettled: Set[str] = set(vertices)

    while unsettled:
        u = select_farthest(unsettled, dist)
        if u == destination:
            break
        unsettled.remove(u)
        for v, w in adjacency.get(u, {}).items():
            if v not in unsettled:
                continue
            candidate = dist[u] + w
            if candidate > dist[v]:
                dist[v] = candidate
                previous[v] = u

    path = reconstruct_path(previous, source, destination) if destination is not None else None
    log.debug(
        "longest path %s → %s over %d vertices: %s",
        source, destination, len(vertices), path,
    )
    return LongestPathResult(distances=dist, path=path)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def longest_path(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:

    adjacency = graph.to_adjacency()
    vertices  = known_vertices(adjacency)
    check_endpoints(vertices, source, target)

    step_no = 0
    relaxed = 0

    dist:     Dict[str, float]          = {v: NEG_INF for v in vertices}
    previous: Dict[str, Optional[str]]  = {v: None for v in vertices}
    dist[source] = 0.0
    unsettled: Set[str]  = set(vertices)
    settled:   List[str] = []

    def edge_id(u: str, v: str) -> Optional[str]:
        e = graph.get_edge_between(u, v)
        return e.id if e else None

    # --- init step ---
    sb = StepBuilder(settled, dist)
    sb.set_current(source)
    sb.pseudocode_line = 2
    sb.explanation = (
        f"Initialise: every distance = -∞ except source '{source}' = 0. "
        f"All {len(vertices)} nodes start unsettled."
    )
    sb.overlay["unsettled"] = sorted(unsettled)
    yield sb.build(step_number=step_no)
    step_no += 1

    # --- main loop ---
    stopped_at_target = False
    while unsettled:
        u = select_farthest(unsettled, dist)

        if u == target:
            stopped_at_target = True
            break

        unsettled.remove(u)
        settled.append(u)

        sb = StepBuilder(settled, dist, relaxed)
        sb.set_current(u)
        sb.pseudocode_line = 7
        if dist[u] == NEG_INF:
            sb.explanation = (
                f"Select '{u}': every remaining node is at -∞, so '{u}' is "
                f"unreachable from '{source}'. Settle it anyway."
            )
        else:
            sb.explanation = (
                f"Select '{u}' with distance {dist[u]:g} — the greatest among "
                f"unsettled nodes. Settle it and relax its outgoing edges."
            )
        sb.overlay["unsettled"] = sorted(unsettled)
        yield sb.build(step_number=step_no)
        step_no += 1

        # -- relax neighbours --
        for v, w in adjacency[u].items():
            sb = StepBuilder(settled, dist, relaxed)
            sb.set_current(u)
            sb.overlay["unsettled"] = sorted(unsettled)

            if v not in unsettled:
                sb.ignore_edge(edge_id(u, v))
                sb.pseudocode_line = 9
                sb.explanation = f"Edge {u}→{v} (w={w:g}): '{v}' is already settled — skip."
                yield sb.build(step_number=step_no)
                step_no += 1
                continue

            candidate = dist[u] + w
            if candidate > dist[v]:
                old = dist[v]
                dist[v] = candidate
                previous[v] = u
                relaxed += 1
                sb.distances = dict(dist)
                sb.relax_edge(edge_id(u, v))
                sb.node_states[v] = "frontier"
                if v not in sb.frontier:
                    sb.frontier.append(v)
                sb.pseudocode_line = 11
                sb.explanation = (
                    f"Relax {u}→{v}: {dist[u]:g} + {w:g} = {candidate:g} "
                    f"> current {_fmt(old)} → UPDATE, prev['{v}'] = '{u}'."
                )
            else:
                sb.ignore_edge(edge_id(u, v))
                sb.pseudocode_line = 10
                sb.explanation = (
                    f"Edge {u}→{v}: {_fmt(dist[u])} + {w:g} = {_fmt(candidate)} "
                    f"≤ current {_fmt(dist[v])} → no improvement."
                )
            yield sb.build(step_number=step_no)
            step_no += 1

    # --- final step ---
    sb = StepBuilder(settled, dist, relaxed)
    sb.pseudocode_line = 13
    sb.overlay["unsettled"] = sorted(unsettled)

    if target is None:
        sb.explanation = (
            f"All nodes settled. Longest distances from '{source}' are final "
            f"(unreached nodes stay at -∞)."
        )
    else:
        path = reconstruct_path(previous, source, target)
        if stopped_at_target:
            sb.set_current(target)
        if path:
            sb.set_path(path)
            for e in graph.path_edges(path):
                sb.choose_edge(e.id)
            sb.explanation = (
                f"🎯 Destination '{target}' selected. Longest distance = "
                f"{dist[target]:g}. Path: {' → '.join(path)}"
            )
        else:
            sb.explanation = f"'{target}' is not reachable from '{source}' — no path."

    log.debug("longest_path run finished after %d steps", step_no + 1)
    yield sb.build(step_number=step_no, is_final=True)


def _fmt(value: float) -> str:
    return "-∞" if value == NEG_INF else f"{value:g}"
