"""
dag_longest_path.py — Exact Longest Path on a DAG
==================================================
The textbook answer for acyclic graphs, shown next to the greedy
max-Dijkstra so the two can be compared on the same graph.

Algorithm:
  1.  Keep only the nodes reachable from the source.
  2.  Topologically sort them (Kahn's algorithm: in-degree counting,
      zero-in-degree nodes enter a queue, smallest id first).
      Nodes left over when the queue runs dry sit on a cycle →
      CyclicGraphError.
  3.  Walk nodes in that order.  For each edge (u, v, w): if
      dist[u] + w > dist[v], update dist[v] and record u as prev[v].
  4.  Walk prev backward from the destination to recover the path.

O(V + E).  Every predecessor of v is final before v is read, which is
exactly what the greedy variant cannot promise.
"""

import heapq
import logging
from collections import deque
from typing import Deque, Dict, Generator, List, Optional, Set

from graph import CyclicGraphError, Graph
from algorithms.longest_path import (
    AdjacencyMap,
    LongestPathResult,
    check_endpoints,
    known_vertices,
    reconstruct_path,
)
from algorithms.step import NEG_INF, Step, StepBuilder

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DagLongestPath(graph, source, dest):",    # 0
    "    R ← nodes reachable from source",         # 1
    "    order ← topological_sort(R)",             # 2
    "    if order misses a node: CYCLE",           # 3
    "    dist ← {v: -∞ for v in V}",               # 4
    "    dist[source] ← 0",                        # 5
    "    for u in order:",                         # 6
    "        for (v, w) in adj(u):",               # 7
    "            if dist[u] + w > dist[v]:",       # 8
    "                dist[v] ← dist[u] + w",       # 9
    "                prev[v] ← u",                 # 10
    "    return dist, path(prev, source, dest)",   # 11
]


# ---------------------------------------------------------------------------
# Topological order of the reachable part
# ---------------------------------------------------------------------------
def reachable_from(adjacency: AdjacencyMap, source: str) -> Set[str]:
    seen = {source}
    queue: Deque[str] = deque([source])
    while queue:
        u = queue.popleft()
        for v in adjacency.get(u, {}):
            if v not in seen:
                seen.add(v)
                queue.append(v)
    return seen


def topological_order(adjacency: AdjacencyMap, source: str) -> List[str]:
    """
    Kahn's algorithm over the nodes reachable from `source`.
    Ties between ready nodes go to the smallest id so the order (and
    therefore the reconstructed path) is deterministic.

    Raises CyclicGraphError if a reachable cycle exists.
    """
    check_endpoints(known_vertices(adjacency), source)
    nodes = reachable_from(adjacency, source)

    in_deg: Dict[str, int] = {n: 0 for n in nodes}
    for u in nodes:
        for v in adjacency.get(u, {}):
            in_deg[v] += 1

    ready = [n for n, d in in_deg.items() if d == 0]
    heapq.heapify(ready)

    order: List[str] = []
    while ready:
        u = heapq.heappop(ready)
        order.append(u)
        for v in adjacency.get(u, {}):
            in_deg[v] -= 1
            if in_deg[v] == 0:
                heapq.heappush(ready, v)

    if len(order) != len(nodes):
        placed = set(order)
        raise CyclicGraphError(sorted(n for n in nodes if n not in placed))
    return order


# ---------------------------------------------------------------------------
# Pure computation
# ---------------------------------------------------------------------------
def solve(
    adjacency: AdjacencyMap,
    source: str,
    destination: Optional[str] = None,
) -> LongestPathResult:
    """Exact longest distances from `source`; unreachable nodes stay -inf."""
    vertices = known_vertices(adjacency)
    check_endpoints(vertices, source, destination)
    order = topological_order(adjacency, source)

    dist: Dict[str, float] = {v: NEG_INF for v in vertices}
    previous: Dict[str, Optional[str]] = {v: None for v in vertices}
    dist[source] = 0.0

    for u in order:
        for v, w in adjacency.get(u, {}).items():
            if dist[u] + w > dist[v]:
                dist[v] = dist[u] + w
                previous[v] = u

    path = reconstruct_path(previous, source, destination) if destination is not None else None
    log.debug("dag longest path %s → %s: order=%s path=%s", source, destination, order, path)
    return LongestPathResult(distances=dist, path=path)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dag_longest_path(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> Generator[Step, None, None]:

    adjacency = graph.to_adjacency()
    vertices  = known_vertices(adjacency)
    check_endpoints(vertices, source, target)

    step_no = 0
    relaxed = 0
    dist:     Dict[str, float]         = {v: NEG_INF for v in vertices}
    previous: Dict[str, Optional[str]] = {v: None for v in vertices}
    dist[source] = 0.0
    settled: List[str] = []

    # --- ordering step (or cycle) ---
    try:
        order = topological_order(adjacency, source)
    except CyclicGraphError as exc:
        sb = StepBuilder(settled, dist)
        for n in exc.remaining:
            sb.node_states[n] = "current"
        sb.pseudocode_line = 3
        sb.explanation = (
            f"Cycle among {', '.join(exc.remaining)} is reachable from '{source}'. "
            f"Longest paths are unbounded here — the exact solver stops."
        )
        sb.overlay["cycle"] = list(exc.remaining)
        yield sb.build(step_number=step_no, is_final=True)
        return

    sb = StepBuilder(settled, dist)
    sb.set_current(source)
    sb.pseudocode_line = 2
    sb.explanation = (
        f"{len(order)} node(s) reachable from '{source}'. "
        f"Topological order: {' → '.join(order)}."
    )
    sb.overlay["order"] = list(order)
    yield sb.build(step_number=step_no)
    step_no += 1

    # --- relax in topological order ---
    for u in order:
        settled.append(u)
        for v, w in adjacency[u].items():
            edge = graph.get_edge_between(u, v)
            sb = StepBuilder(settled, dist, relaxed)
            sb.set_current(u)
            sb.overlay["order"] = list(order)

            candidate = dist[u] + w
            if candidate > dist[v]:
                dist[v] = candidate
                previous[v] = u
                relaxed += 1
                sb.distances = dict(dist)
                sb.relax_edge(edge.id if edge else None)
                if v not in sb.frontier:
                    sb.frontier.append(v)
                sb.node_states[v] = "frontier"
                sb.pseudocode_line = 9
                sb.explanation = (
                    f"Relax {u}→{v}: {dist[u]:g} + {w:g} = {candidate:g} → "
                    f"dist['{v}'] = {candidate:g}, prev['{v}'] = '{u}'."
                )
            else:
                sb.ignore_edge(edge.id if edge else None)
                sb.pseudocode_line = 8
                sb.explanation = (
                    f"Edge {u}→{v}: {dist[u]:g} + {w:g} = {candidate:g} "
                    f"≤ current {dist[v]:g} → keep."
                )
            yield sb.build(step_number=step_no)
            step_no += 1

    # --- final step ---
    sb = StepBuilder(settled, dist, relaxed)
    sb.pseudocode_line = 11
    sb.overlay["order"] = list(order)
    if target is None:
        sb.explanation = f"Done. Exact longest distances from '{source}' are final."
    else:
        path = reconstruct_path(previous, source, target)
        if path:
            sb.set_path(path)
            for e in graph.path_edges(path):
                sb.choose_edge(e.id)
            sb.explanation = (
                f"🎯 Exact longest distance to '{target}' = {dist[target]:g}. "
                f"Path: {' → '.join(path)}"
            )
        else:
            sb.explanation = f"'{target}' is not reachable from '{source}' — no path."
    yield sb.build(step_number=step_no, is_final=True)
