"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the
analytics metrics the UI needs for the Analytics panel and Comparison
Mode.

Usage:
    rec = Recorder()
    rec.start(algo_key="longest_path", source="A", target="G", graph=g)
    metrics = rec.run_to_completion()  # exhausts the generator, returns RunMetrics
    rec.export()                       # JSON-ready snapshot for save/replay

Comparison Mode:
    The UI holds two Recorders (one per algo), runs both to completion
    on the SAME graph, then calls compare(rec1, rec2) → ComparisonResult.
    For longest paths the HEAVIER path wins.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from graph import Graph, InvalidInput
from algorithms import AlgoInfo, get_algorithm
from algorithms.step import NEG_INF, Step, json_distances
from engine.stepper import Stepper

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str             = ""
    algo_label:      str             = ""
    source:          str             = ""
    target:          Optional[str]   = None
    nodes_settled:   int             = 0
    edges_relaxed:   int             = 0
    path_edges:      int             = 0          # number of edges on the final path
    path_weight:     float           = 0.0        # total weight of the final path
    distance:        Optional[float] = None       # reported distance to target, None if unreached
    total_steps:     int             = 0          # number of Steps yielded
    wall_time_ms:    float           = 0.0        # wall-clock time to run to completion
    path_found:      bool            = False
    exact:           bool            = False      # algorithm guarantees the true longest path
    cycle:           bool            = False      # run refused a reachable cycle

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_path:   str  = ""     # which algo found the heavier path
    winner_edges:  str  = ""     # which algo relaxed fewer edges
    winner_steps:  str  = ""     # which algo needed fewer steps
    agree:         bool = False  # same path weight from both

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps       : Full list of Steps from the run.
        metrics     : Computed RunMetrics (available after run_to_completion).
        stepper     : The underlying Stepper (if you want live step-by-step access).
    """

    def __init__(self):
        self.steps:     List[Step]           = []
        self.metrics:   Optional[RunMetrics] = None
        self.stepper:   Optional[Stepper]    = None

        self._algo_info:  Optional[AlgoInfo] = None
        self._source:     str                = ""
        self._target:     Optional[str]      = None
        self._graph:      Optional[Graph]    = None

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        source: str,
        target: Optional[str],
        graph: Graph,
    ) -> None:
        """
        Initialise the generator and stepper for this run.

        Raises InvalidInput for an unknown algorithm or unknown endpoints
        (the generator validates as soon as the first step is pulled).
        """
        info = get_algorithm(algo_key)
        if info is None:
            raise InvalidInput(f"Unknown algorithm: {algo_key}")

        self._algo_info  = info
        self._source     = source
        self._target     = target
        self._graph      = graph
        self.steps       = []
        self.metrics     = None

        gen = info.fn(graph=graph, source=source, target=target)

        self.stepper = Stepper()
        self.stepper.start(gen)

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the generator, record every step, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.stepper.jump_to_end()
        self.steps = list(self.stepper.steps)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        log.info(
            "%s %s → %s: %d steps, path weight %g",
            self.metrics.algo_key, self._source, self._target,
            self.metrics.total_steps, self.metrics.path_weight,
        )
        return self.metrics

    def final_distances(self) -> Dict[str, Optional[float]]:
        """Distances of the last step, JSON-ready."""
        if not self.steps:
            return {}
        return json_distances(self.steps[-1].distances)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "source":   self._source,
            "target":   self._target,
            "graph":    self._graph.to_dict() if self._graph else {},
            "metrics":  self.metrics.to_dict() if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None
        path = last.path if last else []

        path_weight = 0.0
        if self._graph is not None:
            path_weight = sum(e.weight for e in self._graph.path_edges(path))

        distance = None
        if last is not None and self._target is not None:
            d = last.distances.get(self._target, NEG_INF)
            distance = None if d == NEG_INF else d

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            source=self._source,
            target=self._target,
            nodes_settled=len(last.settled) if last else 0,
            edges_relaxed=last.metrics.get("edges_relaxed", 0) if last else 0,
            path_edges=len(path) - 1 if len(path) > 1 else 0,
            path_weight=float(path_weight),
            distance=distance,
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            path_found=bool(path),
            exact=info.exact if info else False,
            cycle=bool(last and last.overlay.get("cycle")),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l.algo_label if l_val < r_val else r.algo_label
        return l.algo_label if l_val > r_val else r.algo_label

    # a run that found no path (or hit a cycle) cannot win on weight
    l_weight = l.path_weight if l.path_found else NEG_INF
    r_weight = r.path_weight if r.path_found else NEG_INF

    return ComparisonResult(
        left=l,
        right=r,
        winner_path =winner(l_weight, r_weight, lower_is_better=False),
        winner_edges=winner(l.edges_relaxed, r.edges_relaxed),
        winner_steps=winner(l.total_steps, r.total_steps),
        agree=l.path_found == r.path_found and l.path_weight == r.path_weight,
    )
