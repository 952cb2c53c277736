"""
edge.py — Directed Weighted Edge
================================
Connects two nodes.  Carries a strictly positive weight and its own
visual state so the renderer can colour-code edges as Relaxed / Chosen /
Ignored exactly as the algorithm touches them.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Every edge is directed.  At most one edge exists per (source, target)
    pair, so the id is derived from the pair ("A->B") instead of being a
    random token; renaming an endpoint re-derives it.
  - Weights are validated once, here, by `validate_weight`.
"""

import math
from enum import Enum
from numbers import Real
from typing import Any

from graph.errors import InvalidInput


# ---------------------------------------------------------------------------
# Edge State Enum — visual encoding for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT  = "default"   # thin, neutral blue
    RELAXED  = "relaxed"   # amber — "this edge just improved a distance"
    CHOSEN   = "chosen"    # green, thick — "this edge is on the longest path"
    IGNORED  = "ignored"   # faded — "no improvement / target already settled"
    ACTIVE   = "active"    # the edge being examined RIGHT NOW


def edge_key(source: str, target: str) -> str:
    return f"{source}->{target}"


def validate_weight(weight: Any) -> float:
    """Coerce to float; reject anything that is not a finite number > 0."""
    if isinstance(weight, bool):
        raise InvalidInput(f"Edge weight must be a number, got {weight!r}")
    if isinstance(weight, str):
        try:
            weight = float(weight.strip())
        except ValueError:
            raise InvalidInput(f"Edge weight must be a number, got {weight!r}") from None
    if not isinstance(weight, Real):
        raise InvalidInput(f"Edge weight must be a number, got {weight!r}")
    try:
        value = float(weight)
    except OverflowError:
        raise InvalidInput(f"Edge weight must be finite, got {weight!r}") from None
    if math.isnan(value) or math.isinf(value):
        raise InvalidInput(f"Edge weight must be finite, got {weight!r}")
    if value <= 0:
        raise InvalidInput(f"Edge weight must be positive, got {weight!r}")
    return value


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Positive numeric weight.
        state    : EdgeState for static rendering.
    """

    __slots__ = ("source", "target", "weight", "state")

    def __init__(self, source: str, target: str, weight: Any = 1.0):
        self.source: str       = source
        self.target: str       = target
        self.weight: float     = validate_weight(weight)
        self.state:  EdgeState = EdgeState.DEFAULT

    @property
    def id(self) -> str:
        return edge_key(self.source, self.target)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def reset_state(self) -> None:
        self.state = EdgeState.DEFAULT

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight}, state={self.state.value})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and self.source == other.source
            and self.target == other.target
            and self.weight == other.weight
        )

    def __hash__(self) -> int:
        return hash(self.id)
