from enum import Enum


# ---------------------------------------------------------------------------
# Node State Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class NodeState(Enum):
    DEFAULT     = "default"       # light card — untouched by the algorithm
    FRONTIER    = "frontier"      # has a finite distance, not yet settled
    SETTLED     = "settled"       # distance fixed — removed from the unsettled set
    CURRENT     = "current"       # the node selected RIGHT NOW
    PATH        = "path"          # on the reconstructed longest path
    SOURCE      = "source"
    DESTINATION = "destination"


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    A vertex as the editor sees it: identity plus canvas position.

    Attributes:
        id     : Unique identifier, also the label shown on the canvas.
                 Renaming goes through Graph.rename_node so edges follow.
        x, y   : Canvas coordinates in pixels.
        state  : NodeState for static rendering (steps override it).
    """

    __slots__ = ("id", "x", "y", "state")

    def __init__(self, node_id: str, x: float = 100.0, y: float = 100.0):
        self.id:    str       = node_id
        self.x:     float     = float(x)
        self.y:     float     = float(y)
        self.state: NodeState = NodeState.DEFAULT

    @property
    def label(self) -> str:
        return self.id

    def move_to(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def reset_state(self) -> None:
        self.state = NodeState.DEFAULT

    # ------------------------------------------------------------------
    # Serialisation  (session / export)
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=data["id"], x=data.get("x", 100.0), y=data.get("y", 100.0))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, state={self.state.value}, pos=({self.x:.0f},{self.y:.0f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

