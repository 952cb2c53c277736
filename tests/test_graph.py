"""Tests for the editable graph model: node/edge CRUD, conversions, import/export."""
from __future__ import annotations

import pytest

from graph import (
    DEFAULT_ADJACENCY,
    DuplicateNode,
    Edge,
    Graph,
    InvalidInput,
    Node,
    NodeState,
    UnknownEdge,
    UnknownNode,
    validate_weight,
)


class TestDefaultGraph:
    def test_matches_sample_adjacency(self, sample_graph: Graph) -> None:
        assert sample_graph.to_adjacency() == DEFAULT_ADJACENCY
        assert sample_graph.node_ids() == ["A", "B", "C", "D", "E", "F", "G"]
        assert sample_graph.edge_count() == 13

    def test_fixed_positions(self, sample_graph: Graph) -> None:
        a = sample_graph.get_node("A")
        assert (a.x, a.y) == (150.0, 280.0)

    def test_to_adjacency_returns_fresh_dicts(self, sample_graph: Graph) -> None:
        snapshot = sample_graph.to_adjacency()
        sample_graph.set_edge("G", "A", 9)
        assert snapshot["G"] == {}


class TestNodes:
    def test_create_and_duplicate(self) -> None:
        g = Graph()
        node = g.create_node("  X ", 10, 20)
        assert node.id == "X"
        assert "X" in g
        with pytest.raises(DuplicateNode):
            g.create_node("X")

    @pytest.mark.parametrize("bad", [
        "", "   ", None, 3, "a/b", "a->b",
        "New York", "a\tb", "a:b", "a→b", "a,b", "f(x)", "x)", "#tag",
    ])
    def test_invalid_ids(self, bad) -> None:
        with pytest.raises(InvalidInput):
            Graph().create_node(bad)

    def test_move(self, sample_graph: Graph) -> None:
        sample_graph.move_node("A", 1, 2)
        assert (sample_graph.get_node("A").x, sample_graph.get_node("A").y) == (1.0, 2.0)
        assert sample_graph.to_adjacency() == DEFAULT_ADJACENCY

    def test_rename_preserves_weights_and_topology(self, sample_graph: Graph) -> None:
        sample_graph.rename_node("C", "Z")
        adjacency = sample_graph.to_adjacency()
        assert adjacency["Z"] == {"E": 4, "F": 5}
        assert adjacency["A"] == {"B": 2, "Z": 1, "D": 4}
        assert adjacency["B"]["Z"] == 2
        assert adjacency["D"]["Z"] == 3
        assert "C" not in adjacency
        # display order kept
        assert sample_graph.node_ids() == ["A", "B", "Z", "D", "E", "F", "G"]
        assert sample_graph.get_edge_between("A", "Z").id == "A->Z"

    def test_rename_errors(self, sample_graph: Graph) -> None:
        with pytest.raises(UnknownNode):
            sample_graph.rename_node("Q", "R")
        with pytest.raises(DuplicateNode):
            sample_graph.rename_node("A", "B")

    def test_rename_to_same_id_is_noop(self, sample_graph: Graph) -> None:
        sample_graph.rename_node("A", "A")
        assert sample_graph.to_adjacency() == DEFAULT_ADJACENCY

    def test_remove_drops_incident_edges(self, sample_graph: Graph) -> None:
        sample_graph.remove_node("D")
        adjacency = sample_graph.to_adjacency()
        assert "D" not in adjacency
        assert "D" not in adjacency["A"]
        assert "D" not in adjacency["B"]
        assert sample_graph.edge_count() == 13 - 4

    def test_remove_unknown(self, sample_graph: Graph) -> None:
        with pytest.raises(UnknownNode):
            sample_graph.remove_node("Q")

    def test_node_roundtrip_dict(self) -> None:
        node = Node.from_dict({"id": "A", "x": 5, "y": 6})
        assert node.to_dict() == {"id": "A", "x": 5.0, "y": 6.0}
        assert node.label == "A"


class TestEdges:
    def test_set_edge_overwrites(self, sample_graph: Graph) -> None:
        sample_graph.set_edge("A", "B", 10)
        assert sample_graph.to_adjacency()["A"]["B"] == 10
        assert sample_graph.edge_count() == 13

    def test_set_edge_unknown_endpoint(self, sample_graph: Graph) -> None:
        with pytest.raises(UnknownNode):
            sample_graph.set_edge("A", "Q", 1)

    @pytest.mark.parametrize("bad", [0, -1, "abc", float("nan"), float("inf"), True, None])
    def test_rejected_weights_leave_graph_untouched(self, sample_graph: Graph, bad) -> None:
        with pytest.raises(InvalidInput):
            sample_graph.set_edge("A", "B", bad)
        assert sample_graph.to_adjacency() == DEFAULT_ADJACENCY

    def test_validate_weight_rejects_huge_integers(self) -> None:
        with pytest.raises(InvalidInput, match="finite"):
            validate_weight(10 ** 400)

    def test_validate_weight_accepts_numeric_strings(self) -> None:
        assert validate_weight(" 2.5 ") == 2.5
        assert validate_weight(3) == 3.0

    def test_update_weight_only(self, sample_graph: Graph) -> None:
        edge = sample_graph.update_edge("A", "B", "A", "B", 7)
        assert edge.weight == 7
        assert sample_graph.edge_count() == 13

    def test_update_endpoints(self, sample_graph: Graph) -> None:
        sample_graph.update_edge("A", "B", "A", "G", 7)
        adjacency = sample_graph.to_adjacency()
        assert "B" not in adjacency["A"]
        assert adjacency["A"]["G"] == 7

    def test_update_rejects_before_mutating(self, sample_graph: Graph) -> None:
        with pytest.raises(InvalidInput):
            sample_graph.update_edge("A", "B", "A", "G", -3)
        assert sample_graph.to_adjacency() == DEFAULT_ADJACENCY

    def test_update_unknown_edge(self, sample_graph: Graph) -> None:
        with pytest.raises(UnknownEdge):
            sample_graph.update_edge("G", "A", "G", "B", 1)

    def test_remove_edge(self, sample_graph: Graph) -> None:
        sample_graph.remove_edge("E", "F")
        assert sample_graph.get_edge_between("E", "F") is None
        with pytest.raises(UnknownEdge):
            sample_graph.remove_edge("E", "F")

    def test_neighbours_and_path_edges(self, sample_graph: Graph) -> None:
        assert [t for t, _ in sample_graph.neighbours("F")] == ["G"]
        edges = sample_graph.path_edges(["A", "D", "C", "F", "G"])
        assert [e.id for e in edges] == ["A->D", "D->C", "C->F", "F->G"]
        assert sample_graph.path_edges(None) == []

    def test_edge_equality(self) -> None:
        assert Edge("A", "B", 2) == Edge("A", "B", 2.0)
        assert Edge("A", "B", 2) != Edge("A", "B", 3)


class TestConversions:
    def test_from_adjacency_adds_target_only_vertices(self) -> None:
        g = Graph.from_adjacency({"A": {"B": 1}})
        assert g.node_ids() == ["A", "B"]
        assert g.to_adjacency() == {"A": {"B": 1}, "B": {}}

    def test_dict_roundtrip(self, sample_graph: Graph) -> None:
        restored = Graph.from_dict(sample_graph.to_dict())
        assert restored.to_adjacency() == sample_graph.to_adjacency()
        assert restored.get_node("G").x == 700.0

    def test_mark_endpoints(self, sample_graph: Graph) -> None:
        sample_graph.mark_endpoints("A", "G")
        assert sample_graph.get_node("A").state is NodeState.SOURCE
        assert sample_graph.get_node("G").state is NodeState.DESTINATION
        assert sample_graph.get_node("C").state is NodeState.DEFAULT


class TestAdjacencyListText:
    def test_export(self, sample_graph: Graph) -> None:
        lines = sample_graph.to_adjacency_list().splitlines()
        assert lines[0] == "A: B(2) C(1) D(4)"
        assert lines[-1] == "G:"

    def test_export_then_import(self, sample_graph: Graph) -> None:
        restored = Graph.from_adjacency_list(sample_graph.to_adjacency_list())
        assert restored.to_adjacency() == DEFAULT_ADJACENCY

    def test_import_formats(self) -> None:
        text = """
        # comment
        A: B(3) C(7)
        B -> C(2.5), D
        E
        """
        g = Graph.from_adjacency_list(text)
        assert g.to_adjacency() == {
            "A": {"B": 3, "C": 7},
            "B": {"C": 2.5, "D": 1},
            "C": {},
            "D": {},
            "E": {},
        }

    def test_unusual_ids_survive_export_and_import(self) -> None:
        adjacency = {
            "x&y": {"<b>": 2.5, "Zürich": 1},
            "<b>": {"a-b": 3},
            "a-b": {"a.b": 4, "1": 0.5},
            "a.b": {},
            "1": {"x&y": 7},
            "Zürich": {},
        }
        text = Graph.from_adjacency(adjacency).to_adjacency_list()
        assert Graph.from_adjacency_list(text).to_adjacency() == adjacency

    def test_import_rejects_spaced_ids(self) -> None:
        with pytest.raises(InvalidInput, match="line 2"):
            Graph.from_adjacency_list("A: B(1)\nNew York: A(2)")

    def test_last_duplicate_pair_wins(self) -> None:
        g = Graph.from_adjacency_list("A: B(1) B(4)")
        assert g.to_adjacency()["A"]["B"] == 4

    def test_bad_weight_reports_line(self) -> None:
        with pytest.raises(InvalidInput, match="line 2"):
            Graph.from_adjacency_list("A: B(1)\nB: C(-2)")
