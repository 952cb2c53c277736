"""Tests for the exact longest path on acyclic graphs."""
from __future__ import annotations

import pytest

from algorithms import compute, topological_order
from algorithms.dag_longest_path import dag_longest_path, reachable_from, solve
from graph import CyclicGraphError, Graph, InvalidInput

NEG_INF = float("-inf")


class TestTopologicalOrder:
    def test_sample_graph(self, sample_adjacency: dict) -> None:
        assert topological_order(sample_adjacency, "A") == ["A", "B", "D", "C", "E", "F", "G"]

    def test_only_reachable_nodes(self) -> None:
        adjacency = {"A": {"B": 1}, "B": {}, "X": {"A": 1}}
        assert topological_order(adjacency, "A") == ["A", "B"]

    def test_ties_go_to_smallest_id(self) -> None:
        adjacency = {"S": {"c": 1, "a": 1, "b": 1}, "a": {}, "b": {}, "c": {}}
        assert topological_order(adjacency, "S") == ["S", "a", "b", "c"]

    def test_cycle_raises(self, cyclic_adjacency: dict) -> None:
        with pytest.raises(CyclicGraphError) as info:
            topological_order(cyclic_adjacency, "A")
        assert {"A", "B"} <= set(info.value.remaining)

    def test_unreachable_cycle_is_ignored(self) -> None:
        adjacency = {"S": {"T": 1}, "T": {}, "X": {"Y": 1}, "Y": {"X": 1}}
        assert topological_order(adjacency, "S") == ["S", "T"]

    def test_unknown_source(self, sample_adjacency: dict) -> None:
        with pytest.raises(InvalidInput):
            topological_order(sample_adjacency, "Z")

    def test_reachable_from(self, sample_adjacency: dict) -> None:
        assert reachable_from(sample_adjacency, "E") == {"E", "F", "G"}


class TestSolve:
    def test_sample_graph_exact_answer(self, sample_adjacency: dict) -> None:
        result = solve(sample_adjacency, "A", "G")
        assert result.path == ["A", "B", "D", "C", "E", "F", "G"]
        assert result.distances["G"] == 20
        assert result.path_weight(sample_adjacency) == pytest.approx(20.0)

    def test_beats_greedy_on_sample(self, sample_adjacency: dict) -> None:
        greedy = compute(sample_adjacency, "A", "G")
        exact = solve(sample_adjacency, "A", "G")
        assert greedy.distances["G"] < exact.distances["G"]

    def test_tie_graph(self, tie_adjacency: dict) -> None:
        result = solve(tie_adjacency, "S", "T")
        assert result.path == ["S", "B", "T"]
        assert result.distances["T"] == 6

    def test_unreachable_nodes_stay_negative_infinity(self) -> None:
        adjacency = {"A": {"B": 1}, "B": {}, "C": {"B": 5}}
        result = solve(adjacency, "A", "C")
        assert result.distances == {"A": 0, "B": 1, "C": NEG_INF}
        assert result.path is None

    def test_no_destination(self, sample_adjacency: dict) -> None:
        result = solve(sample_adjacency, "A")
        assert result.path is None
        assert result.distances["F"] == 18

    def test_cycle_raises(self, cyclic_adjacency: dict) -> None:
        with pytest.raises(CyclicGraphError):
            solve(cyclic_adjacency, "A", "C")


class TestGenerator:
    def test_final_step_matches_solve(self, sample_graph: Graph) -> None:
        steps = list(dag_longest_path(sample_graph, "A", "G"))
        final = steps[-1]
        assert final.is_final
        assert final.path == ["A", "B", "D", "C", "E", "F", "G"]
        assert final.distances == solve(sample_graph.to_adjacency(), "A", "G").distances
        assert final.overlay["order"] == ["A", "B", "D", "C", "E", "F", "G"]

    def test_cycle_yields_single_final_step(self, cyclic_adjacency: dict) -> None:
        steps = list(dag_longest_path(Graph.from_adjacency(cyclic_adjacency), "A", "C"))
        assert len(steps) == 1
        assert steps[0].is_final
        assert "A" in steps[0].overlay["cycle"]

    def test_one_step_per_reachable_edge(self, sample_graph: Graph) -> None:
        steps = list(dag_longest_path(sample_graph, "A"))
        # ordering step + one per edge + final
        assert len(steps) == 1 + sample_graph.edge_count() + 1
