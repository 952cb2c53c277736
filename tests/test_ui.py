"""Tests for the SVG renderer and the HTML panels."""
from __future__ import annotations

from algorithms import compute, list_algorithms
from algorithms.step import NEG_INF, Step
from engine import Recorder, compare
from graph import Graph
from ui import (
    CanvasConfig,
    algorithm_selector,
    analytics_panel,
    comparison_panel,
    edge_table,
    format_distance,
    node_table,
    pseudocode_viewer,
    render_canvas,
    result_card,
    source_target_picker,
)


class TestCanvas:
    def test_static_graph(self, sample_graph: Graph) -> None:
        svg = render_canvas(sample_graph)
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert svg.count("<polygon") == sample_graph.edge_count()
        assert 'data-id="A-&gt;D"' in svg
        assert "animated" not in svg

    def test_path_edges_are_animated(self, sample_graph: Graph) -> None:
        svg = render_canvas(sample_graph, path=["A", "D", "C", "F", "G"])
        assert svg.count('class="edge chosen animated"') == 4

    def test_config_sets_size(self, sample_graph: Graph) -> None:
        svg = render_canvas(sample_graph, config=CanvasConfig(640, 360))
        assert 'width="640" height="360"' in svg

    def test_step_shows_distances_and_overlays(self, sample_graph: Graph) -> None:
        step = Step(
            distances={"A": 0.0, "B": 2.0, "G": NEG_INF},
            overlay={"unsettled": ["B", "G"]},
            current_node="A",
        )
        svg = render_canvas(sample_graph, step)
        assert "-∞" in svg
        assert "Unsettled" in svg
        assert 'class="distances-panel"' in svg

    def test_step_path_overrides_path_argument(self, sample_graph: Graph) -> None:
        step = Step(path=["A", "B"])
        svg = render_canvas(sample_graph, step, path=["A", "D", "C", "F", "G"])
        assert svg.count('class="edge chosen animated"') == 1

    def test_ids_are_escaped(self) -> None:
        graph = Graph.from_adjacency({"<b>": {"x&y": 1}})
        svg = render_canvas(graph)
        assert "<b>" not in svg
        assert "&lt;b&gt;" in svg
        assert "x&amp;y" in svg


class TestFormatDistance:
    def test_values(self) -> None:
        assert format_distance(None) == "-∞"
        assert format_distance(NEG_INF) == "-∞"
        assert format_distance(14.0) == "14"
        assert format_distance(2.5) == "2.5"


class TestPanels:
    def test_result_card_with_path(self, sample_adjacency: dict) -> None:
        result = compute(sample_adjacency, "A", "G")
        html = result_card(result, "A", "G", "Max-Distance Dijkstra")
        assert "A → D → C → F → G" in html
        assert "Maximum distance: <strong>14</strong>" in html

    def test_result_card_unreachable(self) -> None:
        result = compute({"A": {}, "B": {}}, "A", "B")
        html = result_card(result, "A", "B")
        assert "No path from <strong>A</strong> to <strong>B</strong>" in html

    def test_result_card_placeholder(self) -> None:
        assert "Press <strong>Compute</strong>" in result_card()

    def test_picker_has_no_destination_option(self, sample_graph: Graph) -> None:
        html = source_target_picker(sample_graph.node_ids(), "A", None)
        assert 'id="source-selector"' in html
        assert '<option value="">' in html
        assert '<option value="A" selected>' in html

    def test_tables(self, sample_graph: Graph) -> None:
        nodes = node_table(sample_graph, "A", "G")
        assert "Nodes (7)" in nodes
        assert 'badge source' in nodes
        edges = edge_table(sample_graph, ["A->D"])
        assert "Edges (13)" in edges
        assert edges.count('class="on-path"') == 1
        assert "No nodes yet." in node_table(Graph())

    def test_algorithm_selector(self) -> None:
        html = algorithm_selector(list_algorithms(), "dag_longest_path")
        assert 'value="dag_longest_path" selected' in html
        assert 'id="btn-compute"' in html

    def test_pseudocode_highlight(self) -> None:
        html = pseudocode_viewer(["a", "b < c"], current_line=1)
        assert 'class="code-line highlight" data-line="1"' in html
        assert "b &lt; c" in html

    def test_analytics_and_comparison(self, sample_graph: Graph) -> None:
        left, right = Recorder(), Recorder()
        left.start("longest_path", "A", "G", sample_graph)
        left.run_to_completion()
        right.start("dag_longest_path", "A", "G", sample_graph)
        right.run_to_completion()

        assert "Edges Relaxed" in analytics_panel(left.metrics)
        assert "placeholder" in analytics_panel()
        html = comparison_panel(compare(left, right))
        assert "disagree" in html
        assert "Topological DP (DAG)" in html
