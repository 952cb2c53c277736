"""End-to-end tests of the Flask routes through the test client."""
from __future__ import annotations

import pytest

from graph import DEFAULT_ADJACENCY


def _post(client, url: str, body: dict | None = None):
    return client.post(url, json=body or {})


@pytest.fixture
def primed(client):
    """A client whose session already holds the sample graph and A/G selection."""
    resp = client.get("/api/graph")
    assert resp.status_code == 200
    return client


class TestIndexAndGraph:
    def test_index_renders(self, client) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        body = resp.get_data(as_text=True)
        assert "<svg" in body
        assert 'id="btn-compute"' in body

    def test_graph_defaults_to_sample(self, client) -> None:
        data = client.get("/api/graph").get_json()
        assert data["source"] == "A"
        assert data["target"] == "G"
        assert data["adjacency"] == DEFAULT_ADJACENCY
        assert len(data["graph"]["nodes"]) == 7

    def test_export_then_import(self, primed) -> None:
        text = primed.get("/api/graph/export").get_json()["text"]
        assert text.splitlines()[0] == "A: B(2) C(1) D(4)"

        data = _post(primed, "/api/graph/import", {"text": "X: Y(3)\nY:"}).get_json()
        assert data["adjacency"] == {"X": {"Y": 3}, "Y": {}}
        assert (data["source"], data["target"]) == ("X", "Y")

    def test_import_rejects_bad_text(self, primed) -> None:
        resp = _post(primed, "/api/graph/import", {"text": "A: B(0)"})
        assert resp.status_code == 400
        assert "line 1" in resp.get_json()["error"]

    def test_reset(self, primed) -> None:
        primed.delete("/api/nodes/C")
        data = _post(primed, "/api/graph/reset").get_json()
        assert data["adjacency"] == DEFAULT_ADJACENCY
        assert (data["source"], data["target"]) == ("A", "G")


class TestEditing:
    def test_add_node(self, primed) -> None:
        resp = _post(primed, "/api/nodes", {"id": "H", "x": 10, "y": 20})
        assert resp.status_code == 201
        assert resp.get_json()["adjacency"]["H"] == {}

    def test_duplicate_node(self, primed) -> None:
        resp = _post(primed, "/api/nodes", {"id": "A"})
        assert resp.status_code == 400

    @pytest.mark.parametrize("node_id", ["New York", "a:b", "f(x)", "#1"])
    def test_id_that_would_break_export(self, primed, node_id) -> None:
        resp = _post(primed, "/api/nodes", {"id": node_id})
        assert resp.status_code == 400
        assert node_id not in primed.get("/api/graph").get_json()["adjacency"]

    def test_rename_carries_selection(self, primed) -> None:
        data = primed.put("/api/nodes/A", json={"id": "S"}).get_json()
        assert data["source"] == "S"
        assert data["adjacency"]["S"] == {"B": 2, "C": 1, "D": 4}

    def test_move_node(self, primed) -> None:
        data = primed.put("/api/nodes/B", json={"x": 11, "y": 12}).get_json()
        node = next(n for n in data["graph"]["nodes"] if n["id"] == "B")
        assert (node["x"], node["y"]) == (11, 12)

    @pytest.mark.parametrize("coords", [
        {"x": "inf"},
        {"y": "nan"},
        {"x": "-Infinity", "y": 3},
        {"x": 10 ** 400},
        {"x": "left"},
    ])
    def test_non_finite_coordinates_rejected(self, primed, coords) -> None:
        resp = primed.put("/api/nodes/A", json=coords)
        assert resp.status_code == 400
        data = primed.get("/api/graph").get_json()
        node = next(n for n in data["graph"]["nodes"] if n["id"] == "A")
        assert (node["x"], node["y"]) == (150, 280)

    def test_add_node_with_infinite_position(self, primed) -> None:
        resp = _post(primed, "/api/nodes", {"id": "H", "x": "inf"})
        assert resp.status_code == 400
        assert "H" not in primed.get("/api/graph").get_json()["adjacency"]

    def test_delete_target_falls_back(self, primed) -> None:
        data = primed.delete("/api/nodes/G").get_json()
        assert "G" not in data["adjacency"]
        assert data["target"] == "F"
        assert "G" not in data["adjacency"]["F"]

    def test_delete_unknown_node(self, primed) -> None:
        assert primed.delete("/api/nodes/Q").status_code == 400

    def test_add_edge_overwrites(self, primed) -> None:
        resp = _post(primed, "/api/edges", {"source": "A", "target": "B", "weight": 9})
        assert resp.status_code == 201
        assert resp.get_json()["adjacency"]["A"]["B"] == 9

    @pytest.mark.parametrize("weight", [0, -1, "abc", None, 10 ** 400])
    def test_bad_weight(self, primed, weight) -> None:
        resp = _post(primed, "/api/edges", {"source": "A", "target": "G", "weight": weight})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_edit_edge_endpoints(self, primed) -> None:
        data = primed.put("/api/edges/A/B", json={"target": "G", "weight": 3}).get_json()
        assert "B" not in data["adjacency"]["A"]
        assert data["adjacency"]["A"]["G"] == 3

    def test_delete_edge(self, primed) -> None:
        data = primed.delete("/api/edges/E/F").get_json()
        assert "F" not in data["adjacency"]["E"]
        assert primed.delete("/api/edges/E/F").status_code == 400


class TestCompute:
    def test_sample_answer(self, primed) -> None:
        data = _post(primed, "/api/compute").get_json()
        assert data["path"] == ["A", "D", "C", "F", "G"]
        assert data["max_distance"] == 14
        assert data["distances"]["G"] == 14
        assert data["svg"].count('class="edge chosen animated"') == 4

    def test_without_destination(self, primed) -> None:
        data = _post(primed, "/api/compute", {"destination": ""}).get_json()
        assert data["path"] is None
        assert data["max_distance"] is None
        assert data["distances"]["F"] == 12

    def test_exact_solver(self, primed) -> None:
        data = _post(primed, "/api/compute", {"algo_key": "dag_longest_path"}).get_json()
        assert data["max_distance"] == 20
        assert data["path"] == ["A", "B", "D", "C", "E", "F", "G"]

    def test_unreachable_node_is_null(self, primed) -> None:
        _post(primed, "/api/nodes", {"id": "Z"})
        data = _post(primed, "/api/compute", {"destination": "Z"}).get_json()
        assert data["path"] is None
        assert data["distances"]["Z"] is None
        assert "No path from" in data["result"]

    def test_unknown_source(self, primed) -> None:
        resp = _post(primed, "/api/compute", {"source": "Q"})
        assert resp.status_code == 400
        assert "Source node 'Q'" in resp.get_json()["error"]

    def test_unknown_algorithm(self, primed) -> None:
        assert _post(primed, "/api/compute", {"algo_key": "bogus"}).status_code == 400

    def test_cycle_refused_by_exact_solver(self, primed) -> None:
        _post(primed, "/api/edges", {"source": "G", "target": "A", "weight": 1})
        resp = _post(primed, "/api/compute", {"algo_key": "dag_longest_path"})
        assert resp.status_code == 422
        assert "A" in resp.get_json()["cycle"]

    def test_greedy_survives_cycle(self, primed) -> None:
        _post(primed, "/api/edges", {"source": "G", "target": "A", "weight": 1})
        resp = _post(primed, "/api/compute")
        assert resp.status_code == 200
        assert resp.get_json()["max_distance"] == 14

    def test_edit_clears_result(self, primed) -> None:
        _post(primed, "/api/compute")
        data = _post(primed, "/api/nodes", {"id": "H"}).get_json()
        assert "animated" not in data["svg"]


class TestPlayback:
    def test_run_and_navigate(self, primed) -> None:
        data = _post(primed, "/api/run").get_json()
        assert data["current_step"] == 0
        assert data["total_steps"] == data["metrics"]["total_steps"]
        assert data["metrics"]["edges_relaxed"] == 8

        data = _post(primed, "/api/step/next").get_json()
        assert data["current_step"] == 1
        assert data["moved"]

        data = _post(primed, "/api/step/prev").get_json()
        assert data["current_step"] == 0

        data = _post(primed, "/api/step/goto", {"index": -1}).get_json()
        assert data["finished"]
        assert data["path"] == ["A", "D", "C", "F", "G"]

        data = _post(primed, "/api/step/next").get_json()
        assert not data["moved"]

    def test_goto_validation(self, primed) -> None:
        _post(primed, "/api/run")
        assert _post(primed, "/api/step/goto", {"index": 999}).status_code == 400
        assert _post(primed, "/api/step/goto", {"index": "3"}).status_code == 400
        assert _post(primed, "/api/step/goto", {"index": True}).status_code == 400
        assert _post(primed, "/api/step/goto", {"index": 2}).get_json()["current_step"] == 2

    def test_play_toggles(self, primed) -> None:
        _post(primed, "/api/run")
        data = _post(primed, "/api/step/play").get_json()
        assert data["is_playing"]
        assert data["interval"] == pytest.approx(0.4)
        assert not _post(primed, "/api/step/play").get_json()["is_playing"]

    def test_step_without_run(self, primed) -> None:
        assert _post(primed, "/api/step/next").status_code == 400

    def test_edit_discards_run(self, primed, app) -> None:
        _post(primed, "/api/run")
        assert len(app.extensions["run_cache"]) == 1
        _post(primed, "/api/edges", {"source": "A", "target": "G", "weight": 1})
        assert len(app.extensions["run_cache"]) == 0
        assert _post(primed, "/api/step/next").status_code == 400

    def test_exact_run_on_cycle(self, primed) -> None:
        _post(primed, "/api/edges", {"source": "G", "target": "A", "weight": 1})
        _post(primed, "/api/config/algo", {"algo_key": "dag_longest_path"})
        data = _post(primed, "/api/run").get_json()
        assert data["metrics"]["cycle"]
        assert data["finished"]


class TestCompareAndConfig:
    def test_compare(self, primed) -> None:
        data = _post(primed, "/api/compare").get_json()
        assert data["winner_path"] == "Topological DP (DAG)"
        assert data["agree"] is False
        assert data["left"]["path_weight"] == 14
        assert data["right"]["path_weight"] == 20
        assert "comparison-table" in data["comparison"]

    def test_select_algorithm(self, primed) -> None:
        data = _post(primed, "/api/config/algo", {"algo_key": "dag_longest_path"}).get_json()
        assert "DagLongestPath" in data["pseudocode"]
        assert _post(primed, "/api/config/algo", {"algo_key": "nope"}).status_code == 400

    def test_select_endpoints(self, primed) -> None:
        data = _post(primed, "/api/config/source_target", {"source": "B", "target": ""}).get_json()
        assert data["source"] == "B"
        assert data["target"] is None
        resp = _post(primed, "/api/config/source_target", {"target": "Q"})
        assert resp.status_code == 400

    def test_speed(self, primed) -> None:
        assert _post(primed, "/api/config/speed", {"speed": "fast"}).get_json()["interval"] == 0.15
        assert _post(primed, "/api/config/speed", {"speed": "warp"}).status_code == 400

    def test_learning_mode(self, primed) -> None:
        data = _post(primed, "/api/config/learning_mode", {"enabled": False}).get_json()
        assert data["learning_mode"] is False
        assert "disabled" in data["explanation"]

    def test_non_object_body(self, primed) -> None:
        resp = primed.post("/api/nodes", json=["A"])
        assert resp.status_code == 400
