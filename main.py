"""
main.py — Longest-Path Graph Editor Flask App
==============================================
The web server behind the editor.

Routes:
  GET    /                          – main UI
  GET    /api/graph                 – graph JSON + adjacency + rendered panels
  POST   /api/graph/reset           – back to the sample graph
  POST   /api/graph/import          – replace the graph from adjacency-list text
  GET    /api/graph/export          – adjacency-list text
  POST   /api/nodes                 – add node
  PUT    /api/nodes/<id>            – move and/or rename node
  DELETE /api/nodes/<id>            – delete node and its edges
  POST   /api/edges                 – add (or overwrite) edge
  PUT    /api/edges/<src>/<tgt>     – edit edge weight and/or endpoints
  DELETE /api/edges/<src>/<tgt>     – delete edge
  POST   /api/compute               – longest path, highlighted on the canvas
  POST   /api/run                   – record a step-by-step run
  POST   /api/step/next|prev|goto   – playback navigation
  POST   /api/step/play             – toggle play/pause
  POST   /api/compare               – greedy vs exact on the same graph
  POST   /api/config/…              – algo, source_target, speed, learning_mode

State management:
  Per-user view state lives in the Flask session:
    • graph           – serialised Graph
    • source / target
    • selected_algo, speed, learning_mode
    • current_step, is_playing, run_id
    • result          – last computed path (for highlighting)
  Recorded runs are kept server-side in a RunCache keyed by run_id; the
  session only carries the id.  Every graph edit drops the run and the
  computed result.
"""

import logging
import math
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template_string, request, session

from settings import DefaultConfig
from graph import CyclicGraphError, Graph, InvalidInput
from algorithms import get_algorithm, list_algorithms, json_distances, NEG_INF
from engine import Recorder, RunCache, SPEED_PRESETS, Stepper, compare
from ui import (
    CanvasConfig,
    render_canvas,
    algorithm_selector,
    source_target_picker,
    playback_controls,
    node_table,
    edge_table,
    node_form,
    edge_form,
    result_card,
    analytics_panel,
    comparison_panel,
    pseudocode_viewer,
    explanation_panel,
    mode_toggle,
    import_export_panel,
    instructions_panel,
)


app = Flask(__name__)
app.config.from_object(DefaultConfig)
app.config.from_prefixed_env()

app.extensions["run_cache"] = RunCache(int(app.config["RUN_CACHE_SIZE"]))


def run_cache() -> RunCache:
    return app.extensions["run_cache"]


# ---------------------------------------------------------------------------
# Error handlers — library errors become JSON
# ---------------------------------------------------------------------------
@app.errorhandler(InvalidInput)
def handle_invalid_input(exc: InvalidInput):
    app.logger.warning("rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(CyclicGraphError)
def handle_cycle(exc: CyclicGraphError):
    app.logger.warning("cycle refused on %s: %s", request.path, exc)
    return jsonify({"error": str(exc), "cycle": list(exc.remaining)}), 422


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_graph() -> Graph:
    """Deserialise graph from session, or start from the sample graph."""
    if "graph" not in session:
        session["graph"] = Graph.default().to_dict()
    return Graph.from_dict(session["graph"])


def save_graph(graph: Graph) -> None:
    """Persist an edited graph; any run or result computed on the old one is stale."""
    session["graph"] = graph.to_dict()
    _invalidate()


def get_state() -> Dict[str, Any]:
    """Return current view state as a dict."""
    return {
        "source":        session.get("source"),
        "target":        session.get("target"),
        "selected_algo": session.get("selected_algo", app.config["DEFAULT_ALGORITHM"]),
        "learning_mode": session.get("learning_mode", True),
        "current_step":  session.get("current_step", 0),
        "is_playing":    session.get("is_playing", False),
        "speed":         session.get("speed", "medium"),
        "run_id":        session.get("run_id"),
        "result":        session.get("result"),
    }


def set_state(**kwargs) -> None:
    for k, v in kwargs.items():
        session[k] = v


def _invalidate() -> None:
    run_cache().discard(session.get("run_id"))
    set_state(run_id=None, current_step=0, is_playing=False, result=None)


def _ensure_endpoints(graph: Graph, state: Dict[str, Any]) -> None:
    """Keep source / target pointing at existing nodes (first / last as fallback)."""
    ids = graph.node_ids()
    source, target = state["source"], state["target"]
    if source not in graph:
        source = ids[0] if ids else None
    if target is not None and target not in graph:
        target = ids[-1] if ids else None
    if "target" not in session and len(ids) >= 2:
        target = ids[-1]
    state["source"], state["target"] = source, target
    set_state(source=source, target=target)


def _canvas_config() -> CanvasConfig:
    return CanvasConfig(app.config["CANVAS_WIDTH"], app.config["CANVAS_HEIGHT"])


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data


def _coord(value, default: float) -> float:
    if value is None:
        return default
    try:
        coord = float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInput(f"Coordinate must be a number, got {value!r}") from None
    if not math.isfinite(coord):
        raise InvalidInput(f"Coordinate must be finite, got {value!r}")
    return coord


def _optional_id(value) -> Optional[str]:
    """'' and null both mean "no destination"."""
    if value is None or value == "":
        return None
    return value


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------
def _graph_payload(graph: Graph, state: Dict[str, Any]) -> Dict[str, Any]:
    """Everything the page re-renders after an edit."""
    _ensure_endpoints(graph, state)
    graph.mark_endpoints(state["source"], state["target"])

    result = state.get("result")
    path = result["path"] if result else None
    return {
        "graph":      graph.to_dict(),
        "adjacency":  graph.to_adjacency(),
        "source":     state["source"],
        "target":     state["target"],
        "svg":        render_canvas(graph, path=path, config=_canvas_config(), show_overlays=False),
        "node_table": node_table(graph, state["source"], state["target"]),
        "edge_table": edge_table(graph, [e.id for e in graph.path_edges(path)]),
        "edge_form":  edge_form(graph.node_ids()),
        "picker":     source_target_picker(graph.node_ids(), state["source"], state["target"]),
        "result":     result_card(),
    }


def _step_payload(graph: Graph, rec: Recorder, stepper: Stepper, state: Dict[str, Any]) -> Dict[str, Any]:
    step = stepper.current_step
    graph.mark_endpoints(rec.metrics.source, rec.metrics.target)
    info = rec.algo_info
    return {
        "svg":          render_canvas(graph, step, config=_canvas_config(), show_overlays=True),
        "pseudocode":   pseudocode_viewer(info.pseudocode, step.pseudocode_line),
        "explanation":  explanation_panel(step.explanation, show=state["learning_mode"]),
        "distances":    json_distances(step.distances),
        "path":         step.path,
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_steps_fetched,
        "finished":     stepper.is_finished,
        "is_playing":   state["is_playing"] and not stepper.is_finished,
    }


def _current_run() -> Recorder:
    rec = run_cache().get(session.get("run_id"))
    if rec is None:
        raise InvalidInput("No recorded run: press Step through first")
    return rec


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    graph = get_graph()
    state = get_state()
    _ensure_endpoints(graph, state)
    graph.mark_endpoints(state["source"], state["target"])

    algo_info = get_algorithm(state["selected_algo"]) or get_algorithm(app.config["DEFAULT_ALGORITHM"])
    path = state["result"]["path"] if state["result"] else None

    html = render_template_string(INDEX_TEMPLATE,
        svg=render_canvas(graph, path=path, config=_canvas_config(), show_overlays=False),
        algo_selector=algorithm_selector(list_algorithms(), algo_info.key),
        picker=source_target_picker(graph.node_ids(), state["source"], state["target"]),
        playback=playback_controls(
            is_playing=state["is_playing"],
            current_step=state["current_step"],
            speed=state["speed"],
        ),
        node_table=node_table(graph, state["source"], state["target"]),
        edge_table=edge_table(graph, [e.id for e in graph.path_edges(path)]),
        node_form=node_form(),
        edge_form=edge_form(graph.node_ids()),
        result=result_card(),
        analytics=analytics_panel(),
        comparison=comparison_panel(),
        pseudocode=pseudocode_viewer(algo_info.pseudocode),
        explanation=explanation_panel(show=state["learning_mode"]),
        mode_toggle=mode_toggle(state["learning_mode"]),
        import_export=import_export_panel(),
        instructions=instructions_panel(),
    )
    return html


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph", methods=["GET"])
def api_graph():
    return jsonify(_graph_payload(get_graph(), get_state()))


@app.route("/api/graph/reset", methods=["POST"])
def api_graph_reset():
    graph = Graph.default()
    save_graph(graph)
    set_state(source="A", target="G")
    app.logger.info("graph reset to the sample graph")
    return jsonify(_graph_payload(graph, get_state()))


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    text = _json_body().get("text", "")
    if not isinstance(text, str):
        raise InvalidInput("Import text must be a string")

    graph = Graph.from_adjacency_list(
        text,
        canvas_w=app.config["CANVAS_WIDTH"],
        canvas_h=app.config["CANVAS_HEIGHT"],
    )
    save_graph(graph)
    ids = graph.node_ids()
    set_state(source=ids[0] if ids else None, target=ids[-1] if len(ids) > 1 else None)
    app.logger.info("imported graph: %d nodes, %d edges", graph.node_count(), graph.edge_count())
    return jsonify(_graph_payload(graph, get_state()))


@app.route("/api/graph/export", methods=["GET"])
def api_graph_export():
    return jsonify({"text": get_graph().to_adjacency_list()})


# ---------------------------------------------------------------------------
# API: Nodes
# ---------------------------------------------------------------------------
@app.route("/api/nodes", methods=["POST"])
def api_node_create():
    data = _json_body()
    graph = get_graph()
    node = graph.create_node(
        data.get("id"),
        _coord(data.get("x"), app.config["CANVAS_WIDTH"] / 2),
        _coord(data.get("y"), app.config["CANVAS_HEIGHT"] / 2),
    )
    save_graph(graph)
    app.logger.info("node added: %s", node.id)
    return jsonify(_graph_payload(graph, get_state())), 201


@app.route("/api/nodes/<node_id>", methods=["PUT"])
def api_node_update(node_id: str):
    data = _json_body()
    graph = get_graph()
    node = graph.require_node(node_id)

    if "x" in data or "y" in data:
        graph.move_node(node_id, _coord(data.get("x"), node.x), _coord(data.get("y"), node.y))

    new_id = data.get("id", node_id)
    if new_id != node_id:
        node = graph.rename_node(node_id, new_id)
        state = get_state()
        # the selection follows the node
        if state["source"] == node_id:
            set_state(source=node.id)
        if state["target"] == node_id:
            set_state(target=node.id)
        app.logger.info("node renamed: %s → %s", node_id, node.id)

    save_graph(graph)
    return jsonify(_graph_payload(graph, get_state()))


@app.route("/api/nodes/<node_id>", methods=["DELETE"])
def api_node_delete(node_id: str):
    graph = get_graph()
    graph.remove_node(node_id)
    save_graph(graph)

    state = get_state()
    ids = graph.node_ids()
    if state["source"] == node_id:
        set_state(source=ids[0] if ids else None)
    if state["target"] == node_id:
        set_state(target=ids[-1] if ids else None)
    app.logger.info("node deleted: %s", node_id)
    return jsonify(_graph_payload(graph, get_state()))


# ---------------------------------------------------------------------------
# API: Edges
# ---------------------------------------------------------------------------
@app.route("/api/edges", methods=["POST"])
def api_edge_create():
    data = _json_body()
    graph = get_graph()
    edge = graph.set_edge(data.get("source"), data.get("target"), data.get("weight"))
    save_graph(graph)
    app.logger.info("edge set: %s = %g", edge.id, edge.weight)
    return jsonify(_graph_payload(graph, get_state())), 201


@app.route("/api/edges/<source>/<target>", methods=["PUT"])
def api_edge_update(source: str, target: str):
    data = _json_body()
    graph = get_graph()
    old = graph.require_edge(source, target)
    edge = graph.update_edge(
        source, target,
        data.get("source", source),
        data.get("target", target),
        data.get("weight", old.weight),
    )
    save_graph(graph)
    app.logger.info("edge updated: %s->%s is now %s = %g", source, target, edge.id, edge.weight)
    return jsonify(_graph_payload(graph, get_state()))


@app.route("/api/edges/<source>/<target>", methods=["DELETE"])
def api_edge_delete(source: str, target: str):
    graph = get_graph()
    graph.remove_edge(source, target)
    save_graph(graph)
    app.logger.info("edge deleted: %s->%s", source, target)
    return jsonify(_graph_payload(graph, get_state()))


# ---------------------------------------------------------------------------
# API: Compute
# ---------------------------------------------------------------------------
@app.route("/api/compute", methods=["POST"])
def api_compute():
    data = _json_body()
    graph = get_graph()
    state = get_state()
    _ensure_endpoints(graph, state)

    source = data.get("source", state["source"])
    target = _optional_id(data.get("destination", data.get("target", state["target"])))
    algo_key = data.get("algo_key", state["selected_algo"])
    info = get_algorithm(algo_key)
    if info is None:
        raise InvalidInput(f"Unknown algorithm: {algo_key}")
    if source is None:
        raise InvalidInput("Add a node and choose a source first")

    adjacency = graph.to_adjacency()
    result = info.solve(adjacency, source, target)
    max_distance = None
    if target is not None and result.distance_to(target) != NEG_INF:
        max_distance = result.distance_to(target)

    set_state(result={"path": result.path, "algo_key": info.key})
    app.logger.info("%s %s → %s: path=%s distance=%s", info.key, source, target, result.path, max_distance)

    graph.mark_endpoints(source, target)
    return jsonify({
        "distances":    json_distances(result.distances),
        "path":         result.path,
        "max_distance": max_distance,
        "algo_key":     info.key,
        "svg":          render_canvas(graph, path=result.path, config=_canvas_config(), show_overlays=False),
        "edge_table":   edge_table(graph, [e.id for e in graph.path_edges(result.path)]),
        "result":       result_card(result, source, target, info.label),
    })


# ---------------------------------------------------------------------------
# API: Run Algorithm (step-by-step)
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    graph = get_graph()
    state = get_state()
    _ensure_endpoints(graph, state)

    if not state["source"]:
        raise InvalidInput("Add a node and choose a source first")

    rec = Recorder()
    rec.start(state["selected_algo"], state["source"], state["target"], graph)
    rec.run_to_completion()

    run_cache().discard(state["run_id"])
    run_id = run_cache().put(rec)
    set_state(run_id=run_id, current_step=0, is_playing=False)
    state = get_state()

    stepper = Stepper.from_steps(rec.steps, 0)
    payload = _step_payload(graph, rec, stepper, state)
    payload["analytics"] = analytics_panel(rec.metrics)
    payload["metrics"] = rec.metrics.to_dict()
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
def _navigate(move) -> Dict[str, Any]:
    rec = _current_run()
    state = get_state()
    stepper = Stepper.from_steps(rec.steps, state["current_step"])
    moved = move(stepper)
    set_state(current_step=stepper.current_idx)
    if stepper.is_finished:
        set_state(is_playing=False)
    payload = _step_payload(get_graph(), rec, stepper, get_state())
    payload["moved"] = bool(moved)
    return payload


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    return jsonify(_navigate(lambda s: s.next_step()))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    return jsonify(_navigate(lambda s: s.prev_step()))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    idx = _json_body().get("index", 0)
    if isinstance(idx, bool) or not isinstance(idx, int):
        raise InvalidInput(f"Step index must be an integer, got {idx!r}")
    if idx == -1:
        return jsonify(_navigate(lambda s: s.jump_to_end() or True))

    total = len(_current_run().steps)
    if not (0 <= idx < total):
        raise InvalidInput(f"Invalid step index {idx} (run has {total} steps)")
    return jsonify(_navigate(lambda s: s.goto_step(idx)))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    rec = _current_run()
    state = get_state()
    stepper = Stepper.from_steps(rec.steps, state["current_step"])
    if state["is_playing"]:
        stepper.play()
    stepper.toggle_play()
    set_state(is_playing=stepper.is_playing)
    return jsonify({
        "is_playing": stepper.is_playing,
        "interval":   SPEED_PRESETS.get(state["speed"], SPEED_PRESETS["medium"]),
    })


# ---------------------------------------------------------------------------
# API: Comparison
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    graph = get_graph()
    state = get_state()
    _ensure_endpoints(graph, state)
    if not state["source"]:
        raise InvalidInput("Add a node and choose a source first")

    left, right = Recorder(), Recorder()
    left.start("longest_path", state["source"], state["target"], graph)
    left.run_to_completion()
    right.start("dag_longest_path", state["source"], state["target"], graph)
    right.run_to_completion()

    comp = compare(left, right)
    app.logger.info(
        "compare %s → %s: %s vs %s (agree=%s)",
        state["source"], state["target"], comp.left.path_weight, comp.right.path_weight, comp.agree,
    )
    return jsonify({"comparison": comparison_panel(comp), **comp.to_dict()})


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    algo_key = _json_body().get("algo_key", app.config["DEFAULT_ALGORITHM"])
    algo_info = get_algorithm(algo_key)
    if algo_info is None:
        raise InvalidInput(f"Unknown algorithm: {algo_key}")
    set_state(selected_algo=algo_key)
    _invalidate()

    return jsonify({
        "algo_selector": algorithm_selector(list_algorithms(), algo_key),
        "pseudocode":    pseudocode_viewer(algo_info.pseudocode),
    })


@app.route("/api/config/source_target", methods=["POST"])
def api_config_source_target():
    data = _json_body()
    graph = get_graph()
    if "source" in data:
        src = graph.require_node(data["source"], "source").id
        set_state(source=src)
    if "target" in data:
        tgt = _optional_id(data["target"])
        if tgt is not None:
            tgt = graph.require_node(tgt, "destination").id
        set_state(target=tgt)
    _invalidate()
    state = get_state()
    return jsonify(_graph_payload(graph, state))


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    speed = _json_body().get("speed", "medium")
    if speed not in SPEED_PRESETS:
        raise InvalidInput(f"Unknown speed preset: {speed}")
    set_state(speed=speed)
    return jsonify({"speed": speed, "interval": SPEED_PRESETS[speed]})


@app.route("/api/config/learning_mode", methods=["POST"])
def api_config_learning_mode():
    enabled = bool(_json_body().get("enabled", True))
    set_state(learning_mode=enabled)
    return jsonify({"learning_mode": enabled, "explanation": explanation_panel(show=enabled)})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Longest-Path Graph Editor</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=JetBrains+Mono:wght@400;500;700&family=DM+Sans:wght@400;500;700&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg: #f0f9ff;
      --bg-panel: #ffffff;
      --border: #cbd5e1;
      --text-primary: #0f172a;
      --text-secondary: #475569;
      --accent: #0369a1;
      --accent-light: #e0f2fe;
      --path: #16a34a;
      --danger: #dc2626;
    }

    body {
      font-family: 'DM Sans', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg);
      color: var(--text-primary);
      display: flex;
      min-height: 100vh;
    }

    /* Sidebar */
    #sidebar {
      width: 340px;
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 16px;
      height: 100vh;
    }

    /* Main area */
    #main { flex: 1; display: flex; flex-direction: column; height: 100vh; overflow-y: auto; }
    #canvas-container { display: flex; justify-content: center; padding: 16px; }
    #canvas-svg svg { border: 1px solid var(--border); border-radius: 12px; }
    #canvas-svg .node { cursor: grab; }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr 1fr;
      gap: 16px;
      padding: 0 16px 16px;
    }

    /* Panels */
    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 12px;
      padding: 16px;
      margin-bottom: 16px;
    }
    .panel h3 {
      font-size: 13px;
      font-weight: 700;
      margin-bottom: 12px;
      color: var(--accent);
      text-transform: uppercase;
      letter-spacing: 0.5px;
    }
    .panel label { display: block; margin-bottom: 8px; font-size: 13px; color: var(--text-secondary); }
    .panel select, .panel input[type=text], .panel input[type=number], textarea {
      width: 100%;
      padding: 6px 8px;
      border: 1px solid var(--border);
      border-radius: 6px;
      font-family: inherit;
    }
    textarea { font-family: 'JetBrains Mono', monospace; font-size: 12px; margin-bottom: 8px; }
    table { width: 100%; border-collapse: collapse; font-size: 13px; }
    th, td { padding: 4px 6px; text-align: left; border-bottom: 1px solid #e2e8f0; }
    td.actions { text-align: right; white-space: nowrap; }
    tr.on-path td { background: #dcfce7; }
    .weight { background: var(--accent-light); border-radius: 999px; padding: 1px 8px; }
    .badge { font-size: 10px; border-radius: 4px; padding: 1px 5px; color: #fff; }
    .badge.source { background: #22c55e; }
    .badge.destination { background: #ef4444; }
    .hint, .placeholder, .muted { color: var(--text-secondary); font-size: 12px; }
    .path { font-weight: 700; color: var(--path); margin-bottom: 6px; }
    .unreachable, .disagree, #error-banner { color: var(--danger); }
    .agree { color: var(--path); }

    /* Buttons */
    .button-row { display: flex; gap: 8px; margin: 8px 0; flex-wrap: wrap; }
    button {
      background: var(--accent);
      color: #fff;
      border: none;
      padding: 7px 12px;
      border-radius: 6px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
      font-family: inherit;
    }
    button.btn-secondary { background: #e2e8f0; color: var(--text-primary); }
    td.actions button { background: transparent; color: var(--text-secondary); padding: 2px 6px; }

    /* Code + explanation */
    .code-block { font-family: 'JetBrains Mono', monospace; font-size: 12px; line-height: 1.6; white-space: pre; }
    .code-line { padding: 1px 8px; border-radius: 4px; }
    .code-line.highlight { background: #fef3c7; border-left: 3px solid #f59e0b; }
    .explanation-text { line-height: 1.7; font-size: 14px; }

    /* Path animation */
    .edge.animated line { stroke-dasharray: 10 6; animation: dash 1s linear infinite; }
    @keyframes dash { to { stroke-dashoffset: -16; } }

    #error-banner { min-height: 20px; padding: 0 16px; font-size: 13px; }
  </style>
</head>
<body>
  <div id="sidebar">
    <h2 style="margin-bottom: 16px;">Longest Path</h2>
    <div id="algo-panel">{{ algo_selector|safe }}</div>
    <div id="picker">{{ picker|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="node-form-wrap">{{ node_form|safe }}</div>
    <div id="edge-form-wrap">{{ edge_form|safe }}</div>
    <div id="import-export">{{ import_export|safe }}</div>
    <div id="mode-toggle">{{ mode_toggle|safe }}</div>
    <div id="instructions-wrap">{{ instructions|safe }}</div>
  </div>

  <div id="main">
    <div id="error-banner"></div>
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div>
        <div id="result">{{ result|safe }}</div>
        <div id="analytics">{{ analytics|safe }}</div>
        <div id="comparison">{{ comparison|safe }}</div>
      </div>
      <div>
        <div id="node-table">{{ node_table|safe }}</div>
        <div id="edge-table">{{ edge_table|safe }}</div>
      </div>
      <div>
        <div class="panel"><h3>Pseudocode</h3><div id="pseudocode">{{ pseudocode|safe }}</div></div>
        <div class="panel"><h3>Step Explanation</h3><div id="explanation">{{ explanation|safe }}</div></div>
      </div>
    </div>
  </div>

  <script>
    const $ = (id) => document.getElementById(id);
    let playTimer = null;

    // API helpers
    async function api(method, url, data) {
      const opts = {method, headers: {'Content-Type': 'application/json'}};
      if (data !== undefined) opts.body = JSON.stringify(data);
      const res = await fetch(url, opts);
      const body = await res.json();
      $('error-banner').textContent = res.ok ? '' : (body.error || 'Request failed');
      return res.ok ? body : null;
    }
    const post = (url, data) => api('POST', url, data || {});

    function applyGraph(data) {
      if (!data) return;
      $('canvas-svg').innerHTML = data.svg;
      $('node-table').innerHTML = data.node_table;
      $('edge-table').innerHTML = data.edge_table;
      $('edge-form-wrap').innerHTML = data.edge_form;
      $('picker').innerHTML = data.picker;
      $('result').innerHTML = data.result;
      stopPlaying();
    }

    function applyStep(data) {
      if (!data) return;
      $('canvas-svg').innerHTML = data.svg;
      $('pseudocode').innerHTML = data.pseudocode;
      $('explanation').innerHTML = data.explanation;
      $('current-step').textContent = data.current_step;
      $('total-steps').textContent = data.total_steps;
      if (data.analytics) $('analytics').innerHTML = data.analytics;
      if (data.finished) stopPlaying();
    }

    function stopPlaying() {
      if (playTimer) { clearInterval(playTimer); playTimer = null; }
    }

    // Compute / run / compare
    document.addEventListener('click', async (e) => {
      const t = e.target.closest('button');
      if (!t) return;
      if (t.id === 'btn-compute') {
        const data = await post('/api/compute');
        if (data) {
          $('canvas-svg').innerHTML = data.svg;
          $('edge-table').innerHTML = data.edge_table;
          $('result').innerHTML = data.result;
        }
      } else if (t.id === 'btn-run') {
        applyStep(await post('/api/run'));
      } else if (t.id === 'btn-compare') {
        const data = await post('/api/compare');
        if (data) $('comparison').innerHTML = data.comparison;
      } else if (t.id === 'btn-next') {
        applyStep(await post('/api/step/next'));
      } else if (t.id === 'btn-prev') {
        applyStep(await post('/api/step/prev'));
      } else if (t.id === 'btn-rewind') {
        applyStep(await post('/api/step/goto', {index: 0}));
      } else if (t.id === 'btn-end') {
        applyStep(await post('/api/step/goto', {index: -1}));
      } else if (t.id === 'btn-play') {
        const data = await post('/api/step/play');
        stopPlaying();
        if (data && data.is_playing) {
          playTimer = setInterval(async () => applyStep(await post('/api/step/next')), data.interval * 1000);
        }
      } else if (t.classList.contains('btn-delete-node')) {
        applyGraph(await api('DELETE', '/api/nodes/' + encodeURIComponent(t.dataset.id)));
      } else if (t.classList.contains('btn-edit-node')) {
        const newId = prompt('Rename node', t.dataset.id);
        if (newId !== null && newId !== t.dataset.id) {
          applyGraph(await api('PUT', '/api/nodes/' + encodeURIComponent(t.dataset.id), {id: newId}));
        }
      } else if (t.classList.contains('btn-delete-edge')) {
        applyGraph(await api('DELETE', '/api/edges/' + encodeURIComponent(t.dataset.source) + '/' + encodeURIComponent(t.dataset.target)));
      } else if (t.classList.contains('btn-edit-edge')) {
        const w = prompt('Weight of ' + t.dataset.source + ' → ' + t.dataset.target, t.dataset.weight);
        if (w !== null) {
          applyGraph(await api('PUT', '/api/edges/' + encodeURIComponent(t.dataset.source) + '/' + encodeURIComponent(t.dataset.target), {weight: w}));
        }
      } else if (t.id === 'btn-import') {
        applyGraph(await post('/api/graph/import', {text: $('import-text').value}));
      } else if (t.id === 'btn-export') {
        const data = await api('GET', '/api/graph/export');
        if (data) $('import-text').value = data.text;
      } else if (t.id === 'btn-reset') {
        applyGraph(await post('/api/graph/reset'));
      }
    });

    // Forms
    document.addEventListener('submit', async (e) => {
      e.preventDefault();
      const f = e.target;
      // f.id would be the <input name="id">, not the form's id attribute
      const formId = f.getAttribute('id');
      if (formId === 'node-form') {
        applyGraph(await post('/api/nodes', {id: f.elements.id.value, x: +f.elements.x.value, y: +f.elements.y.value}));
      } else if (formId === 'edge-form') {
        applyGraph(await post('/api/edges', {source: f.elements.source.value, target: f.elements.target.value, weight: f.elements.weight.value}));
      }
    });

    // Selectors
    document.addEventListener('change', async (e) => {
      const t = e.target;
      if (t.id === 'algo-selector') {
        const data = await post('/api/config/algo', {algo_key: t.value});
        if (data) {
          $('algo-panel').innerHTML = data.algo_selector;
          $('pseudocode').innerHTML = data.pseudocode;
        }
      } else if (t.id === 'source-selector') {
        applyGraph(await post('/api/config/source_target', {source: t.value}));
      } else if (t.id === 'target-selector') {
        applyGraph(await post('/api/config/source_target', {target: t.value}));
      } else if (t.id === 'speed-selector') {
        await post('/api/config/speed', {speed: t.value});
      } else if (t.id === 'learning-mode-toggle') {
        const data = await post('/api/config/learning_mode', {enabled: t.checked});
        if (data) $('explanation').innerHTML = data.explanation;
      }
    });

    // Drag nodes on the canvas to move them
    let dragging = null;
    $('canvas-svg').addEventListener('mousedown', (e) => {
      const g = e.target.closest('g.node');
      if (g) dragging = {id: g.dataset.id, x: e.clientX, y: e.clientY};
    });
    document.addEventListener('mouseup', async (e) => {
      if (!dragging) return;
      const {id, x, y} = dragging;
      dragging = null;
      if (Math.abs(e.clientX - x) + Math.abs(e.clientY - y) < 4) return;
      const svg = $('canvas-svg').querySelector('svg');
      const pt = svg.createSVGPoint();
      pt.x = e.clientX; pt.y = e.clientY;
      const p = pt.matrixTransform(svg.getScreenCTM().inverse());
      applyGraph(await api('PUT', '/api/nodes/' + encodeURIComponent(id), {x: Math.round(p.x), y: Math.round(p.y)}));
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    app.logger.info("Longest-Path Graph Editor on http://%s:%s", app.config["HOST"], app.config["PORT"])
    app.run(host=app.config["HOST"], port=int(app.config["PORT"]), debug=bool(app.config["DEBUG"]))
