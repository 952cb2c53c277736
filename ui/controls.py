"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • algorithm_selector      – greedy vs exact solver dropdown + Run / Compute
  • source_target_picker    – source & destination dropdowns
  • playback_controls       – play/pause/next/prev/rewind/speed
  • node_table / edge_table – the editable lists beside the canvas
  • node_form / edge_form   – add / edit forms
  • result_card             – longest path + maximum distance (or "unreachable")
  • analytics_panel         – settled nodes, relaxed edges, path weight, …
  • comparison_panel        – side-by-side metrics of the two solvers
  • pseudocode_viewer       – with live line highlighting
  • explanation_panel       – Learning Mode "why this step happened"
  • mode_toggle             – Learning Mode on / off
  • import_export_panel     – adjacency-list text in and out
  • instructions_panel      – how to use the editor

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - Anything the user typed (ids, import text) goes through escape().
  - The main app stitches them together.
"""

from typing import Iterable, List, Optional, Set

from markupsafe import escape

from graph import Edge, Graph, Node
from algorithms import AlgoInfo, LongestPathResult
from engine import ComparisonResult, RunMetrics, SPEED_PRESETS
from ui.canvas import format_distance


def _selected(flag: bool) -> str:
    return "selected" if flag else ""


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(
    algorithms: List[AlgoInfo],
    selected_key: str = "longest_path",
) -> str:
    options = []
    description = ""
    for algo in algorithms:
        options.append(
            f'<option value="{algo.key}" {_selected(algo.key == selected_key)}>'
            f'{algo.label} — {algo.complexity_time}</option>'
        )
        if algo.key == selected_key:
            description = algo.description

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-selector">
        {''.join(options)}
      </select>
      <p class="hint">{escape(description)}</p>
      <div class="button-row">
        <button id="btn-compute" class="btn-primary">Compute</button>
        <button id="btn-run" class="btn-secondary">▶ Step through</button>
        <button id="btn-compare" class="btn-secondary">⚖ Compare</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Source / Destination Picker
# ---------------------------------------------------------------------------
def source_target_picker(
    node_ids: List[str],
    source: Optional[str] = None,
    target: Optional[str] = None,
) -> str:
    src_options = []
    tgt_options = ['<option value="">(none — all distances)</option>']

    for nid in node_ids:
        value = escape(nid)
        src_options.append(f'<option value="{value}" {_selected(nid == source)}>{value}</option>')
        tgt_options.append(f'<option value="{value}" {_selected(nid == target)}>{value}</option>')

    return f"""
    <div class="panel source-target-picker">
      <h3>🎯 Source & Destination</h3>
      <label>Source:
        <select id="source-selector">
          {''.join(src_options)}
        </select>
      </label>
      <label>Destination:
        <select id="target-selector">
          {''.join(tgt_options)}
        </select>
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_playing: bool = False,
    current_step: int = 0,
    total_steps: int = 0,
    speed: str = "medium",
    is_finished: bool = False,
) -> str:
    play_icon = "⏸" if is_playing else "▶"
    play_label = "Pause" if is_playing else "Play"
    labels = {"slow": "Slow (teaching)", "medium": "Medium", "fast": "Fast", "turbo": "Turbo"}
    speed_options = "".join(
        f'<option value="{key}" data-seconds="{secs}" {_selected(key == speed)}>{labels.get(key, key)}</option>'
        for key, secs in SPEED_PRESETS.items()
    )

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-rewind" title="Rewind to start">⏮</button>
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-play" title="{play_label}">{play_icon}</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-end" title="Jump to end">⏭</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{current_step}</span> / <span id="total-steps">{total_steps}</span>
        {' <span class="finished-badge">FINISHED</span>' if is_finished else ''}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">{speed_options}</select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Node / Edge tables
# ---------------------------------------------------------------------------
def node_table(
    graph: Graph,
    source: Optional[str] = None,
    target: Optional[str] = None,
) -> str:
    if graph.node_count() == 0:
        return """
        <div class="panel node-table">
          <h3>● Nodes (0)</h3>
          <p class="placeholder">No nodes yet.</p>
        </div>
        """

    rows = []
    for node in graph.nodes.values():
        nid = escape(node.id)
        badge = ""
        if node.id == source:
            badge = ' <span class="badge source">source</span>'
        elif node.id == target:
            badge = ' <span class="badge destination">destination</span>'
        out_degree = len(graph.neighbours(node.id))
        rows.append(
            f'<tr data-id="{nid}"><td>{nid}{badge}</td><td>{out_degree}</td>'
            f'<td class="actions">'
            f'<button class="btn-edit-node" data-id="{nid}" title="Edit">✎</button>'
            f'<button class="btn-delete-node" data-id="{nid}" title="Delete">🗑</button>'
            f'</td></tr>'
        )

    return f"""
    <div class="panel node-table">
      <h3>● Nodes ({graph.node_count()})</h3>
      <table>
        <thead><tr><th>Id</th><th>Out</th><th></th></tr></thead>
        <tbody>{''.join(rows)}</tbody>
      </table>
    </div>
    """


def edge_table(graph: Graph, highlighted: Iterable[str] = ()) -> str:
    """`highlighted` holds the edge ids of the current longest path."""
    if graph.edge_count() == 0:
        return """
        <div class="panel edge-table">
          <h3>→ Edges (0)</h3>
          <p class="placeholder">No edges yet.</p>
        </div>
        """

    on_path: Set[str] = set(highlighted)
    rows = []
    for edge in graph.edges.values():
        src, tgt = escape(edge.source), escape(edge.target)
        cls = ' class="on-path"' if edge.id in on_path else ""
        rows.append(
            f'<tr{cls} data-id="{escape(edge.id)}"><td>{src}</td><td>{tgt}</td>'
            f'<td><span class="weight">{edge.weight:g}</span></td>'
            f'<td class="actions">'
            f'<button class="btn-edit-edge" data-source="{src}" data-target="{tgt}" '
            f'data-weight="{edge.weight:g}" title="Edit">✎</button>'
            f'<button class="btn-delete-edge" data-source="{src}" data-target="{tgt}" title="Delete">🗑</button>'
            f'</td></tr>'
        )

    return f"""
    <div class="panel edge-table">
      <h3>→ Edges ({graph.edge_count()})</h3>
      <table>
        <thead><tr><th>Source</th><th>Destination</th><th>Weight</th><th></th></tr></thead>
        <tbody>{''.join(rows)}</tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Node / Edge forms
# ---------------------------------------------------------------------------
def node_form(node: Optional[Node] = None) -> str:
    """Add form when `node` is None, edit (rename / move) form otherwise."""
    editing = node is not None
    original = escape(node.id) if editing else ""
    x = f"{node.x:g}" if editing else "400"
    y = f"{node.y:g}" if editing else "250"

    return f"""
    <form class="panel node-form" id="node-form" data-original="{original}">
      <h3>{'✎ Edit node' if editing else '＋ Add node'}</h3>
      <label>Id: <input type="text" name="id" value="{original}" required></label>
      <label>x: <input type="number" name="x" value="{x}" step="1"></label>
      <label>y: <input type="number" name="y" value="{y}" step="1"></label>
      <button type="submit" class="btn-primary">{'Save' if editing else 'Add node'}</button>
    </form>
    """


def edge_form(node_ids: List[str], edge: Optional[Edge] = None) -> str:
    """Add form when `edge` is None, edit form (weight and endpoints) otherwise."""
    editing = edge is not None

    def options(selected: Optional[str]) -> str:
        return "".join(
            f'<option value="{escape(n)}" {_selected(n == selected)}>{escape(n)}</option>'
            for n in node_ids
        )

    original = ""
    if editing:
        original = f'data-source="{escape(edge.source)}" data-target="{escape(edge.target)}"'
    weight = f"{edge.weight:g}" if editing else "1"

    return f"""
    <form class="panel edge-form" id="edge-form" {original}>
      <h3>{'✎ Edit edge' if editing else '＋ Add edge'}</h3>
      <label>Source: <select name="source">{options(edge.source if editing else None)}</select></label>
      <label>Destination: <select name="target">{options(edge.target if editing else None)}</select></label>
      <label>Weight: <input type="number" name="weight" value="{weight}" min="0" step="any" required></label>
      <button type="submit" class="btn-primary">{'Save' if editing else 'Add edge'}</button>
    </form>
    """


# ---------------------------------------------------------------------------
# Result Card
# ---------------------------------------------------------------------------
def result_card(
    result: Optional[LongestPathResult] = None,
    source: Optional[str] = None,
    destination: Optional[str] = None,
    algo_label: str = "",
) -> str:
    if result is None:
        return """
        <div class="panel result-card">
          <h3>🏁 Result</h3>
          <p class="placeholder">Press <strong>Compute</strong> to find the longest path.</p>
        </div>
        """

    rows = "".join(
        f'<tr><td>{escape(nid)}</td><td>{format_distance(d)}</td></tr>'
        for nid, d in sorted(result.distances.items(), key=lambda kv: (-kv[1], kv[0]))
    )
    table = f'<table class="distances"><thead><tr><th>Node</th><th>Max distance</th></tr></thead><tbody>{rows}</tbody></table>'

    if destination is None:
        headline = f"<p>Longest distances from <strong>{escape(source)}</strong>.</p>"
    elif result.path:
        path = " → ".join(escape(n) for n in result.path)
        headline = (
            f'<p class="path">{path}</p>'
            f'<p>Maximum distance: <strong>{format_distance(result.distance_to(destination))}</strong></p>'
        )
    else:
        headline = (
            f'<p class="unreachable">No path from <strong>{escape(source)}</strong> '
            f'to <strong>{escape(destination)}</strong>.</p>'
        )

    suffix = f" — {escape(algo_label)}" if algo_label else ""
    return f"""
    <div class="panel result-card">
      <h3>🏁 Result{suffix}</h3>
      {headline}
      {table}
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Step through a run to see metrics.</p>
        </div>
        """

    path_status = "✅ Found" if metrics.path_found else "❌ Not Found"
    if metrics.cycle:
        path_status = "⚠️ Cycle reachable"
    elif metrics.target is None:
        path_status = "— (no destination)"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {escape(metrics.algo_label)}</h3>
      <table>
        <tr><td>Nodes Settled:</td><td><strong>{metrics.nodes_settled}</strong></td></tr>
        <tr><td>Edges Relaxed:</td><td><strong>{metrics.edges_relaxed}</strong></td></tr>
        <tr><td>Path Length:</td><td><strong>{metrics.path_edges} edges</strong></td></tr>
        <tr><td>Path Weight:</td><td><strong>{metrics.path_weight:g}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Wall Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Exact:</td><td><strong>{'yes' if metrics.exact else 'no (greedy)'}</strong></td></tr>
        <tr><td>Path:</td><td><strong>{path_status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(comp: Optional[ComparisonResult] = None) -> str:
    if not comp:
        return """
        <div class="panel comparison-panel">
          <h3>⚖️ Comparison</h3>
          <p class="placeholder">Compare the greedy and exact solvers on the current graph.</p>
        </div>
        """

    left = comp.left
    right = comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {escape(winner_label)}"

    def weight(m: RunMetrics) -> str:
        if m.cycle:
            return "cycle"
        return f"{m.path_weight:g}" if m.path_found else "—"

    verdict = (
        '<p class="agree">Both solvers agree on this graph.</p>' if comp.agree
        else '<p class="disagree">The solvers disagree: the greedy answer is not the true longest path.</p>'
    )

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ {escape(left.algo_label)} vs {escape(right.algo_label)}</h3>
      <table class="comparison-table">
        <thead>
          <tr><th>Metric</th><th>{escape(left.algo_label)}</th><th>{escape(right.algo_label)}</th><th>Winner</th></tr>
        </thead>
        <tbody>
          <tr><td>Path Weight</td><td>{weight(left)}</td><td>{weight(right)}</td><td>{winner_badge(comp.winner_path)}</td></tr>
          <tr><td>Edges Relaxed</td><td>{left.edges_relaxed}</td><td>{right.edges_relaxed}</td><td>{winner_badge(comp.winner_edges)}</td></tr>
          <tr><td>Total Steps</td><td>{left.total_steps}</td><td>{right.total_steps}</td><td>{winner_badge(comp.winner_steps)}</td></tr>
          <tr><td>Wall Time</td><td>{left.wall_time_ms:.2f} ms</td><td>{right.wall_time_ms:.2f} ms</td><td>—</td></tr>
        </tbody>
      </table>
      {verdict}
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel (Learning Mode)
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "", show: bool = True) -> str:
    if not show:
        return '<div class="explanation-text muted">Learning mode disabled</div>'

    if not explanation:
        return (
            '<div class="explanation-text">▶ Click <strong>Step through</strong> to see '
            'why each node is selected and each edge relaxed.</div>'
        )

    return f'<div class="explanation-text">{escape(explanation)}</div>'


# ---------------------------------------------------------------------------
# Mode Toggle (Learning vs Expert)
# ---------------------------------------------------------------------------
def mode_toggle(learning_mode: bool = True) -> str:
    return f"""
    <div class="panel mode-toggle">
      <h3>🎓 Mode</h3>
      <label>
        <input type="checkbox" id="learning-mode-toggle" {'checked' if learning_mode else ''}>
        Learning Mode (step explanations)
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Import / Export
# ---------------------------------------------------------------------------
def import_export_panel(text: str = "") -> str:
    return f"""
    <div class="panel import-export">
      <h3>⇅ Import / Export</h3>
      <textarea id="import-text" rows="8" placeholder="A: B(2) C(1)
B: E(1)
G:">{escape(text)}</textarea>
      <div class="button-row">
        <button id="btn-import" class="btn-secondary">Import</button>
        <button id="btn-export" class="btn-secondary">Export</button>
        <button id="btn-reset" class="btn-secondary">Reset sample</button>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Instructions
# ---------------------------------------------------------------------------
def instructions_panel() -> str:
    return """
    <div class="panel instructions" id="instructions">
      <h3>❓ How to use</h3>
      <p>The editor finds a maximum-weight path between two nodes of a directed,
         weighted graph using Dijkstra's algorithm with the comparison flipped.</p>
      <ol>
        <li>Build the graph: add, rename, move or delete nodes and edges.</li>
        <li>Pick a source and (optionally) a destination.</li>
        <li>Press <strong>Compute</strong>; the path is highlighted on the canvas.</li>
        <li>Press <strong>Step through</strong> to watch every selection and relaxation.</li>
        <li>Press <strong>Compare</strong> to check the greedy answer against the exact
            topological solver (acyclic graphs only).</li>
      </ol>
      <p class="hint">Weights must be positive numbers. Adding an edge that already
         exists replaces its weight.</p>
    </div>
    """
