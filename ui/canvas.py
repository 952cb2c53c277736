"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph (+ Step or computed path) → SVG string.

The renderer consumes:
  • graph      – the Graph object (node positions, edges, endpoint marks)
  • step       – the current Step snapshot (node/edge states, overlay data)
  • path       – a computed longest path to highlight when no run is shown
  • config     – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  This function is stateless — the caller passes in
    everything it needs and gets back a string.
  - State-based coloring is a simple dict lookup: state string → hex color.
  - Every edge is directed, so every edge gets an arrowhead and a weight
    label.  Edges on the highlighted path carry class="edge chosen animated"
    so the page stylesheet can run the dash animation on them.
  - User-entered ids are escaped before they reach the markup.
  - Overlay panels (distances, unsettled / topological order) are SVG <g>
    groups pinned to the right-hand side of the canvas.
"""

import math
from typing import Dict, List, Optional

from markupsafe import escape

from graph import Edge, Graph, Node
from algorithms.step import NEG_INF, Step


# ---------------------------------------------------------------------------
# Visual Config — color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 800
    height: int = 500
    bg:     str = "#f5f7fb"

    # node colors (state → fill)
    node_colors: Dict[str, str] = {
        "default":     "#ffffff",
        "frontier":    "#dbeafe",   # pale blue — reached, not settled
        "settled":     "#e5e7eb",   # grey — distance fixed
        "current":     "#fde68a",   # amber — selected right now
        "path":        "#bbf7d0",   # green — on the longest path
        "source":      "#4ade80",
        "destination": "#f87171",
    }

    # edge colors
    edge_colors: Dict[str, str] = {
        "default":  "#3b82f6",
        "relaxed":  "#f59e0b",
        "chosen":   "#16a34a",
        "ignored":  "#cbd5e1",
        "active":   "#f59e0b",
    }

    # node
    node_radius:        int = 22
    node_stroke:        str = "#1e3a8a"
    node_stroke_width:  int = 2
    node_label_color:   str = "#111827"
    node_label_size:    int = 14
    node_label_weight:  str = "600"

    # edge
    edge_width:         int = 2
    edge_width_chosen:  int = 5
    edge_arrow_size:    int = 12
    edge_weight_color:  str = "#1f2937"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#ffffff"

    # overlay panels
    overlay_bg:         str = "#ffffff"
    overlay_border:     str = "#cbd5e1"
    overlay_text:       str = "#374151"
    overlay_header:     str = "#111827"
    overlay_accent:     str = "#2563eb"
    overlay_font_size:  int = 12

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None):
        if width is not None:
            self.width = int(width)
        if height is not None:
            self.height = int(height)


CONFIG = CanvasConfig()

_FONT = "font-family=\"'DM Sans', sans-serif\""
_MONO = "font-family=\"'JetBrains Mono', monospace\""


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    step: Optional[Step] = None,
    path: Optional[List[str]] = None,
    config: CanvasConfig = CONFIG,
    show_overlays: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph         : The graph to render.
        step          : Current algorithm step (or None for static graph).
        path          : Node ids of a computed path; ignored when `step` is given.
        config        : Visual config.
        show_overlays : If True, render distance / frontier panels.
    """
    if step is not None:
        path = step.path
    chosen = {e.id for e in graph.path_edges(path)}
    on_path = set(path or [])

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so nodes sit on top) --
    for edge in graph.edges.values():
        svg_parts.append(_render_edge(graph, edge, step, edge.id in chosen, config))

    # -- nodes --
    for node in graph.nodes.values():
        svg_parts.append(_render_node(node, step, node.id in on_path, config))

    # -- overlays --
    if show_overlays and step:
        svg_parts.append(_render_overlays(step, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _node_state(node: Node, step: Optional[Step], on_path: bool) -> str:
    # endpoints keep their colour whatever the step says about them
    if node.state.value in ("source", "destination"):
        return node.state.value
    if step and node.id in step.node_states:
        return step.node_states[node.id]
    if on_path:
        return "path"
    return node.state.value


def _render_node(node: Node, step: Optional[Step], on_path: bool, config: CanvasConfig) -> str:
    state_key = _node_state(node, step, on_path)
    fill = config.node_colors.get(state_key, config.node_colors["default"])

    stroke = config.node_stroke
    stroke_width = config.node_stroke_width
    glow = ""

    cx, cy = node.x, node.y
    r = config.node_radius

    if step and step.current_node == node.id:
        stroke = config.edge_colors["active"]
        stroke_width = 4
        glow = (
            f'  <circle cx="{cx}" cy="{cy}" r="{r + 8}" fill="none" '
            f'stroke="{stroke}" stroke-width="2" opacity="0.4"/>'
        )

    label = escape(node.label)
    parts = [
        f'<g class="node {state_key}" data-id="{escape(node.id)}">',
        glow,
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + 5}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" {_FONT} '
        f'fill="{config.node_label_color}" font-weight="{config.node_label_weight}">{label}</text>',
    ]
    if step and node.id in step.distances:
        parts.append(
            f'  <text x="{cx}" y="{cy - r - 6}" text-anchor="middle" font-size="11" '
            f'{_MONO} fill="{config.overlay_accent}">{format_distance(step.distances[node.id])}</text>'
        )
    parts.append('</g>')
    return "\n".join(p for p in parts if p)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(
    graph: Graph,
    edge: Edge,
    step: Optional[Step],
    on_path: bool,
    config: CanvasConfig,
) -> str:
    src_node = graph.get_node(edge.source)
    tgt_node = graph.get_node(edge.target)
    if not src_node or not tgt_node:
        return ""

    state_key = edge.state.value
    if step and edge.id in step.edge_states:
        state_key = step.edge_states[edge.id]
    elif on_path:
        state_key = "chosen"

    stroke = config.edge_colors.get(state_key, config.edge_colors["default"])
    stroke_width = config.edge_width_chosen if state_key == "chosen" else config.edge_width

    if step and step.current_edge == edge.id:
        stroke = config.edge_colors["active"]
        stroke_width = 4

    x1, y1 = src_node.x, src_node.y
    x2, y2 = tgt_node.x, tgt_node.y
    dx, dy = x2 - x1, y2 - y1
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < 0.001:
        return ""  # degenerate edge

    ux, uy = dx / dist, dy / dist
    r = config.node_radius

    # a reverse edge exists → bow both sideways so they don't overlap
    offset = 8 if graph.get_edge_between(edge.target, edge.source) else 0
    ox, oy = -uy * offset, ux * offset

    x1_adj = x1 + ux * r + ox
    y1_adj = y1 + uy * r + oy
    x2_adj = x2 - ux * r + ox
    y2_adj = y2 - uy * r + oy

    classes = "edge chosen animated" if state_key == "chosen" else f"edge {state_key}"
    parts = [
        f'<g class="{classes}" data-id="{escape(edge.id)}">',
        f'  <line x1="{x1_adj}" y1="{y1_adj}" x2="{x2_adj}" y2="{y2_adj}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>',
        _render_arrow(x2_adj, y2_adj, ux, uy, stroke, config),
    ]

    # weight label (at midpoint, pushed off the line)
    mx = (x1 + x2) / 2 + ox * 2.5
    my = (y1 + y2) / 2 + oy * 2.5
    parts.append(
        f'  <rect x="{mx - 14}" y="{my - 10}" width="28" height="18" rx="4" '
        f'fill="{config.edge_weight_bg}" stroke="{stroke}" stroke-width="1" opacity="0.95"/>'
    )
    parts.append(
        f'  <text x="{mx}" y="{my + 4}" text-anchor="middle" '
        f'font-size="{config.edge_weight_size}" {_FONT} '
        f'fill="{config.edge_weight_color}" font-weight="600">{edge.weight:g}</text>'
    )

    parts.append('</g>')
    return "\n".join(parts)


def _render_arrow(x: float, y: float, ux: float, uy: float, color: str, config: CanvasConfig) -> str:
    """Draw an arrowhead at (x, y) pointing in direction (ux, uy)."""
    size = config.edge_arrow_size
    px, py = -uy, ux
    p1_x = x - ux * size + px * (size * 0.5)
    p1_y = y - uy * size + py * (size * 0.5)
    p2_x = x - ux * size - px * (size * 0.5)
    p2_y = y - uy * size - py * (size * 0.5)
    return f'  <polygon points="{x},{y} {p1_x},{p1_y} {p2_x},{p2_y}" fill="{color}"/>'


# ---------------------------------------------------------------------------
# Overlay Panels
# ---------------------------------------------------------------------------
def format_distance(d: Optional[float]) -> str:
    if d is None or d == NEG_INF:
        return "-∞"
    return f"{d:g}"


def _render_overlays(step: Step, config: CanvasConfig) -> str:
    """Distances table plus whichever list the algorithm pushed."""
    x = config.width - 170
    parts = ['<g class="overlays">']
    parts.append(_render_distances_panel(step.distances, config, x=x, y=12))

    if "order" in step.overlay:
        parts.append(_render_list_panel("Topological order", step.overlay["order"], config, x=x, y=300))
    elif "cycle" in step.overlay:
        parts.append(_render_list_panel("Cycle", step.overlay["cycle"], config, x=x, y=300))
    elif "unsettled" in step.overlay:
        parts.append(_render_list_panel("Unsettled", step.overlay["unsettled"], config, x=x, y=300))

    parts.append('</g>')
    return "\n".join(parts)


def _render_distances_panel(distances: Dict[str, float], config: CanvasConfig, x: int, y: int) -> str:
    # greatest distance first, unreached (-∞) last
    items = sorted(distances.items(), key=lambda kv: (-kv[1], kv[0]))
    shown = items[:14]
    height = 34 + 16 * (len(shown) + (1 if len(items) > 14 else 0))
    parts = [
        f'<g class="distances-panel" transform="translate({x},{y})">',
        f'  <rect width="160" height="{height}" fill="{config.overlay_bg}" '
        f'stroke="{config.overlay_border}" rx="6" opacity="0.95"/>',
        f'  <text x="10" y="20" font-size="13" font-weight="700" {_FONT} '
        f'fill="{config.overlay_header}">Distances</text>',
    ]
    for i, (nid, d) in enumerate(shown):
        parts.append(
            f'  <text x="14" y="{40 + i * 16}" font-size="{config.overlay_font_size}" '
            f'{_MONO} fill="{config.overlay_text}">{escape(nid)}: {format_distance(d)}</text>'
        )
    if len(items) > 14:
        parts.append(
            f'  <text x="14" y="{40 + 14 * 16}" font-size="11" fill="#6b7280">… +{len(items) - 14} more</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


def _render_list_panel(title: str, items: List[str], config: CanvasConfig, x: int, y: int) -> str:
    text = ", ".join(items) if items else "∅"
    if len(text) > 40:
        text = text[:39] + "…"
    return "\n".join([
        f'<g class="list-panel" transform="translate({x},{y})">',
        f'  <rect width="160" height="50" fill="{config.overlay_bg}" '
        f'stroke="{config.overlay_border}" rx="6" opacity="0.95"/>',
        f'  <text x="10" y="20" font-size="13" font-weight="700" {_FONT} '
        f'fill="{config.overlay_header}">{escape(title)}</text>',
        f'  <text x="10" y="38" font-size="11" {_MONO} '
        f'fill="{config.overlay_text}">{escape(text)}</text>',
        '</g>',
    ])
