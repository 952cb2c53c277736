"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_canvas, CanvasConfig, format_distance

from ui.controls import (
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

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "format_distance",
    "algorithm_selector",
    "source_target_picker",
    "playback_controls",
    "node_table",
    "edge_table",
    "node_form",
    "edge_form",
    "result_card",
    "analytics_panel",
    "comparison_panel",
    "pseudocode_viewer",
    "explanation_panel",
    "mode_toggle",
    "import_export_panel",
    "instructions_panel",
]
