"""Rendering pipeline - layout, styling, metrics panel, serialization.

This package provides:
- LayoutEngine: walks an event's attribute tree into rendered lines
- Styler: depth and level colors
- metrics: runtime statistics snapshot and panel layout
- serialize: border glyphs, padding and the final output buffer
"""

from boxlog.render.layout import LayoutEngine, build_tree, render
from boxlog.render.metrics import PanelPolicy, layout as layout_metrics, snapshot
from boxlog.render.serializer import serialize, serialize_line
from boxlog.render.styler import (
    Styler,
    color_for_depth,
    paint,
    style_for_level,
)

__all__ = [
    # Layout
    "LayoutEngine",
    "build_tree",
    "render",
    # Metrics
    "PanelPolicy",
    "layout_metrics",
    "snapshot",
    # Serialization
    "serialize",
    "serialize_line",
    # Styling
    "Styler",
    "color_for_depth",
    "paint",
    "style_for_level",
]
