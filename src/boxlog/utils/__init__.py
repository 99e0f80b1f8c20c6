"""Utility modules - display width and text wrapping."""

from boxlog.utils.width import (
    center_text,
    display_width,
    pad_right,
    strip_ansi,
    truncate_cells,
    truncate_left,
)
from boxlog.utils.wrap import wrap, wrap_escaped

__all__ = [
    # Width
    "center_text",
    "display_width",
    "pad_right",
    "strip_ansi",
    "truncate_cells",
    "truncate_left",
    # Wrapping
    "wrap",
    "wrap_escaped",
]
