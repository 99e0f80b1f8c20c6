"""Serializer: turns rendered lines into the bytes written to the sink.

Each line gets the border glyphs of its role and is padded (or cut) to
exactly the box width in display cells. The serializer only reads the
lines; it performs no I/O.

Example Output (width 40):
    ╭──[🛑 ERROR: "request failed"]───────╮
    ├ ╼ op: "write"                        │
    ├ ╼ 📦 request:                        │
    │ ┣━━━╼ id: "123"                      │
    │ ┗━━━╼ size: 42                       │
    ╰─────[SOURCE: handler.go:42]──────────╯
"""

from collections.abc import Iterable
from dataclasses import dataclass

from boxlog.models.lines import LineRole, RenderedLine
from boxlog.utils.width import (
    center_text,
    display_width,
    pad_right,
    truncate_cells,
)

ENCODING = "utf-8"

# Fill cells kept between a right-side annotation and the right border.
ANNOTATION_TAIL = 5


@dataclass(frozen=True)
class BoxGlyphs:
    """Left/right border glyphs and the fill used to pad a line."""

    left: str
    right: str
    fill: str


TOP = BoxGlyphs("╭", "╮", "─")
BOTTOM = BoxGlyphs("╰", "╯", "─")
BRANCH = BoxGlyphs("├", "│", " ")
BODY = BoxGlyphs("│", "│", " ")


def glyphs_for(line: RenderedLine) -> BoxGlyphs | None:
    """Border glyphs for a line's role; None for unbordered spacer lines."""
    if line.role is LineRole.SPACER:
        return None
    if line.role is LineRole.TOP_BORDER:
        return TOP
    if line.role is LineRole.BOTTOM_BORDER:
        return BOTTOM
    if line.role in (LineRole.ITEM, LineRole.GROUP_HEADER) and line.depth == 0:
        return BRANCH
    return BODY


def compose_inner(text: str, annotation: str, width: int, fill: str) -> str:
    """Fit text plus an optional right-aligned annotation into width cells.

    The annotation is dropped when it does not fit next to the text; the
    text itself is cut with an ellipsis only when it alone overflows.
    """
    if width <= 0:
        return ""
    if annotation:
        room = width - display_width(annotation) - ANNOTATION_TAIL - 1
        if display_width(text) > room:
            annotation = ""
    if not annotation:
        return pad_right(truncate_cells(text, width), width, fill)
    body_width = width - display_width(annotation) - ANNOTATION_TAIL
    return pad_right(text, body_width, fill) + annotation + fill * ANNOTATION_TAIL


def serialize_line(line: RenderedLine, width: int) -> str:
    """Render one line to exactly its box width."""
    glyphs = glyphs_for(line)
    if glyphs is None:
        return truncate_cells(line.text, width) if line.text else ""

    box_width = min(line.box_width or width, width)
    inner = max(box_width - 2, 0)
    if line.role is LineRole.BOTTOM_BORDER and line.text:
        body = center_text(truncate_cells(line.text, inner), inner, glyphs.fill)
        body = pad_right(body, inner, glyphs.fill)
        # The narrow space may push an even-remainder label one cell over.
        body = truncate_cells(body, inner, ellipsis="")
    else:
        body = compose_inner(line.text, line.annotation, inner, glyphs.fill)
    return glyphs.left + body + glyphs.right


def serialize(lines: Iterable[RenderedLine], width: int) -> bytes:
    """Join rendered lines into one output buffer.

    Lines are separated by single newlines and followed by one blank line.

    Args:
        lines: Layout output in display order
        width: Terminal width in cells; no line exceeds it

    Returns:
        UTF-8 encoded buffer ready for a single write.
    """
    text = "\n".join(serialize_line(line, width) for line in lines)
    return (text + "\n\n").encode(ENCODING)
