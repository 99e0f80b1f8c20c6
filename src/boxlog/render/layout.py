"""Layout engine: walks an event's attribute tree into rendered lines.

Top-level entries sit at depth 0. Children of a group sit one level
deeper and are drawn with tree connectors:

    ╼ 📦 request:
    ┣━━━╼ id: "123"
    ┣━━━╼ 📦 user:
    ┃     ┗━━━╼ name: "ada"
    ┗━━━╼ size: 42

The vertical bar under ``request`` continues past the nested ``user``
group because ``size`` still follows at depth 1; that state lives in
``RenderContext.continuation_active``.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from boxlog.core.exceptions import SerializationError
from boxlog.core.values import (
    ValueKind,
    best_effort_str,
    kind_of,
    quote,
    resolve,
    scalar_text,
    struct_lines,
)
from boxlog.models.event import Attribute, Entry, GroupMarker, GroupValue, LogEvent
from boxlog.models.lines import LineRole, Position, RenderContext, RenderedLine
from boxlog.render.serializer import ANNOTATION_TAIL
from boxlog.render.styler import Styler
from boxlog.utils.width import center_text, display_width, truncate_cells, truncate_left
from boxlog.utils.wrap import wrap, wrap_escaped

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%b %d %H:%M:%S"
TIMESTAMP_ICON = "🕙"
GROUP_ICON = "📦"
GROUP_MARKER_ICON = "📂"
GROUP_MARKER_LABEL = "GROUP"
SOURCE_LABEL = "SOURCE"
PLACEHOLDER_GLYPH = "⸗"

MARGIN = " "
TOP_LEAD = "──"
BULLET = "╼ "
BAR_COLUMN = "┃     "
EMPTY_COLUMN = "      "
BRANCH = "┣━━━"
CORNER = "┗━━━"
STRAIGHT = "┃   "
BLANK = "    "

# Timestamp is dropped when message + timestamp come closer than this to the edge.
TIMESTAMP_SLACK = 10
SOURCE_SLACK = 20

# Wrapped and struct values get right-side markers only on wide boxes.
ANNOTATION_MIN_WIDTH = 60
ANNOTATION_RESERVE = len("╕ struct") + ANNOTATION_TAIL + 1

# Cells kept for a wrapped value before its key is shortened.
MIN_VALUE_WIDTH = 8


@dataclass
class _Node:
    key: str
    value: Any = None
    children: "list[_Node] | None" = None
    marker: bool = False


def build_tree(entries: tuple[Entry, ...] | list[Entry]) -> list[_Node]:
    """Resolve entries into nodes, nesting marker groups and dropping empties.

    Everything after a GroupMarker becomes that group's children. Empty
    attributes are skipped and groups left without children vanish.
    """
    nodes: list[_Node] = []
    for index, entry in enumerate(entries):
        if isinstance(entry, GroupMarker):
            children = build_tree(entries[index + 1 :])
            if not entry.name:
                nodes.extend(children)
            elif children:
                nodes.append(_Node(entry.name, children=children, marker=True))
            break
        if not isinstance(entry, Attribute) or entry.is_empty:
            continue
        value = resolve(entry.value)
        if isinstance(value, GroupValue):
            children = build_tree(value.entries)
            if not entry.key:
                nodes.extend(children)
            elif children:
                nodes.append(_Node(entry.key, children=children))
            continue
        nodes.append(_Node(entry.key, value))
    return nodes


class _LayoutPass:
    """State for laying out a single event."""

    def __init__(self, context: RenderContext):
        self.ctx = context
        self.styler = Styler(context.color)
        self.lines: list[RenderedLine] = []

    def run(self, event: LogEvent) -> list[RenderedLine]:
        self.lines.append(self._top_border(event))
        self._entries(build_tree(event.entries), depth=0, nested=False)
        self.lines.append(self._bottom_border(event))
        return self.lines

    # =========================================================================
    # Borders
    # =========================================================================

    def _top_border(self, event: LogEvent) -> RenderedLine:
        text = f"{TOP_LEAD}[{self.styler.level(event.level)}: {quote(event.message)}]"
        stamp = ""
        if event.timestamp is not None:
            stamp = f"[{TIMESTAMP_ICON} {event.timestamp.strftime(TIMESTAMP_FORMAT)}]"
            combined = display_width(text) + display_width(stamp)
            if combined > self.ctx.terminal_width - TIMESTAMP_SLACK:
                stamp = ""
        return RenderedLine(text, LineRole.TOP_BORDER, annotation=stamp)

    def _bottom_border(self, event: LogEvent) -> RenderedLine:
        if not (self.ctx.add_source and event.source is not None):
            return RenderedLine("", LineRole.BOTTOM_BORDER)
        path = str(event.source)
        limit = self.ctx.terminal_width - SOURCE_SLACK - len(SOURCE_LABEL)
        path = truncate_left(path, max(limit, 4))
        text = f"[{self.styler.emphasis(SOURCE_LABEL)}: {path}]"
        return RenderedLine(text, LineRole.BOTTOM_BORDER)

    # =========================================================================
    # Tree walk
    # =========================================================================

    def _entries(self, nodes: list[_Node], depth: int, nested: bool) -> None:
        count = len(nodes)
        for index, node in enumerate(nodes):
            position = Position.of(index, count) if nested else None
            if node.children is not None:
                self._group(node, depth, position)
            else:
                self._attribute(node, depth, position)

    def _group(self, node: _Node, depth: int, position: Position | None) -> None:
        prefix = self._prefix(depth, position)
        if node.marker:
            label = self.styler.emphasis(GROUP_MARKER_LABEL)
            text = f"{prefix}{GROUP_MARKER_ICON} {label}: {quote(node.key)}"
        else:
            text = f"{prefix}{GROUP_ICON} {self.styler.key(depth, node.key)}:"
        self.lines.append(RenderedLine(text, LineRole.GROUP_HEADER, depth, position))

        if position is not None:
            self.ctx.continuation_active[depth] = not position.closes
        self._entries(node.children or [], depth + 1, nested=True)
        self.ctx.continuation_active.pop(depth, None)

    def _attribute(self, node: _Node, depth: int, position: Position | None) -> None:
        kind = kind_of(node.value)
        if kind is ValueKind.STRUCT:
            try:
                lines = struct_lines(node.key, node.value)
            except SerializationError as e:
                logger.debug(f"Rendering '{node.key}' as text: {e.message}")
                self._scalar(node.key, best_effort_str(node.value), True, depth, position)
                return
            self._struct(node.key, lines, depth, position)
            return
        quoted = kind in (ValueKind.STRING, ValueKind.OTHER)
        self._scalar(node.key, scalar_text(node.value), quoted, depth, position)

    def _scalar(
        self,
        key: str,
        text: str,
        quoted: bool,
        depth: int,
        position: Position | None,
    ) -> None:
        shown = quote(text) if quoted else text
        line = f"{self._prefix(depth, position)}{self.styler.key(depth, key)}: {shown}"
        if display_width(line) <= self.ctx.inner_width:
            self.lines.append(RenderedLine(line, LineRole.ITEM, depth, position))
            return
        key, budget = self._fit_key(key, depth, position)
        if quoted:
            # Wrap the escaped form so escapes count against the budget.
            escaped = shown[1:-1]
            segments = [f'"{segment}"' for segment in wrap_escaped(escaped, budget)]
        else:
            segments = list(wrap(text, budget))
        self._segments(key, segments, depth, position, "wrap")

    def _struct(
        self,
        key: str,
        lines: list[str],
        depth: int,
        position: Position | None,
    ) -> None:
        """Emit JSON lines, wrapping any line wider than the value budget."""
        budget = self.ctx.terminal_width - self._reserved(key, depth, position)
        if all(display_width(line) <= budget for line in lines):
            self._segments(key, lines, depth, position, "struct")
            return
        key, budget = self._fit_key(key, depth, position)
        segments: list[str] = []
        for line in lines:
            if display_width(line) <= budget:
                segments.append(line)
            else:
                segments.extend(wrap_escaped(line, budget))
        self._segments(key, segments, depth, position, "struct")

    def _segments(
        self,
        key: str,
        segments: list[str],
        depth: int,
        position: Position | None,
        kind: str,
    ) -> None:
        """Emit one line per segment; later segments show a placeholder key."""
        placeholder = center_text(PLACEHOLDER_GLYPH, display_width(key))
        annotate = len(segments) > 1 and self.ctx.terminal_width > ANNOTATION_MIN_WIDTH
        last = len(segments) - 1
        for index, shown in enumerate(segments):
            if index == 0:
                prefix = self._prefix(depth, position)
                text = f"{prefix}{self.styler.key(depth, key)}: {shown}"
                role = LineRole.ITEM
            else:
                prefix = self._prefix(depth, position, continuation=True)
                text = f"{prefix}{self.styler.key(depth, placeholder)}: {shown}"
                role = LineRole.WRAPPED_CONTINUATION
            annotation = ""
            if annotate:
                if index == 0:
                    annotation = f"╕ {kind}"
                elif index == last:
                    annotation = "╛"
                else:
                    annotation = "│"
            self.lines.append(RenderedLine(text, role, depth, position, annotation))

    # =========================================================================
    # Geometry
    # =========================================================================

    def _prefix(
        self,
        depth: int,
        position: Position | None,
        continuation: bool = False,
    ) -> str:
        """Indent columns plus connector for a line at depth."""
        if position is None:
            return MARGIN + ("  " if continuation else BULLET)
        columns = "".join(
            BAR_COLUMN if self.ctx.continuation_active.get(level) else EMPTY_COLUMN
            for level in range(1, depth)
        )
        if continuation:
            connector = (BLANK if position.closes else STRAIGHT) + "  "
        else:
            connector = (CORNER if position.closes else BRANCH) + BULLET
        return MARGIN + columns + connector

    def _reserved(self, key: str, depth: int, position: Position | None) -> int:
        """Cells taken by borders, connectors, key and quotes on a wrapped line."""
        reserved = 2 + display_width(self._prefix(depth, position))
        reserved += display_width(key) + len(": ") + len('""')
        if self.ctx.terminal_width > ANNOTATION_MIN_WIDTH:
            reserved += ANNOTATION_RESERVE
        return reserved

    def _fit_key(self, key: str, depth: int, position: Position | None) -> tuple[str, int]:
        """Key to show on a wrapped value and the cell budget left for the value.

        Deep nesting or a long key can leave no room for the value; the
        key is then shortened until MIN_VALUE_WIDTH cells are free. The
        budget never drops below one cell.
        """
        budget = self.ctx.terminal_width - self._reserved(key, depth, position)
        if budget >= MIN_VALUE_WIDTH:
            return key, budget
        key_width = max(display_width(key) - (MIN_VALUE_WIDTH - budget), 1)
        key = truncate_cells(key, key_width)
        budget = self.ctx.terminal_width - self._reserved(key, depth, position)
        return key, max(budget, 1)


class LayoutEngine:
    """Produces the ordered line list for a log event.

    Example:
        engine = LayoutEngine()
        lines = engine.render(event, RenderContext(terminal_width=80))
    """

    def render(self, event: LogEvent, context: RenderContext) -> list[RenderedLine]:
        """Lay out an event.

        The caller's context is left untouched; continuation state is
        tracked on a private copy.
        """
        ctx = dataclasses.replace(context, continuation_active={})
        return _LayoutPass(ctx).run(event)


def render(event: LogEvent, context: RenderContext) -> list[RenderedLine]:
    """Convenience function to lay out an event."""
    return LayoutEngine().render(event, context)
