"""Rendered line and render context models."""

from dataclasses import dataclass, field
from enum import Enum


class LineRole(str, Enum):
    """What a rendered line is; selects its border glyphs and fill."""

    TOP_BORDER = "top_border"
    GROUP_HEADER = "group_header"
    ITEM = "item"
    WRAPPED_CONTINUATION = "wrapped_continuation"
    BOTTOM_BORDER = "bottom_border"
    SPACER = "spacer"


class Position(str, Enum):
    """Place of an entry among its group siblings."""

    FIRST = "first"
    MIDDLE = "middle"
    LAST = "last"
    ONLY = "only"

    @classmethod
    def of(cls, index: int, count: int) -> "Position":
        if count == 1:
            return cls.ONLY
        if index == 0:
            return cls.FIRST
        if index == count - 1:
            return cls.LAST
        return cls.MIDDLE

    @property
    def closes(self) -> bool:
        """True when no sibling follows this one."""
        return self in (Position.LAST, Position.ONLY)


@dataclass(frozen=True)
class RenderedLine:
    """Single line of layout output, before borders and padding."""

    text: str
    role: LineRole
    depth: int = 0
    position: Position | None = None  # None for top-level entries
    annotation: str = ""  # right-aligned marker, dropped first when space runs out
    box_width: int | None = None  # None means the full render width


@dataclass
class RenderContext:
    """Per-call layout parameters.

    Never shared between concurrent renders; the layout engine works on
    its own copy of ``continuation_active``.
    """

    terminal_width: int = 80
    side_panel_width: int = 0
    verbose: bool = False
    add_source: bool = True
    color: bool = True
    continuation_active: dict[int, bool] = field(default_factory=dict)

    @property
    def inner_width(self) -> int:
        """Cells between the left and right border glyphs."""
        return max(self.terminal_width - 2, 0)
