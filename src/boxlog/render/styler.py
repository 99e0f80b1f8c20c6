"""Color and icon selection by nesting depth and level."""

from dataclasses import dataclass

from rich.color import ColorSystem
from rich.style import Style

from boxlog.models.event import Level


@dataclass(frozen=True)
class LevelStyle:
    """Icon, color and label shown for a level in the top border."""

    icon: str
    color: str
    label: str


LEVEL_STYLES: dict[Level, LevelStyle] = {
    Level.DEBUG: LevelStyle("🔧", "bright_magenta", "DEBUG"),
    Level.INFO: LevelStyle("🌐", "bright_blue", "INFO"),
    Level.WARN: LevelStyle("🔶", "bright_yellow", "WARN"),
    Level.ERROR: LevelStyle("🛑", "bright_red", "ERROR"),
}

# Key colors cycle through this list as groups nest deeper.
DEPTH_PALETTE: tuple[str, ...] = (
    "bright_green",
    "bright_yellow",
    "bright_cyan",
    "bright_magenta",
    "bright_blue",
    "bright_red",
    "bright_black",
    "bright_white",
)

EMPHASIS_COLOR = "bright_white"


def color_for_depth(depth: int) -> str:
    """Palette entry for a nesting depth."""
    return DEPTH_PALETTE[depth % len(DEPTH_PALETTE)]


def style_for_level(level: Level) -> LevelStyle:
    """Fixed icon/color pair for a level."""
    return LEVEL_STYLES[Level.from_stdlib(int(level))]


def paint(text: str, color: str, enabled: bool = True) -> str:
    """Wrap text in the ANSI sequence for a color name."""
    if not text or not enabled:
        return text
    return Style.parse(color).render(text, color_system=ColorSystem.STANDARD)


class Styler:
    """Applies depth and level colors, or nothing when color is off."""

    def __init__(self, color: bool = True):
        self.color = color

    def key(self, depth: int, text: str) -> str:
        return paint(text, color_for_depth(depth), self.color)

    def level(self, level: Level) -> str:
        style = style_for_level(level)
        return paint(f"{style.icon} {style.label}", style.color, self.color)

    def emphasis(self, text: str) -> str:
        return paint(text, EMPHASIS_COLOR, self.color)
