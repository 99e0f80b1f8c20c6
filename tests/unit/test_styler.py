"""Tests for depth and level styling."""

from boxlog.models.event import Level
from boxlog.render.styler import (
    DEPTH_PALETTE,
    Styler,
    color_for_depth,
    paint,
    style_for_level,
)
from boxlog.utils.width import display_width, strip_ansi


class TestDepthColors:
    """Tests for the depth palette."""

    def test_palette_has_eight_colors(self) -> None:
        """Test the palette size."""
        assert len(DEPTH_PALETTE) == 8
        assert len(set(DEPTH_PALETTE)) == 8

    def test_cycles_with_depth(self) -> None:
        """Test that depth wraps around the palette."""
        for depth in range(len(DEPTH_PALETTE)):
            assert color_for_depth(depth) == color_for_depth(depth + len(DEPTH_PALETTE))

    def test_adjacent_depths_differ(self) -> None:
        """Test that neighbouring depths get different colors."""
        assert color_for_depth(0) != color_for_depth(1)


class TestLevelStyles:
    """Tests for level icons and colors."""

    def test_every_level_has_a_style(self) -> None:
        """Test that every level has its own icon."""
        icons = {style_for_level(level).icon for level in Level}

        assert len(icons) == len(Level)

    def test_error_style(self) -> None:
        """Test the error icon and color."""
        style = style_for_level(Level.ERROR)

        assert style.icon == "🛑"
        assert style.color == "bright_red"
        assert style.label == "ERROR"


class TestPaint:
    """Tests for applying colors."""

    def test_disabled_returns_text(self) -> None:
        """Test that disabled painting returns the text."""
        assert paint("key", "bright_green", enabled=False) == "key"

    def test_empty_text_stays_empty(self) -> None:
        """Test that empty text is never painted."""
        assert paint("", "bright_green") == ""

    def test_enabled_adds_escape_sequences(self) -> None:
        """Test painted text with escape sequences."""
        result = paint("key", "bright_green")

        assert result.startswith("\x1b[")
        assert strip_ansi(result) == "key"
        assert display_width(result) == 3


class TestStyler:
    """Tests for the Styler helper."""

    def test_level_without_color(self) -> None:
        """Test the plain level label."""
        assert Styler(color=False).level(Level.INFO) == "🌐 INFO"

    def test_key_uses_depth_color(self) -> None:
        """Test that keys are painted with their depth color."""
        styler = Styler(color=True)

        assert styler.key(2, "id") == paint("id", color_for_depth(2))

    def test_no_color_key_is_plain(self) -> None:
        """Test that keys stay plain without color."""
        assert Styler(color=False).key(3, "id") == "id"
