"""Tests for text wrapping."""

import json
import types

import pytest
from rich.cells import cell_len

from boxlog.utils.wrap import wrap, wrap_escaped


class TestWrap:
    """Tests for the wrap generator."""

    def test_short_text_is_one_segment(self) -> None:
        """Test that text within the budget is not split."""
        assert list(wrap("hello", 10)) == ["hello"]

    def test_breaks_after_last_space(self) -> None:
        """Test breaking after the last space in each window."""
        assert list(wrap("hello world foo", 8)) == ["hello ", "world ", "foo"]

    def test_breaks_after_slash(self) -> None:
        """Test breaking file paths after slashes."""
        assert list(wrap("/usr/local/bin", 6)) == ["/usr/", "local/", "bin"]

    def test_breaks_after_newline(self) -> None:
        """Test that a newline later than a space wins."""
        assert list(wrap("line one\nline two", 12)) == ["line one\n", "line two"]

    def test_hard_break_without_delimiters(self) -> None:
        """Test hard breaks when a window has no delimiter."""
        assert list(wrap("abcdefghij", 4)) == ["abcd", "efgh", "ij"]

    def test_wide_characters_count_two_cells(self) -> None:
        """Test that the window is measured in display cells."""
        assert list(wrap("日本語テキスト", 4)) == ["日本", "語テ", "キス", "ト"]

    def test_character_wider_than_budget_still_progresses(self) -> None:
        """Test that a too-wide character gets its own segment."""
        assert list(wrap("日本", 1)) == ["日", "本"]

    @pytest.mark.parametrize("max_width", [0, -5])
    def test_non_positive_width_returns_whole_text(self, max_width: int) -> None:
        """Test the degenerate budget."""
        assert list(wrap("some long text", max_width)) == ["some long text"]

    def test_empty_text(self) -> None:
        """Test wrapping an empty string."""
        assert "".join(wrap("", 10)) == ""

    def test_is_lazy(self) -> None:
        """Test that segments are produced on demand."""
        segments = wrap("alpha beta gamma", 6)

        assert isinstance(segments, types.GeneratorType)
        assert next(segments) == "alpha "

    @pytest.mark.parametrize(
        "text",
        [
            "The quick brown fox jumps over the lazy dog.",
            "/var/lib/app/data/cache/objects/5f/3a9c1e",
            "a,b,c,d,e,f,g,h,i,j,k,l,m,n,o,p",
            "no-delimiters-in-this-rather-long-token-at-all",
            "mixed 日本語 and ascii, with/slashes.and dots\nand newlines",
        ],
    )
    @pytest.mark.parametrize("max_width", [2, 5, 13, 40])
    def test_segments_reassemble_and_fit(self, text: str, max_width: int) -> None:
        """Test that segments concatenate back and respect the budget."""
        segments = list(wrap(text, max_width))

        assert "".join(segments) == text
        assert all(cell_len(segment) <= max_width for segment in segments)


class TestWrapEscaped:
    """Tests for wrapping JSON-escaped text."""

    def test_plain_text_matches_wrap(self) -> None:
        """Test that text without escapes wraps exactly like wrap."""
        text = "hello world foo"

        assert list(wrap_escaped(text, 8)) == list(wrap(text, 8))

    def test_cut_moves_before_escape(self) -> None:
        """Test that a window ending inside an escape gives the escape to the next segment."""
        assert list(wrap_escaped('abc\\"de', 4)) == ["abc", '\\"de']

    def test_unicode_escape_kept_whole(self) -> None:
        """Test that six-character escapes are never split."""
        assert list(wrap_escaped("ab\\u001bcd", 4)) == ["ab", "\\u001b", "cd"]

    def test_escape_wider_than_budget_still_progresses(self) -> None:
        """Test that an escape longer than the budget gets its own segment."""
        assert list(wrap_escaped("\\u001b\\u001b", 3)) == ["\\u001b", "\\u001b"]

    @pytest.mark.parametrize("max_width", [2, 3, 7, 20])
    def test_every_segment_is_valid_json(self, max_width: int) -> None:
        """Test that each segment decodes on its own and the pieces add up."""
        value = 'say "hi" \\ tab\there \x1b[0m ' * 5
        escaped = json.dumps(value, ensure_ascii=False)[1:-1]

        segments = list(wrap_escaped(escaped, max_width))

        assert "".join(json.loads(f'"{segment}"') for segment in segments) == value
