"""Delimiter-aware text wrapping for long attribute values."""

import re
from collections.abc import Iterator

from rich.cells import get_character_cell_size

# Characters after which a line may be broken.
BREAK_CHARS = frozenset(" /.,\n")

# Escape sequences produced by json.dumps.
JSON_ESCAPE_RE = re.compile(r"\\u[0-9a-fA-F]{4}|\\.")


def wrap(text: str, max_width: int) -> Iterator[str]:
    """Split text into segments no wider than max_width cells.

    Each window of max_width cells is broken right after the last
    delimiter it contains (space, slash, dot, comma or newline). A window
    without delimiters is hard-broken at the width limit. Segments are
    yielded lazily and concatenate back to the original text.

    Args:
        text: Text to split
        max_width: Segment budget in display cells

    Yields:
        Consecutive segments of text.
    """
    return _wrap(text, max_width, frozenset())


def wrap_escaped(text: str, max_width: int) -> Iterator[str]:
    """Like wrap, for JSON-escaped text: no segment ends inside an escape.

    A cut that would split ``\\"`` or ``\\u001b`` moves back to the start
    of the escape, or past its end when the escape opens the window.
    """
    blocked = frozenset(
        index
        for match in JSON_ESCAPE_RE.finditer(text)
        for index in range(match.start() + 1, match.end())
    )
    return _wrap(text, max_width, blocked)


def _wrap(text: str, max_width: int, blocked: frozenset[int]) -> Iterator[str]:
    if max_width <= 0 or not text:
        yield text
        return

    start = 0
    length = len(text)
    while start < length:
        end = _window_end(text, start, max_width)
        if end >= length:
            yield text[start:]
            return
        cut = _last_break(text, start, end)
        while cut in blocked and cut > start + 1:
            cut -= 1
        while cut in blocked:
            cut += 1
        if cut >= length:
            yield text[start:]
            return
        yield text[start:cut]
        start = cut


def _window_end(text: str, start: int, max_width: int) -> int:
    """Index one past the last character fitting in max_width cells."""
    used = 0
    index = start
    while index < len(text):
        size = get_character_cell_size(text[index])
        if used + size > max_width:
            break
        used += size
        index += 1
    # Always make progress, even on a character wider than the budget.
    return max(index, start + 1)


def _last_break(text: str, start: int, end: int) -> int:
    """Break position after the last delimiter in text[start:end]."""
    for index in range(end - 1, start - 1, -1):
        if text[index] in BREAK_CHARS:
            return index + 1
    return end
