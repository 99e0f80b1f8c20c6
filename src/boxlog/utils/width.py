"""Display-width helpers for box layout.

All measurements are in terminal cells: wide characters and emoji count
as two cells, combining marks and ANSI escape sequences as zero.
"""

import re

from rich.cells import cell_len, get_character_cell_size

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")
ANSI_RESET = "\x1b[0m"

# Appended to odd-remainder centered text so both paddings are equal.
NARROW_SPACE = "\u202f"


def strip_ansi(text: str) -> str:
    """Remove color/style escape sequences."""
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Number of terminal cells occupied by text once printed."""
    return cell_len(strip_ansi(text))


def truncate_cells(text: str, width: int, ellipsis: str = "…") -> str:
    """Cut text to at most width cells, keeping escape sequences intact.

    Args:
        text: Text that may contain ANSI escape sequences
        width: Maximum display width
        ellipsis: Marker appended when something was cut

    Returns:
        The original text if it fits, otherwise a truncated copy ending
        with the ellipsis (and a style reset if any style was open).
    """
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text

    ellipsis_width = cell_len(ellipsis)
    if ellipsis_width > width:
        ellipsis, ellipsis_width = "", 0
    budget = width - ellipsis_width

    parts: list[str] = []
    used = 0
    styled = False
    position = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        plain = text[position : match.start()]
        consumed, used = _take_cells(plain, budget, used)
        parts.append(consumed)
        if len(consumed) < len(plain):
            break
        parts.append(match.group())
        styled = True
        position = match.end()
    else:
        consumed, used = _take_cells(text[position:], budget, used)
        parts.append(consumed)

    result = "".join(parts) + ellipsis
    if styled:
        result += ANSI_RESET
    return result


def _take_cells(plain: str, budget: int, used: int) -> tuple[str, int]:
    """Take characters from plain while they fit in the remaining budget."""
    taken = 0
    for char in plain:
        size = get_character_cell_size(char)
        if used + size > budget:
            break
        used += size
        taken += 1
    return plain[:taken], used


def truncate_left(text: str, width: int, prefix: str = "...") -> str:
    """Keep the rightmost part of text, marking the cut with prefix.

    Used for file paths where the file name matters more than the
    leading directories.
    """
    if width <= 0:
        return ""
    if cell_len(text) <= width:
        return text
    budget = width - cell_len(prefix)
    if budget <= 0:
        return prefix[:width]

    kept: list[str] = []
    used = 0
    for char in reversed(text):
        size = get_character_cell_size(char)
        if used + size > budget:
            break
        used += size
        kept.append(char)
    return prefix + "".join(reversed(kept))


def center_text(text: str, width: int, fill: str = " ") -> str:
    """Center text between runs of fill with symmetric padding.

    When the leftover space is odd a narrow space is appended to the text
    so that the left and right fill runs have the same length.
    """
    text_width = display_width(text)
    if text_width >= width:
        return text
    if (width - text_width) % 2:
        text += NARROW_SPACE
        text_width += cell_len(NARROW_SPACE)
    side = max((width - text_width) // 2, 0)
    return fill * side + text + fill * side


def pad_right(text: str, width: int, fill: str = " ") -> str:
    """Pad text with fill up to width cells (never truncates)."""
    missing = width - display_width(text)
    if missing <= 0:
        return text
    return text + fill * missing
