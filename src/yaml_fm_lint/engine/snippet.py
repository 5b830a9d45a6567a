"""Three-line context snippets for diagnostics."""

from __future__ import annotations

from collections.abc import Sequence


def render_snippet(lines: Sequence[str], row: int, col: int | None = None) -> str:
    """Render the line before, line *row* with a caret under *col*, and the line after.

    *lines* is indexed by file line number (index 0 is a sentinel), so the
    block's own ``lines`` can be passed directly.  Returns an empty string when
    *row* is outside of *lines*.

        1 | ---
        2 | title: 'Hello'
        -----------^
        3 | ---
    """
    if not 1 <= row < len(lines):
        return ""
    rows = [r for r in (row - 1, row, row + 1) if 1 <= r < len(lines)]
    width = len(str(rows[-1]))
    gutter = width + len(" | ")

    out: list[str] = []
    for r in rows:
        out.append(f"{r:>{width}} | {lines[r]}")
        if r == row:
            out.append("-" * (gutter + max(col or 1, 1) - 1) + "^")
    return "\n".join(out)
