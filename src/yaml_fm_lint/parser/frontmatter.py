"""Locate the front-matter block at the top of a document."""

from __future__ import annotations

from dataclasses import dataclass

DELIMITER = "---"


@dataclass(frozen=True)
class FrontMatterBlock:
    """The delimited front-matter region of a file.

    ``lines[0]`` is an empty sentinel so that ``lines[n]`` is line ``n`` of the
    file; ``lines[1]`` is the opening delimiter and ``lines[closing_row]`` the
    closing one.  ``tail`` is everything after the closing delimiter line,
    exactly as it appeared in the file.
    """

    lines: list[str]
    closing_row: int
    tail: str = ""
    has_tail: bool = False

    @property
    def body_rows(self) -> range:
        return range(2, self.closing_row)

    @property
    def body_lines(self) -> list[str]:
        return self.lines[2 : self.closing_row]

    @property
    def body_text(self) -> str:
        return "\n".join(self.body_lines)

    def line(self, row: int) -> str | None:
        """Return line ``row`` of the block, or ``None`` outside of it."""
        if 1 <= row <= self.closing_row:
            return self.lines[row]
        return None


def split_lines(text: str) -> tuple[list[str], list[str]]:
    """Split *text* into ``(normalized, raw)`` line lists.

    Normalized lines have a sentinel prepended and their ``\\r`` terminator
    removed; raw lines are the untouched ``\\n``-separated parts.
    """
    raw = text.split("\n")
    normalized = [""] + [part[:-1] if part.endswith("\r") else part for part in raw]
    return normalized, raw


def locate_front_matter(text: str) -> FrontMatterBlock | None:
    """Find the front-matter block in *text*, or ``None`` when there is none.

    The block is present when line 1 starts with ``---`` and a later line
    (line 2 or beyond) is exactly ``---``.
    """
    lines, raw = split_lines(text)
    if not lines[1].startswith(DELIMITER):
        return None
    try:
        closing_row = lines.index(DELIMITER, 2)
    except ValueError:
        return None

    # raw[closing_row - 1] is the closing delimiter itself.
    has_tail = closing_row < len(raw)
    tail = "\n".join(raw[closing_row:]) if has_tail else ""
    return FrontMatterBlock(
        lines=lines[: closing_row + 1],
        closing_row=closing_row,
        tail=tail,
        has_tail=has_tail,
    )
