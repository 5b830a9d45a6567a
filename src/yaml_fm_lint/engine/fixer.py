"""Regenerate a canonical front-matter block from parsed attributes."""

from __future__ import annotations

import re
from typing import Any

from yaml_fm_lint.parser.frontmatter import DELIMITER, FrontMatterBlock
from yaml_fm_lint.parser.loader import AttributeParser

_TRAILING_COMMA_RE = re.compile(r"\s*,$")


class AutoFixer:
    """Re-serializes attributes and splices them back in front of the body.

    Only the delimited region is replaced; the text after the closing
    delimiter is copied unchanged.
    """

    def __init__(self, parser: AttributeParser | None = None) -> None:
        self._parser = parser or AttributeParser()

    def fix(self, attributes: dict[str, Any]) -> list[str]:
        """Return the corrected block as lines, delimiters included."""
        body = [_TRAILING_COMMA_RE.sub("", line) for line in self._parser.dump(attributes)]
        return [DELIMITER, *body, DELIMITER]

    @staticmethod
    def apply(block: FrontMatterBlock, fixed_lines: list[str]) -> str:
        """Return the full file text with *fixed_lines* replacing the block."""
        front = "\n".join(fixed_lines)
        if not block.has_tail:
            return front
        return f"{front}\n{block.tail}"

    @staticmethod
    def as_block(fixed_lines: list[str]) -> FrontMatterBlock:
        """Wrap fixed lines in a block (sentinel included) for further rule runs."""
        return FrontMatterBlock(lines=["", *fixed_lines], closing_row=len(fixed_lines))
