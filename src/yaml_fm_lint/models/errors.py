"""Violation models with front-matter source position tracking."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class RuleKind(StrEnum):
    NO_FRONT_MATTER = "no-front-matter"
    INVALID_YAML = "invalid-yaml"
    MISSING_REQUIRED_ATTRIBUTE = "missing-required-attribute"
    NO_WHITESPACE_BEFORE_COLON = "no-whitespace-before-colon"
    NO_EMPTY_LINES = "no-empty-lines"
    NO_QUOTES = "no-quotes"
    NO_TRAILING_SPACES = "no-trailing-spaces"
    NO_BRACKETS = "no-brackets"
    NO_CURLY_BRACES = "no-curly-braces"
    INDENTATION_JUMP = "indentation-jump"
    NO_TRAILING_COMMAS = "no-trailing-commas"
    REPEATING_WHITESPACE = "repeating-whitespace"
    EXTRA_SPACE_AFTER_COLON = "extra-space-after-colon"
    COMMA_FOLLOWED_BY_CHAR = "comma-followed-by-char"


RULE_MESSAGES: dict[RuleKind, str] = {
    RuleKind.NO_FRONT_MATTER: "front matter not found",
    RuleKind.INVALID_YAML: "front matter is not valid YAML",
    RuleKind.MISSING_REQUIRED_ATTRIBUTE: "missing required attribute",
    RuleKind.NO_WHITESPACE_BEFORE_COLON: "there must be no whitespace before colons",
    RuleKind.NO_EMPTY_LINES: "there must be no empty lines",
    RuleKind.NO_QUOTES: "there must be no quotes in the front matter",
    RuleKind.NO_TRAILING_SPACES: "there must be no trailing spaces",
    RuleKind.NO_BRACKETS: "there must be no brackets",
    RuleKind.NO_CURLY_BRACES: "there must be no curly braces",
    RuleKind.INDENTATION_JUMP: (
        "lines cannot be indented more than 2 spaces from the previous line"
    ),
    RuleKind.NO_TRAILING_COMMAS: "there must be no trailing commas",
    RuleKind.REPEATING_WHITESPACE: "possibly unintended whitespace",
    RuleKind.EXTRA_SPACE_AFTER_COLON: "possibly unintended whitespace after colon",
    RuleKind.COMMA_FOLLOWED_BY_CHAR: "possibly unintended commas",
}

# Error kinds that the auto-fixer's re-serialization repairs.
FIXABLE_KINDS: frozenset[str] = frozenset(
    {
        RuleKind.NO_WHITESPACE_BEFORE_COLON,
        RuleKind.NO_EMPTY_LINES,
        RuleKind.NO_QUOTES,
        RuleKind.NO_TRAILING_SPACES,
        RuleKind.NO_BRACKETS,
        RuleKind.NO_CURLY_BRACES,
        RuleKind.INDENTATION_JUMP,
        RuleKind.NO_TRAILING_COMMAS,
    }
)


class Violation(BaseModel):
    """One occurrence of a rule violation inside a front-matter block.

    ``row`` is the 1-based line number in the file (the block starts at line
    1).  Columns are 1-based; ``col_start``/``col_end`` describe a half-open
    span ``[col_start, col_end)``.  Block-level violations carry no row.
    """

    kind: str
    severity: Severity
    message: str
    row: int | None = None
    col: int | None = None
    col_start: int | None = None
    col_end: int | None = None
    snippet: str | None = None
    detail: str | None = None

    model_config = {"frozen": True}

    @property
    def fixable(self) -> bool:
        return self.severity == Severity.ERROR and self.kind in FIXABLE_KINDS
