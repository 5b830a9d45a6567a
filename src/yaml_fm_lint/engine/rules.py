"""Line-by-line style rules for front-matter blocks."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from yaml_fm_lint.engine.snippet import render_snippet
from yaml_fm_lint.models.errors import RULE_MESSAGES, RuleKind, Severity, Violation
from yaml_fm_lint.parser.frontmatter import FrontMatterBlock

_ATTRIBUTE_RE = re.compile(r"""^["']?([\w.-]+)["']?\s*:""")
_WHITESPACE_BEFORE_COLON_RE = re.compile(r"([ \t]+):")
_QUOTE_RE = re.compile(r"""['"]""")
_TRAILING_WHITESPACE_RE = re.compile(r"\s+$")
_BRACKET_RE = re.compile(r"[\[\]]")
_CURLY_BRACE_RE = re.compile(r"[{}]")
_TRAILING_COMMA_RE = re.compile(r",\s*$")
# A run directly after a colon belongs to the space-after-colon rule.
_REPEATING_WHITESPACE_RE = re.compile(r"(?<=[^\s:])([ \t]{2,})(?=\S)")
_SPACE_AFTER_COLON_RE = re.compile(r":([ \t]{2,})(?=\S)")
_COMMA_FOLLOWED_BY_CHAR_RE = re.compile(r",(?=\S)")

_MAX_INDENT_STEP = 2

_WARNING_KINDS = frozenset(
    {
        RuleKind.REPEATING_WHITESPACE,
        RuleKind.EXTRA_SPACE_AFTER_COLON,
        RuleKind.COMMA_FOLLOWED_BY_CHAR,
    }
)


@dataclass
class RuleReport:
    """Violations of one file, grouped by severity and rule kind."""

    errors: dict[str, list[Violation]] = field(default_factory=dict)
    warnings: dict[str, list[Violation]] = field(default_factory=dict)

    def add(self, violation: Violation) -> None:
        target = self.errors if violation.severity == Severity.ERROR else self.warnings
        target.setdefault(violation.kind, []).append(violation)

    def extend(self, other: RuleReport) -> None:
        for violations in (*other.errors.values(), *other.warnings.values()):
            for violation in violations:
                self.add(violation)

    @property
    def error_count(self) -> int:
        return sum(len(v) for v in self.errors.values())

    @property
    def warning_count(self) -> int:
        return sum(len(v) for v in self.warnings.values())


class RuleEngine:
    """Runs the fixed catalogue of style rules over a front-matter block.

    Every body line is checked by every rule in a fixed order; rules are
    independent of each other, except that an empty line is reported once and
    skips the remaining checks.  In fix mode only the required-attribute check
    and the warning rules run, since re-serialization repairs everything else.
    """

    def __init__(self, required_attributes: Iterable[str] = (), fix: bool = False) -> None:
        self._required = list(dict.fromkeys(required_attributes))
        self._fix = fix

    def run(self, block: FrontMatterBlock) -> RuleReport:
        report = RuleReport()
        seen_attributes: set[str] = set()
        prev_indent = 0

        for row in block.body_rows:
            line = block.lines[row]

            match = _ATTRIBUTE_RE.match(line)
            if match:
                seen_attributes.add(match.group(1))

            if not line.strip():
                if not self._fix:
                    report.add(self._violation(RuleKind.NO_EMPTY_LINES, block, row, col=1))
                continue

            for violation in self._check_line(block, row, line, prev_indent):
                report.add(violation)
            prev_indent = _indentation(line)

        for name in self._required:
            if name not in seen_attributes:
                kind = RuleKind.MISSING_REQUIRED_ATTRIBUTE
                report.add(
                    Violation(
                        kind=kind.value,
                        severity=Severity.ERROR,
                        message=RULE_MESSAGES[kind],
                        detail=name,
                    )
                )
        return report

    # -- per-line rules ------------------------------------------------------

    def _check_line(
        self, block: FrontMatterBlock, row: int, line: str, prev_indent: int
    ) -> Iterator[Violation]:
        if not self._fix:
            yield from self._whitespace_before_colon(block, row, line)
            yield from self._quotes(block, row, line)
            yield from self._trailing_spaces(block, row, line)
            yield from self._brackets(block, row, line)
            yield from self._curly_braces(block, row, line)
            yield from self._indentation_jump(block, row, line, prev_indent)
            yield from self._trailing_commas(block, row, line)
        yield from self._repeating_whitespace(block, row, line)
        yield from self._extra_space_after_colon(block, row, line)
        yield from self._comma_followed_by_char(block, row, line)

    def _whitespace_before_colon(
        self, block: FrontMatterBlock, row: int, line: str
    ) -> Iterator[Violation]:
        for m in _WHITESPACE_BEFORE_COLON_RE.finditer(line):
            colon = m.end(1) + 1
            yield self._violation(
                RuleKind.NO_WHITESPACE_BEFORE_COLON,
                block,
                row,
                col=colon,
                col_start=m.start(1) + 1,
                col_end=colon,
            )

    def _quotes(self, block: FrontMatterBlock, row: int, line: str) -> Iterator[Violation]:
        for m in _QUOTE_RE.finditer(line):
            yield self._violation(RuleKind.NO_QUOTES, block, row, col=m.start() + 1)

    def _trailing_spaces(
        self, block: FrontMatterBlock, row: int, line: str
    ) -> Iterator[Violation]:
        m = _TRAILING_WHITESPACE_RE.search(line)
        if m:
            col_end = len(line) + 1
            col_start = col_end - len(m.group())
            yield self._violation(
                RuleKind.NO_TRAILING_SPACES,
                block,
                row,
                col=col_start,
                col_start=col_start,
                col_end=col_end,
            )

    def _brackets(self, block: FrontMatterBlock, row: int, line: str) -> Iterator[Violation]:
        for m in _BRACKET_RE.finditer(line):
            yield self._violation(RuleKind.NO_BRACKETS, block, row, col=m.start() + 1)

    def _curly_braces(
        self, block: FrontMatterBlock, row: int, line: str
    ) -> Iterator[Violation]:
        for m in _CURLY_BRACE_RE.finditer(line):
            yield self._violation(RuleKind.NO_CURLY_BRACES, block, row, col=m.start() + 1)

    def _indentation_jump(
        self, block: FrontMatterBlock, row: int, line: str, prev_indent: int
    ) -> Iterator[Violation]:
        indent = _indentation(line)
        if indent > 0 and indent - prev_indent > _MAX_INDENT_STEP:
            yield self._violation(
                RuleKind.INDENTATION_JUMP,
                block,
                row,
                col=indent + 1,
                col_start=1,
                col_end=indent + 1,
            )

    def _trailing_commas(
        self, block: FrontMatterBlock, row: int, line: str
    ) -> Iterator[Violation]:
        m = _TRAILING_COMMA_RE.search(line)
        if m:
            yield self._violation(
                RuleKind.NO_TRAILING_COMMAS,
                block,
                row,
                col=len(line) + 1,
                col_start=m.start() + 1,
                col_end=len(line) + 1,
            )

    def _repeating_whitespace(
        self, block: FrontMatterBlock, row: int, line: str
    ) -> Iterator[Violation]:
        for m in _REPEATING_WHITESPACE_RE.finditer(line):
            yield self._violation(
                RuleKind.REPEATING_WHITESPACE,
                block,
                row,
                col=m.start(1) + 1,
                col_start=m.start(1) + 1,
                col_end=m.end(1) + 1,
            )

    def _extra_space_after_colon(
        self, block: FrontMatterBlock, row: int, line: str
    ) -> Iterator[Violation]:
        for m in _SPACE_AFTER_COLON_RE.finditer(line):
            yield self._violation(
                RuleKind.EXTRA_SPACE_AFTER_COLON,
                block,
                row,
                col=m.start(1) + 1,
                col_start=m.start(1) + 1,
                col_end=m.end(1) + 1,
            )

    def _comma_followed_by_char(
        self, block: FrontMatterBlock, row: int, line: str
    ) -> Iterator[Violation]:
        for m in _COMMA_FOLLOWED_BY_CHAR_RE.finditer(line):
            yield self._violation(
                RuleKind.COMMA_FOLLOWED_BY_CHAR, block, row, col=m.start() + 1
            )

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _violation(
        kind: RuleKind,
        block: FrontMatterBlock,
        row: int,
        col: int,
        col_start: int | None = None,
        col_end: int | None = None,
    ) -> Violation:
        return Violation(
            kind=kind.value,
            severity=Severity.WARNING if kind in _WARNING_KINDS else Severity.ERROR,
            message=RULE_MESSAGES[kind],
            row=row,
            col=col,
            col_start=col_start,
            col_end=col_end,
            snippet=render_snippet(block.lines, row, col),
        )


def _indentation(line: str) -> int:
    return len(line) - len(line.lstrip())
