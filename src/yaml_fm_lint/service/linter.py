"""Per-file lint orchestration: locate, parse, check, fix, report."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from yaml_fm_lint.engine.fixer import AutoFixer
from yaml_fm_lint.engine.plugins import ExtraRuleHost
from yaml_fm_lint.engine.rules import RuleEngine, RuleReport
from yaml_fm_lint.engine.snippet import render_snippet
from yaml_fm_lint.models.config import LintConfig, LintOptions
from yaml_fm_lint.models.errors import RULE_MESSAGES, RuleKind, Severity, Violation
from yaml_fm_lint.models.outcome import LintOutcome
from yaml_fm_lint.parser.frontmatter import FrontMatterBlock, locate_front_matter
from yaml_fm_lint.parser.loader import AttributeParser, FrontMatterParseError
from yaml_fm_lint.reporting import Reporter

logger = logging.getLogger("yaml_fm_lint.linter")

_DEFAULT_MAX_CONCURRENCY = 64
_NO_FRONT_MATTER_HINT = "Make sure front matter is at the beginning of the file."
_KIND_ORDER = {kind.value: i for i, kind in enumerate(RuleKind)}


class TraversalError(Exception):
    """Raised when a path cannot be processed.  Aborts the enclosing batch."""


class FileReadError(TraversalError):
    """Raised when a file cannot be read or decoded."""


class FileWriteError(TraversalError):
    """Raised when a fixed file cannot be written back."""


@dataclass(frozen=True)
class FileResult:
    """Outcome of linting one text, plus the rewritten text in fix mode."""

    outcome: LintOutcome
    fixed_text: str | None = None


class FrontMatterLinter:
    """Lints the front matter of single files.

    The synchronous :meth:`lint_text` does all the work on text already in
    memory; :meth:`lint_file` adds the file-system reads and writes, which are
    the only points where it yields to the event loop.
    """

    def __init__(
        self,
        config: LintConfig | None = None,
        options: LintOptions | None = None,
        reporter: Reporter | None = None,
        *,
        parser: AttributeParser | None = None,
        max_concurrency: int = _DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        self.config = config or LintConfig()
        self.options = options or LintOptions()
        self.reporter = reporter or Reporter(
            quiet=self.options.quiet,
            oneline=self.options.oneline,
            colored=self.options.colored,
        )
        self._parser = parser or AttributeParser()
        self._fixer = AutoFixer(self._parser)
        self._engine = RuleEngine(self.config.required_attributes, fix=self.options.fix)
        self._plugins = ExtraRuleHost(self.config.extra_lint_fns)
        self._semaphore = asyncio.Semaphore(max_concurrency)

    # -- in-memory linting ---------------------------------------------------

    def lint_text(self, text: str, file_path: str = "<string>") -> FileResult:
        block = locate_front_matter(text)
        if block is None:
            return FileResult(self._no_front_matter(file_path))

        try:
            attributes = self._parser.load(block.body_text)
        except FrontMatterParseError as exc:
            return FileResult(self._parse_failure(block, exc, file_path))

        report = self._engine.run(block)

        fixed_text: str | None = None
        checked_block = block
        if self.options.fix:
            fixed_lines = self._fixer.fix(attributes)
            checked_block = self._fixer.as_block(fixed_lines)
            fixed_text = self._fixer.apply(block, fixed_lines)
            if fixed_text == text:
                fixed_text = None

        if self._plugins:
            report.extend(self._plugins.run(attributes, checked_block, file_path))

        errors = _ordered(report.errors)
        warnings = _ordered(report.warnings)
        self._render(file_path, Severity.ERROR, errors)
        self._render(file_path, Severity.WARNING, warnings)

        return FileResult(
            LintOutcome(
                file_path=file_path,
                file_error_count=report.error_count,
                file_warning_count=report.warning_count,
                errors_by_kind=errors,
                warnings_by_kind=warnings,
                fixed=fixed_text is not None,
            ),
            fixed_text,
        )

    # -- file-system linting -------------------------------------------------

    async def lint_file(self, path: Path) -> LintOutcome:
        file_path = path.as_posix()
        async with self._semaphore:
            try:
                text = await asyncio.to_thread(_read_text, path)
            except (OSError, UnicodeDecodeError) as exc:
                raise FileReadError(f"Cannot read {file_path}: {exc}") from exc

        result = self.lint_text(text, file_path)

        if result.fixed_text is not None:
            async with self._semaphore:
                try:
                    await asyncio.to_thread(_write_text, path, result.fixed_text)
                except OSError as exc:
                    raise FileWriteError(f"Cannot write {file_path}: {exc}") from exc
            logger.debug("Rewrote front matter of %s", file_path)
        return result.outcome

    # -- failure outcomes ----------------------------------------------------

    def _no_front_matter(self, file_path: str) -> LintOutcome:
        severity = Severity.ERROR if self.config.mandatory else Severity.WARNING
        kind = RuleKind.NO_FRONT_MATTER
        violation = Violation(
            kind=kind.value,
            severity=severity,
            message=RULE_MESSAGES[kind],
            detail=_NO_FRONT_MATTER_HINT,
        )
        self._render(file_path, severity, {kind.value: [violation]})

        by_kind = {kind.value: [violation]}
        if severity == Severity.ERROR:
            return LintOutcome(file_path=file_path, file_error_count=1, errors_by_kind=by_kind)
        return LintOutcome(file_path=file_path, file_warning_count=1, warnings_by_kind=by_kind)

    def _parse_failure(
        self, block: FrontMatterBlock, exc: FrontMatterParseError, file_path: str
    ) -> LintOutcome:
        # Marks are relative to the body, which starts on line 2 of the file.
        row = exc.line + 2 if exc.line is not None else None
        col = exc.column + 1 if exc.column is not None else None
        violation = Violation(
            kind=RuleKind.INVALID_YAML.value,
            severity=Severity.ERROR,
            message=exc.message,
            row=row,
            col=col,
            snippet=(render_snippet(block.lines, row, col) or None) if row else None,
        )
        by_kind = {RuleKind.INVALID_YAML.value: [violation]}
        self._render(file_path, Severity.ERROR, by_kind)
        return LintOutcome(file_path=file_path, file_error_count=1, errors_by_kind=by_kind)

    # -- helpers -------------------------------------------------------------

    def _render(
        self, file_path: str, severity: Severity, by_kind: dict[str, list[Violation]]
    ) -> None:
        for violations in by_kind.values():
            self.reporter.report(file_path, severity, violations[0].message, violations)


def _ordered(by_kind: dict[str, list[Violation]]) -> dict[str, list[Violation]]:
    """Sort rule kinds into catalogue order; plugin messages keep theirs, last."""
    return dict(sorted(by_kind.items(), key=lambda item: _KIND_ORDER.get(item[0], len(_KIND_ORDER))))


def _read_text(path: Path) -> str:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_text(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def lint_text(
    text: str,
    config: LintConfig | None = None,
    options: LintOptions | None = None,
    file_path: str = "<string>",
) -> FileResult:
    """Lint *text* without touching the file system.  Output is quiet unless *options* say otherwise."""
    options = options or LintOptions(quiet=True)
    return FrontMatterLinter(config, options).lint_text(text, file_path)
