"""Extension point for caller-supplied rule plugins.

A plugin is any object with ``evaluate(attributes, lines)`` returning
``ReportedIssue`` items.  Plain functions written in callback style are
accepted too and wrapped in :class:`FunctionPlugin`::

    def require_draft_flag(attributes, lines, report):
        if "draft" not in attributes:
            report("warning", "draft flag is not set")

Both receive the parsed attributes and the block lines, indexed by file line
number (``lines[0]`` is an empty sentinel, ``lines[1]`` the opening ``---``).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from yaml_fm_lint.engine.rules import RuleReport
from yaml_fm_lint.engine.snippet import render_snippet
from yaml_fm_lint.models.errors import Severity, Violation
from yaml_fm_lint.parser.frontmatter import FrontMatterBlock

FILE_LEVEL_ROW = 0


class PluginError(Exception):
    """Raised when a rule plugin fails while evaluating a file."""

    def __init__(self, plugin: str, file_path: str, cause: BaseException) -> None:
        self.plugin = plugin
        self.file_path = file_path
        self.cause = cause
        super().__init__(f"Rule plugin '{plugin}' failed on {file_path}: {cause}")


@dataclass(frozen=True)
class Affected:
    """Where a plugin issue applies.  All fields are optional."""

    row: int | None = None
    col: int | None = None
    snippet: str | None = None


@dataclass(frozen=True)
class ReportedIssue:
    severity: Severity
    message: str
    affected: Affected | None = None


@runtime_checkable
class RulePlugin(Protocol):
    def evaluate(
        self, attributes: dict[str, Any], lines: list[str]
    ) -> Iterable[ReportedIssue]: ...


ReportCallback = Callable[..., None]


class FunctionPlugin:
    """Adapts a ``fn(attributes, lines, report)`` callback-style rule."""

    def __init__(self, fn: Callable[..., Any], name: str | None = None) -> None:
        self._fn = fn
        self.name = name or getattr(fn, "__name__", repr(fn))

    def evaluate(
        self, attributes: dict[str, Any], lines: list[str]
    ) -> list[ReportedIssue]:
        issues: list[ReportedIssue] = []

        def report(severity: str, message: str, affected: Any = None) -> None:
            issues.append(
                ReportedIssue(
                    severity=Severity(str(severity).lower()),
                    message=message,
                    affected=coerce_affected(affected),
                )
            )

        self._fn(attributes=attributes, lines=lines, report=report)
        return issues


def coerce_affected(affected: Any) -> Affected | None:
    """Accept an :class:`Affected`, a mapping with row/col/snippet keys, or a bare row."""
    if affected is None or isinstance(affected, Affected):
        return affected
    if isinstance(affected, Mapping):
        return Affected(
            row=affected.get("row"),
            col=affected.get("col"),
            snippet=affected.get("snippet"),
        )
    if isinstance(affected, int):
        return Affected(row=affected)
    if isinstance(affected, str):
        return Affected(snippet=affected)
    raise TypeError(f"Unsupported affected location: {affected!r}")


def as_plugin(candidate: Any) -> RulePlugin:
    if isinstance(candidate, RulePlugin):
        return candidate
    if callable(candidate):
        return FunctionPlugin(candidate)
    raise TypeError(f"Not a rule plugin: {candidate!r}")


def plugin_name(plugin: Any) -> str:
    return getattr(plugin, "name", None) or type(plugin).__name__


class ExtraRuleHost:
    """Runs rule plugins and folds their issues into a :class:`RuleReport`.

    Issues are keyed by their message text.  An issue without a row is a
    file-level issue and is recorded at row 0.
    """

    def __init__(self, plugins: Iterable[Any] = ()) -> None:
        self._plugins = [as_plugin(p) for p in plugins]

    def __bool__(self) -> bool:
        return bool(self._plugins)

    def run(
        self, attributes: dict[str, Any], block: FrontMatterBlock, file_path: str
    ) -> RuleReport:
        report = RuleReport()
        for plugin in self._plugins:
            try:
                issues = list(plugin.evaluate(attributes, list(block.lines)))
            except Exception as exc:
                raise PluginError(plugin_name(plugin), file_path, exc) from exc
            for issue in issues:
                report.add(self._to_violation(issue, block))
        return report

    @staticmethod
    def _to_violation(issue: ReportedIssue, block: FrontMatterBlock) -> Violation:
        affected = issue.affected or Affected()
        row = affected.row or FILE_LEVEL_ROW
        col = affected.col if row else None
        snippet = affected.snippet
        if snippet is None and row:
            snippet = render_snippet(block.lines, row, col) or None
        return Violation(
            kind=issue.message,
            severity=issue.severity,
            message=issue.message,
            row=row,
            col=col,
            snippet=snippet,
        )
