"""Console rendering of violations and run summaries."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.text import Text

from yaml_fm_lint.models.errors import Severity, Violation

_LABELS = {Severity.ERROR: "Error", Severity.WARNING: "Warning"}
_STYLES = {Severity.ERROR: "bold red", Severity.WARNING: "bold yellow"}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


class Reporter:
    """Renders diagnostics with rich.

    All file content goes through :class:`rich.text.Text` so brackets in front
    matter are never interpreted as console markup.
    """

    def __init__(
        self,
        console: Console | None = None,
        *,
        quiet: bool = False,
        oneline: bool = False,
        colored: bool = True,
    ) -> None:
        self.console = console or Console(
            no_color=not colored, highlight=False, soft_wrap=True
        )
        self.quiet = quiet
        self.oneline = oneline
        self.colored = colored

    # -- violations ----------------------------------------------------------

    def report(
        self,
        file_path: str,
        severity: Severity,
        message: str,
        violations: Iterable[Violation],
    ) -> None:
        """Render every violation of one rule kind in one file."""
        if self.quiet:
            return
        violations = list(violations)
        if self.oneline:
            for violation in violations:
                self.show_oneline(severity, message, file_path, violation)
            return

        header = Text()
        header.append(f"{_LABELS[severity]}: ", style=_STYLES[severity])
        header.append(message, style="bold")
        header.append(" in ")
        header.append(file_path, style="cyan")
        self.console.print(header)

        for violation in violations:
            if violation.row:
                self.console.print(
                    Text(f"  {_location(file_path, violation)}", style="cyan")
                )
                if violation.snippet:
                    self.console.print(Text(_indent(violation.snippet), style="dim"))
            elif violation.detail:
                self.console.print(Text(f"  {violation.detail}"))
        self.console.print()

    def show_oneline(
        self,
        severity: Severity,
        message: str,
        file_path: str,
        violation: Violation | None = None,
    ) -> None:
        if self.quiet:
            return
        line = Text()
        if violation is not None and violation.row:
            line.append(_location(file_path, violation), style="cyan")
        else:
            line.append(file_path, style="cyan")
        line.append(" ")
        line.append(_LABELS[severity].lower(), style=_STYLES[severity])
        line.append(f" {message}")
        if violation is not None and violation.detail and not violation.row:
            line.append(f": {violation.detail}")
        self.console.print(line)

    # -- run-level output ----------------------------------------------------

    def failure(self, message: str) -> None:
        """Render an escalated traversal failure.  Never suppressed."""
        line = Text()
        line.append("Lint failed: ", style=_STYLES[Severity.ERROR])
        line.append(message)
        self.console.print(line)

    def summary(
        self,
        error_number: int,
        warning_number: int,
        fixable_errors: int = 0,
        *,
        fix: bool = False,
        elapsed: float | None = None,
    ) -> None:
        if warning_number:
            self.console.print(
                Text(f"⚠ {_plural(warning_number, 'warning')} found.", style="yellow")
            )
        if error_number:
            text = f"✘ {_plural(error_number, 'error')} found."
            if fixable_errors and not fix:
                text += (
                    f" {_plural(fixable_errors, 'error')} fixable with the `--fix` option."
                )
            self.console.print(Text(text, style="red"))
        elif not warning_number:
            self.console.print(
                Text("✔ All parsed files have valid front matter.", style="green")
            )
        if elapsed is not None:
            self.console.print(Text(f"Linting took {elapsed * 1000:.0f}ms", style="dim"))


def _location(file_path: str, violation: Violation) -> str:
    if violation.col:
        return f"{file_path}:{violation.row}:{violation.col}"
    return f"{file_path}:{violation.row}"


def _indent(snippet: str) -> str:
    return "\n".join(f"  {line}" for line in snippet.splitlines())
