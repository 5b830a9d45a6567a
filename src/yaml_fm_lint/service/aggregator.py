"""Run-wide aggregation of per-file outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

from yaml_fm_lint.models.outcome import LintOutcome


@dataclass
class RunContext:
    """Counters for one run, fed with every file outcome as it completes.

    Merging is commutative, so the totals do not depend on the order in which
    files finish.  Not thread-safe: all merges happen on the event loop thread.
    """

    error_number: int = 0
    warning_number: int = 0
    fixable_errors: int = 0
    outcomes: list[LintOutcome] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)

    def merge(self, outcome: LintOutcome) -> None:
        self.error_number += outcome.file_error_count
        self.warning_number += outcome.file_warning_count
        self.fixable_errors += outcome.fixable_errors
        self.outcomes.append(outcome)

    def combine(self, other: RunContext) -> RunContext:
        """Return a new context holding the sum of *self* and *other*."""
        return RunContext(
            error_number=self.error_number + other.error_number,
            warning_number=self.warning_number + other.warning_number,
            fixable_errors=self.fixable_errors + other.fixable_errors,
            outcomes=[*self.outcomes, *other.outcomes],
            failures=[*self.failures, *other.failures],
        )

    def record_failure(self, message: str) -> None:
        """Count an escalated traversal failure as one error."""
        self.error_number += 1
        self.failures.append(message)

    @property
    def failed(self) -> bool:
        return self.error_number > 0


@dataclass(frozen=True)
class RunResult:
    """What a run hands back to its caller."""

    error_number: int
    warning_number: int
    fixable_errors: int
    outcomes: tuple[LintOutcome, ...] = ()
    failures: tuple[str, ...] = ()
    elapsed: float = 0.0

    @classmethod
    def from_context(cls, context: RunContext, elapsed: float = 0.0) -> RunResult:
        return cls(
            error_number=context.error_number,
            warning_number=context.warning_number,
            fixable_errors=context.fixable_errors,
            outcomes=tuple(context.outcomes),
            failures=tuple(context.failures),
            elapsed=elapsed,
        )

    @property
    def exit_code(self) -> int:
        return 1 if self.error_number else 0
