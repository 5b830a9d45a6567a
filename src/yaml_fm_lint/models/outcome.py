"""Per-file lint outcome."""

from __future__ import annotations

from pydantic import BaseModel

from yaml_fm_lint.models.errors import Violation


class LintOutcome(BaseModel):
    """Result of linting one file.  Created once per file, never mutated."""

    file_path: str
    file_error_count: int = 0
    file_warning_count: int = 0
    errors_by_kind: dict[str, list[Violation]] = {}
    warnings_by_kind: dict[str, list[Violation]] = {}
    fixed: bool = False

    model_config = {"frozen": True}

    @property
    def fixable_errors(self) -> int:
        return sum(
            1
            for violations in self.errors_by_kind.values()
            for violation in violations
            if violation.fixable
        )

    @property
    def clean(self) -> bool:
        return self.file_error_count == 0 and self.file_warning_count == 0
