"""Pydantic domain models for yaml-fm-lint."""

from yaml_fm_lint.models.config import LintConfig, LintOptions
from yaml_fm_lint.models.errors import FIXABLE_KINDS, RULE_MESSAGES, RuleKind, Severity, Violation
from yaml_fm_lint.models.outcome import LintOutcome

__all__ = [
    "FIXABLE_KINDS",
    "LintConfig",
    "LintOptions",
    "LintOutcome",
    "RULE_MESSAGES",
    "RuleKind",
    "Severity",
    "Violation",
]
