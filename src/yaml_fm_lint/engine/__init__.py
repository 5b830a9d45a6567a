"""Rule engine, snippet rendering, auto-fixing and rule plugins."""

from yaml_fm_lint.engine.fixer import AutoFixer
from yaml_fm_lint.engine.plugins import (
    Affected,
    ExtraRuleHost,
    FunctionPlugin,
    PluginError,
    ReportedIssue,
    RulePlugin,
)
from yaml_fm_lint.engine.rules import RuleEngine, RuleReport
from yaml_fm_lint.engine.snippet import render_snippet

__all__ = [
    "Affected",
    "AutoFixer",
    "ExtraRuleHost",
    "FunctionPlugin",
    "PluginError",
    "ReportedIssue",
    "RuleEngine",
    "RulePlugin",
    "RuleReport",
    "render_snippet",
]
