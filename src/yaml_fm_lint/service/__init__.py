"""Per-file linting, traversal, aggregation and run orchestration."""

from yaml_fm_lint.service.aggregator import RunContext, RunResult
from yaml_fm_lint.service.linter import (
    FileReadError,
    FileResult,
    FileWriteError,
    FrontMatterLinter,
    TraversalError,
    lint_text,
)
from yaml_fm_lint.service.runner import run, run_sync
from yaml_fm_lint.service.walker import DirectoryWalker, InvalidExtensionError, PathNotFoundError

__all__ = [
    "DirectoryWalker",
    "FileReadError",
    "FileResult",
    "FileWriteError",
    "FrontMatterLinter",
    "InvalidExtensionError",
    "PathNotFoundError",
    "RunContext",
    "RunResult",
    "TraversalError",
    "lint_text",
    "run",
    "run_sync",
]
