"""Lint configuration and per-invocation options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_EXTENSIONS = [".md"]
DEFAULT_EXCLUDE_DIRS = ["node_modules", ".git"]


class LintConfig(BaseModel):
    """Resolved configuration for one run.  Treated as read-only by the core.

    Field aliases follow the camelCase keys used in ``.yaml-fm-lint.*`` files.
    """

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS), alias="excludeDirs"
    )
    include_dirs: list[str] = Field(default_factory=list, alias="includeDirs")
    extra_exclude_dirs: list[str] = Field(default_factory=list, alias="extraExcludeDirs")
    required_attributes: list[str] = Field(default_factory=list, alias="requiredAttributes")
    mandatory: bool = True
    extra_lint_fns: list[Any] = Field(default_factory=list, alias="extraLintFns")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("exclude_dirs", "include_dirs", "extra_exclude_dirs")
    @classmethod
    def _strip_trailing_slashes(cls, values: list[str]) -> list[str]:
        return [v.rstrip("/") if len(v) > 1 else v for v in values]

    @property
    def all_excluded_dirs(self) -> list[str]:
        return [*self.exclude_dirs, *self.extra_exclude_dirs]

    def matches_extension(self, name: str) -> bool:
        return any(name.endswith(ext) for ext in self.extensions)


@dataclass(frozen=True)
class LintOptions:
    """Switches for a single invocation (normally taken from the command line)."""

    fix: bool = False
    quiet: bool = False
    oneline: bool = False
    colored: bool = True
    recursive: bool = False
