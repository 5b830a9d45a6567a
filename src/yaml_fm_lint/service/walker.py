"""File-tree traversal with concurrent per-file linting."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from pathlib import Path
from typing import TypeVar

from yaml_fm_lint.models.outcome import LintOutcome
from yaml_fm_lint.service.aggregator import RunContext
from yaml_fm_lint.service.linter import FrontMatterLinter, TraversalError

logger = logging.getLogger("yaml_fm_lint.walker")

T = TypeVar("T")


class PathNotFoundError(TraversalError):
    """Raised when the path to lint does not exist."""


class InvalidExtensionError(TraversalError):
    """Raised when a single file is linted whose extension is not configured."""


class DirectoryWalker:
    """Finds files under a path and lints them concurrently.

    Each directory fans out one task per entry and waits for all of them.  If
    any task fails, the remaining siblings still run to completion, then the
    first failure is raised to the parent directory.
    """

    def __init__(self, linter: FrontMatterLinter, context: RunContext | None = None) -> None:
        self.linter = linter
        self.config = linter.config
        self.context = context if context is not None else RunContext()

    async def walk(self, path: Path, recursive: bool = False) -> list[LintOutcome]:
        if not path.exists() and not path.is_symlink():
            raise PathNotFoundError(f"{path.as_posix()} does not exist.")
        if recursive:
            return await self._walk_tree(path)
        return await self._walk_flat(path)

    # -- traversal modes -----------------------------------------------------

    async def _walk_flat(self, path: Path) -> list[LintOutcome]:
        if not _is_dir(path):
            if not self.config.matches_extension(path.name):
                raise InvalidExtensionError(
                    f"{path.as_posix()} does not have a valid extension."
                )
            return [await self._lint(path)]

        entries = await self._list_dir(path)
        files = [
            entry
            for entry in entries
            if self.config.matches_extension(entry.name) and not _is_dir(entry)
        ]
        if not files:
            logger.info(
                "No %s files found in %s.",
                ", ".join(self.config.extensions),
                path.resolve().as_posix(),
            )
            return []
        return await _gather_all(self._lint(f) for f in files)

    async def _walk_tree(self, path: Path) -> list[LintOutcome]:
        if not _is_dir(path):
            if self.config.matches_extension(path.name):
                return [await self._lint(path)]
            return []

        if self._is_excluded(path):
            logger.debug("Skipping excluded directory %s", path.as_posix())
            return []

        entries = await self._list_dir(path)
        nested = await _gather_all(self._walk_tree(entry) for entry in entries)
        return [outcome for batch in nested for outcome in batch]

    # -- helpers -------------------------------------------------------------

    def _is_excluded(self, path: Path) -> bool:
        """Excluded unless an include rule also matches; include wins."""
        posix = path.as_posix()
        if not any(posix.endswith(d) for d in self.config.all_excluded_dirs):
            return False
        return not any(posix.endswith(d) for d in self.config.include_dirs)

    async def _lint(self, path: Path) -> LintOutcome:
        outcome = await self.linter.lint_file(path)
        self.context.merge(outcome)
        return outcome

    @staticmethod
    async def _list_dir(path: Path) -> list[Path]:
        try:
            return await asyncio.to_thread(lambda: sorted(path.iterdir()))
        except OSError as exc:
            raise TraversalError(f"Cannot list {path.as_posix()}: {exc}") from exc


async def _gather_all(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Await every awaitable; re-raise the first failure once all have settled."""
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


def _is_dir(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()
