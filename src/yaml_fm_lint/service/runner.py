"""Orchestrates a full run: Config → Walk → Lint/Fix → Aggregate."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from yaml_fm_lint.engine.plugins import PluginError
from yaml_fm_lint.models.config import LintConfig, LintOptions
from yaml_fm_lint.parser.loader import AttributeParser
from yaml_fm_lint.reporting import Reporter
from yaml_fm_lint.service.aggregator import RunContext, RunResult
from yaml_fm_lint.service.linter import FrontMatterLinter, TraversalError
from yaml_fm_lint.service.walker import DirectoryWalker
from yaml_fm_lint.settings import Settings

logger = logging.getLogger("yaml_fm_lint.runner")


async def run(
    path: str | Path,
    config: LintConfig | None = None,
    options: LintOptions | None = None,
    reporter: Reporter | None = None,
    settings: Settings | None = None,
) -> RunResult:
    """Lint every matching file under *path* and return the run totals.

    Traversal failures (unreadable files, bad paths, failing plugins) do not
    raise: they are printed, counted as one error and end the run early.
    """
    settings = settings or Settings()
    options = options or LintOptions()
    reporter = reporter or Reporter(
        quiet=options.quiet, oneline=options.oneline, colored=options.colored
    )
    linter = FrontMatterLinter(
        config,
        options,
        reporter,
        parser=AttributeParser(settings.max_document_size),
        max_concurrency=settings.max_concurrency,
    )
    context = RunContext()
    walker = DirectoryWalker(linter, context)

    started = time.perf_counter()
    try:
        await walker.walk(Path(path), recursive=options.recursive)
    except (TraversalError, PluginError) as exc:
        logger.debug("Run aborted", exc_info=True)
        reporter.failure(str(exc))
        context.record_failure(str(exc))
    elapsed = time.perf_counter() - started

    logger.debug(
        "Linted %d file(s): %d error(s), %d warning(s)",
        len(context.outcomes),
        context.error_number,
        context.warning_number,
    )
    return RunResult.from_context(context, elapsed)


def run_sync(
    path: str | Path,
    config: LintConfig | None = None,
    options: LintOptions | None = None,
    reporter: Reporter | None = None,
    settings: Settings | None = None,
) -> RunResult:
    """Blocking wrapper around :func:`run`."""
    return asyncio.run(run(path, config, options, reporter, settings))
