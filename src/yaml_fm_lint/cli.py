"""Command-line entry point.

Run via::

    yaml-fm-lint docs                  # lint *.md files directly in docs/
    yaml-fm-lint docs -r --fix         # recurse and rewrite front matter
    yaml-fm-lint post.md --no-mandatory --oneline
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from yaml_fm_lint import __version__
from yaml_fm_lint.models.config import LintOptions
from yaml_fm_lint.reporting import Reporter
from yaml_fm_lint.service.runner import run_sync
from yaml_fm_lint.settings import ConfigError, Settings, load_config

logger = logging.getLogger("yaml_fm_lint.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yaml-fm-lint",
        description="Lint and fix YAML front matter in text documents.",
    )
    parser.add_argument("path", help="File or directory to lint")
    parser.add_argument("--fix", action="store_true",
                        help="Rewrite front matter into its canonical form")
    parser.add_argument("--config", help="Path to a .py, .json or .yaml config file")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Descend into subdirectories")
    parser.add_argument("-m", "--mandatory", action=argparse.BooleanOptionalAction,
                        default=None,
                        help="Treat missing front matter as an error (default: from config)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only print the summary")
    parser.add_argument("-o", "--oneline", action="store_true",
                        help="Print one line per violation")
    parser.add_argument("-c", "--colored", action=argparse.BooleanOptionalAction,
                        default=True, help="Colorize output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _normalize_path(raw: str) -> Path:
    """Make paths under the working directory relative, with forward slashes."""
    path = Path(raw.replace("\\", "/"))
    if path.is_absolute():
        try:
            return path.relative_to(Path.cwd())
        except ValueError:
            return path
    return path


def main(argv: list[str] | None = None) -> int:
    """Run the linter with arguments from *argv* and return the exit code."""
    args = build_parser().parse_args(argv)
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
            )
        ],
    )

    reporter = Reporter(quiet=args.quiet, oneline=args.oneline, colored=args.colored)

    try:
        config = load_config(args.config, mandatory=args.mandatory)
    except ConfigError as exc:
        reporter.failure(str(exc))
        return 1

    options = LintOptions(
        fix=args.fix,
        quiet=args.quiet,
        oneline=args.oneline,
        colored=args.colored,
        recursive=args.recursive,
    )
    logger.debug("yaml-fm-lint v%s linting %s", __version__, args.path)

    result = run_sync(_normalize_path(args.path), config, options, reporter, settings)
    reporter.summary(
        result.error_number,
        result.warning_number,
        result.fixable_errors,
        fix=options.fix,
        elapsed=result.elapsed,
    )
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
