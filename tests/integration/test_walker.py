"""Integration tests for directory traversal and full runs on disk."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from yaml_fm_lint.models.config import LintConfig, LintOptions
from yaml_fm_lint.reporting import Reporter
from yaml_fm_lint.service.aggregator import RunContext
from yaml_fm_lint.service.linter import FileReadError, FrontMatterLinter
from yaml_fm_lint.service.runner import run, run_sync
from yaml_fm_lint.service.walker import (
    DirectoryWalker,
    InvalidExtensionError,
    PathNotFoundError,
)
from tests.conftest import (
    MALFORMED_DOC,
    NO_FRONT_MATTER_DOC,
    QUOTED_DOC,
    VALID_DOC,
    write_tree,
)

QUIET = LintOptions(quiet=True)


def make_walker(
    config: LintConfig | None = None, options: LintOptions = QUIET
) -> DirectoryWalker:
    return DirectoryWalker(FrontMatterLinter(config, options))


def linted(outcomes) -> list[str]:
    return sorted(Path(o.file_path).name for o in outcomes)


def buffered_reporter(**kwargs) -> tuple[Reporter, io.StringIO]:
    buffer = io.StringIO()
    console = Console(file=buffer, no_color=True, highlight=False, soft_wrap=True, width=200)
    return Reporter(console, **kwargs), buffer


# ---------------------------------------------------------------------------
# Flat traversal
# ---------------------------------------------------------------------------


class TestFlatWalk:
    async def test_lints_matching_files_in_directory(self, tmp_path: Path) -> None:
        write_tree(
            tmp_path,
            {
                "a.md": VALID_DOC,
                "b.md": QUOTED_DOC,
                "notes.txt": QUOTED_DOC,
                "sub/c.md": QUOTED_DOC,
            },
        )
        walker = make_walker()
        outcomes = await walker.walk(tmp_path)
        assert linted(outcomes) == ["a.md", "b.md"]
        assert walker.context.error_number == 2
        assert walker.context.fixable_errors == 2

    async def test_single_file(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"post.md": QUOTED_DOC})
        outcomes = await make_walker().walk(tmp_path / "post.md")
        assert [o.file_error_count for o in outcomes] == [2]

    async def test_single_file_with_wrong_extension(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"post.txt": VALID_DOC})
        with pytest.raises(InvalidExtensionError, match="does not have a valid extension"):
            await make_walker().walk(tmp_path / "post.txt")

    async def test_no_matching_files_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        write_tree(tmp_path, {"notes.txt": "x"})
        caplog.set_level(logging.INFO, logger="yaml_fm_lint.walker")
        assert await make_walker().walk(tmp_path) == []
        assert "No .md files found in" in caplog.text

    async def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(PathNotFoundError, match="does not exist"):
            await make_walker().walk(tmp_path / "missing")

    async def test_configured_extensions(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"a.md": VALID_DOC, "b.mdx": VALID_DOC})
        outcomes = await make_walker(LintConfig(extensions=[".mdx"])).walk(tmp_path)
        assert linted(outcomes) == ["b.mdx"]


# ---------------------------------------------------------------------------
# Recursive traversal
# ---------------------------------------------------------------------------


class TestRecursiveWalk:
    TREE = {
        "index.md": VALID_DOC,
        "docs/a.md": QUOTED_DOC,
        "docs/deep/b.md": VALID_DOC,
        "docs/notes.txt": QUOTED_DOC,
        "node_modules/pkg/readme.md": QUOTED_DOC,
        "drafts/out.md": QUOTED_DOC,
    }

    async def test_default_exclusions(self, tmp_path: Path) -> None:
        write_tree(tmp_path, self.TREE)
        walker = make_walker()
        outcomes = await walker.walk(tmp_path, recursive=True)
        assert linted(outcomes) == ["a.md", "b.md", "index.md", "out.md"]
        assert walker.context.error_number == 4

    async def test_extra_exclusions(self, tmp_path: Path) -> None:
        write_tree(tmp_path, self.TREE)
        config = LintConfig(extra_exclude_dirs=["drafts/"])
        outcomes = await make_walker(config).walk(tmp_path, recursive=True)
        assert linted(outcomes) == ["a.md", "b.md", "index.md"]

    async def test_include_overrides_exclude(self, tmp_path: Path) -> None:
        write_tree(tmp_path, self.TREE)
        config = LintConfig(include_dirs=["node_modules"])
        outcomes = await make_walker(config).walk(tmp_path, recursive=True)
        assert "readme.md" in linted(outcomes)

    async def test_nested_exclusion_by_suffix(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"docs/drafts/x.md": QUOTED_DOC, "docs/y.md": VALID_DOC})
        config = LintConfig(exclude_dirs=["docs/drafts"])
        outcomes = await make_walker(config).walk(tmp_path, recursive=True)
        assert linted(outcomes) == ["y.md"]

    async def test_excluded_directory_contributes_nothing(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"drafts/a.md": MALFORMED_DOC, "posts/b.md": VALID_DOC})
        walker = make_walker(LintConfig(exclude_dirs=["drafts"]))
        outcomes = await walker.walk(tmp_path, recursive=True)
        assert [Path(o.file_path).parent.name for o in outcomes] == ["posts"]
        assert linted(outcomes) == ["b.md"]
        assert walker.context.error_number == 0

    async def test_single_non_matching_file_is_skipped(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"notes.txt": QUOTED_DOC})
        assert await make_walker().walk(tmp_path / "notes.txt", recursive=True) == []


# ---------------------------------------------------------------------------
# Failure propagation
# ---------------------------------------------------------------------------


class TestFailures:
    async def test_siblings_finish_before_failure_propagates(self, tmp_path: Path) -> None:
        write_tree(
            tmp_path,
            {"a.md": QUOTED_DOC, "b.md": b"---\ntitle: \xff\xfe\n---\n", "c.md": QUOTED_DOC},
        )
        context = RunContext()
        walker = DirectoryWalker(FrontMatterLinter(options=QUIET), context)
        with pytest.raises(FileReadError, match="b.md"):
            await walker.walk(tmp_path)
        assert sorted(Path(o.file_path).name for o in context.outcomes) == ["a.md", "c.md"]
        assert context.error_number == 4

    async def test_failure_in_nested_directory_reaches_the_root(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"ok.md": VALID_DOC, "sub/deep/bad.md": b"\xff"})
        with pytest.raises(FileReadError):
            await make_walker().walk(tmp_path, recursive=True)


# ---------------------------------------------------------------------------
# Full runs
# ---------------------------------------------------------------------------


class TestRun:
    async def test_run_totals(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"a.md": QUOTED_DOC, "b.md": NO_FRONT_MATTER_DOC})
        result = await run(tmp_path, options=QUIET)
        assert result.error_number == 3
        assert result.fixable_errors == 2
        assert result.exit_code == 1
        assert result.elapsed >= 0

    async def test_optional_front_matter(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"b.md": NO_FRONT_MATTER_DOC})
        result = await run(tmp_path, LintConfig(mandatory=False), QUIET)
        assert (result.error_number, result.warning_number) == (0, 1)
        assert result.exit_code == 0

    async def test_traversal_failure_becomes_one_error(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"post.txt": VALID_DOC})
        reporter, buffer = buffered_reporter(quiet=True)
        result = await run(tmp_path / "post.txt", options=QUIET, reporter=reporter)
        assert result.error_number == 1
        assert result.failures == (f"{(tmp_path / 'post.txt').as_posix()} does not have a valid extension.",)
        assert buffer.getvalue().startswith("Lint failed: ")

    async def test_plugin_failure_aborts_run(self, tmp_path: Path) -> None:
        def broken(attributes, lines, report):
            raise ValueError("plugin bug")

        write_tree(tmp_path, {"a.md": VALID_DOC})
        reporter, buffer = buffered_reporter()
        result = await run(tmp_path, LintConfig(extra_lint_fns=[broken]), reporter=reporter)
        assert result.error_number == 1
        assert "plugin bug" in buffer.getvalue()

    async def test_impossible_date_is_reported_not_raised(self, tmp_path: Path) -> None:
        write_tree(
            tmp_path,
            {"bad.md": "---\ntitle: x\ndate: 2021-02-30\n---\n", "ok.md": VALID_DOC},
        )
        result = await run(tmp_path, options=QUIET)
        assert result.error_number == 1
        assert result.failures == ()
        assert linted(result.outcomes) == ["bad.md", "ok.md"]

    def test_run_sync(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"a.md": VALID_DOC})
        result = run_sync(tmp_path, options=QUIET)
        assert result.error_number == 0
        assert len(result.outcomes) == 1


class TestFixOnDisk:
    FIX = LintOptions(fix=True, quiet=True)

    async def test_rewrites_front_matter(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"a.md": QUOTED_DOC, "b.md": VALID_DOC})
        result = await run(tmp_path, options=self.FIX)
        assert (tmp_path / "a.md").read_text() == "---\nfoo: bar\n---\ncontent"
        assert (tmp_path / "b.md").read_text() == VALID_DOC
        assert result.error_number == 0
        assert [o.fixed for o in sorted(result.outcomes, key=lambda o: o.file_path)] == [True, False]

    async def test_body_line_endings_survive(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"a.md": b"---\r\nfoo: 'bar'\r\n---\r\nbody  \r\n"})
        await run(tmp_path, options=self.FIX)
        assert (tmp_path / "a.md").read_bytes() == b"---\nfoo: bar\n---\nbody  \r\n"

    async def test_unchanged_file_is_not_written(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"a.md": VALID_DOC})
        path = tmp_path / "a.md"
        before = path.stat().st_mtime_ns
        await run(tmp_path, options=self.FIX)
        assert path.stat().st_mtime_ns == before
