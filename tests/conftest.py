"""Shared test fixtures for yaml-fm-lint."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from yaml_fm_lint.models.config import LintConfig, LintOptions
from yaml_fm_lint.parser.frontmatter import FrontMatterBlock, locate_front_matter
from yaml_fm_lint.parser.loader import AttributeParser
from yaml_fm_lint.reporting import Reporter
from yaml_fm_lint.service.linter import FrontMatterLinter


@pytest.fixture
def parser() -> AttributeParser:
    return AttributeParser()


@pytest.fixture
def config() -> LintConfig:
    return LintConfig()


@pytest.fixture
def quiet_linter(config: LintConfig) -> FrontMatterLinter:
    return FrontMatterLinter(config, LintOptions(quiet=True))


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> Reporter:
    """Reporter writing plain text into ``output``."""
    console = Console(file=output, no_color=True, highlight=False, soft_wrap=True, width=200)
    return Reporter(console, colored=False)


def block_of(text: str) -> FrontMatterBlock:
    block = locate_front_matter(text)
    assert block is not None, "test document has no front matter"
    return block


def write_tree(root: Path, files: dict[str, str | bytes]) -> None:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


VALID_DOC = """\
---
title: Hello world
date: 2021-06-01
tags:
  - python
  - yaml
author:
  name: Ada
---
# Hello

Body text with 'quotes', [brackets] and {braces}.
"""

QUOTED_DOC = "---\nfoo: 'bar'\n---\ncontent"

NO_FRONT_MATTER_DOC = "# Just a heading\n\nNo metadata here.\n"

MALFORMED_DOC = "---\ntitle: 'unterminated\ntags: [a, b\n---\n"
