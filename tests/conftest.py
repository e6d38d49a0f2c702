"""Shared fixtures for release-helper tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_helper.core.commits import BEGIN_MARKER, BODY_MARKER, DELIMITER, FILES_MARKER


def make_record(
    hash_abbr: str,
    subject: str,
    *,
    author: str = "Ada Lovelace",
    date: int = 1_700_000_000,
    body: str = "",
    files: tuple[str, ...] = (),
) -> str:
    """Build one record the way ``git log --name-only`` prints it."""
    header = DELIMITER.join([hash_abbr, author, str(date), subject])
    file_lines = "".join(f"\n{f}" for f in files)
    return f"{BEGIN_MARKER}{header}{BODY_MARKER}{body}{FILES_MARKER}{file_lines}\n"


def make_log(*records: str) -> str:
    return "\n".join(records)


@pytest.fixture
def sample_log() -> str:
    """A log mixing types, a breaking change and two authors."""
    return make_log(
        make_record("a1b2c3d", "feat: add export command", files=("src/export.py",)),
        make_record(
            "b2c3d4e",
            "fix: handle empty config",
            author="Linus",
            files=("src/config.py", "tests/test_config.py"),
        ),
        make_record("c3d4e5f", "docs: describe export", files=("README.md",)),
        make_record(
            "d4e5f6a",
            "refactor: split loader",
            body="BREAKING CHANGE: load_config now requires a path\n",
            files=("src/loader.py",),
        ),
        make_record("e5f6a7b", "feat!: drop Python 3.10", author="Linus"),
        make_record("f6a7b8c", "chore: bump dependencies"),
    )


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    """A directory holding a pyproject.toml with a static version."""
    (tmp_path / "pyproject.toml").write_text(
        """\
[build-system]
requires = ["hatchling"]

[project]
name = "test-project"
version = "1.0.0"  # keep in sync with tags
description = "A test project"

[tool.release-helper]
tag_prefix = "v"

[tool.release-helper.github]
owner = "octo"
repo = "widgets"
"""
    )
    return tmp_path


@pytest.fixture(name="record")
def record_fixture():
    """The :func:`make_record` builder."""
    return make_record


@pytest.fixture(name="log")
def log_fixture():
    """The :func:`make_log` builder."""
    return make_log
