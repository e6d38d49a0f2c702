"""Conventional commit types recognized in changelogs.

The vocabulary follows ``@commitlint/config-conventional``:
https://www.conventionalcommits.org/en/v1.0.0/
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Final


class CommitType(StrEnum):
    """A changelog category derived from a commit subject prefix.

    Declaration order is the order sections appear in a changelog.
    """

    BUILD = "build"
    CHORE = "chore"
    CI = "ci"
    DOCS = "docs"
    FEAT = "feat"
    FIX = "fix"
    PERF = "perf"
    REFACTOR = "refactor"
    REVERT = "revert"
    STYLE = "style"
    TEST = "test"

    @property
    def display_title(self) -> str:
        return COMMIT_TYPE_TITLES[self]


# Synthetic grouping key for breaking changes; never a commit's own type.
BREAKING: Final = "breaking"

COMMIT_TYPE_TITLES: Final = MappingProxyType(
    {
        CommitType.BUILD: "Build",
        CommitType.CHORE: "Chores",
        CommitType.CI: "CI",
        CommitType.DOCS: "Documentation",
        CommitType.FEAT: "Features",
        CommitType.FIX: "Fixes",
        CommitType.PERF: "Performance",
        CommitType.REFACTOR: "Refactor",
        CommitType.REVERT: "Revert",
        CommitType.STYLE: "Styles",
        CommitType.TEST: "Testing",
    }
)

BREAKING_TITLE: Final = "Breaking Changes"
