"""Core business logic for release-helper.

This module contains the fundamental building blocks:
- Semantic version parsing and increment
- Conventional commit log parsing and grouping
- Changelog rendering
"""

from __future__ import annotations

from release_helper.core.changelog import (
    generate_changelog,
    parse_changelog_entries,
    render_changelog,
)
from release_helper.core.commit_types import BREAKING, COMMIT_TYPE_TITLES, CommitType
from release_helper.core.commits import (
    ClassificationFailure,
    Commit,
    CommitClassification,
    ParsedLog,
    build_log_format,
    classify_subject,
    parse_log,
)
from release_helper.core.version import BumpType, Version, bump_choices, clean_version

__all__ = [
    "BREAKING",
    "COMMIT_TYPE_TITLES",
    # Version
    "BumpType",
    # Commits
    "ClassificationFailure",
    "Commit",
    "CommitClassification",
    "CommitType",
    "ParsedLog",
    "Version",
    "build_log_format",
    "bump_choices",
    "classify_subject",
    "clean_version",
    # Changelog
    "generate_changelog",
    "parse_changelog_entries",
    "parse_log",
    "render_changelog",
]
