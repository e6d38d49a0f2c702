"""Changelog generation from grouped commits.

The changelog is a small markdown document::

    ## Breaking Changes:
    - (a1b2c3d) feat!: drop Python 3.10
    ## Features:
    - (d4e5f6a) feat: add export command
    ## Thanks:
    @Ada, @Linus

Breaking changes come first, then one section per commit type in the
fixed order of :class:`CommitType`, then the contributors.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from release_helper.core.commit_types import BREAKING_TITLE, CommitType
from release_helper.core.commits import parse_log

if TYPE_CHECKING:
    from release_helper.core.commits import Commit, ParsedLog
    from release_helper.vcs.git import GitRepository

logger = logging.getLogger(__name__)

THANKS_TITLE: Final = "Thanks"

_ENTRY_RE: Final = re.compile(r"^- \((?P<hash>[^)\s]+)\) (?P<subject>.*)$", re.MULTILINE)


def format_entry(commit: Commit) -> str:
    """Format one commit as a changelog bullet."""
    return f"- ({commit.hash_abbr}) {commit.subject}"


def _section(title: str, commits: list[Commit]) -> str:
    lines = [f"## {title}:", *(format_entry(commit) for commit in commits)]
    return "\n".join(lines)


def render_changelog(parsed: ParsedLog, *, include_thanks: bool = True) -> str:
    """Render grouped commits as markdown.

    The output depends only on ``parsed``: rendering the same input twice
    gives identical text.

    Args:
        parsed: Result of :func:`~release_helper.core.commits.parse_log`
        include_thanks: Whether to append the contributors section

    Returns:
        The changelog with surrounding whitespace removed
    """
    sections: list[str] = []

    if parsed.breaking:
        sections.append(_section(BREAKING_TITLE, parsed.breaking))

    for commit_type in CommitType:
        commits = parsed.commit_groups.get(commit_type)
        if commits:
            sections.append(_section(commit_type.display_title, commits))

    if include_thanks:
        thanks = ", ".join(f"@{name}" for name in parsed.sorted_contributors())
        sections.append(f"## {THANKS_TITLE}:\n{thanks}")

    return "\n".join(sections).strip()


def parse_changelog_entries(text: str) -> list[tuple[str, str]]:
    """Read ``(hash_abbr, subject)`` pairs back out of a rendered changelog.

    Entries are returned in document order.
    """
    return [(m.group("hash"), m.group("subject")) for m in _ENTRY_RE.finditer(text)]


def generate_changelog(
    repo: GitRepository,
    from_ref: str,
    to_ref: str,
    *,
    dry_run: bool,
    include_thanks: bool = True,
) -> str:
    """Generate the changelog for the commits between two refs.

    The release commit made for ``to_ref`` is excluded by reading up to its
    parent (``to_ref^``). In dry-run mode the release tag does not exist
    yet, so the log is read up to ``HEAD`` instead.

    Args:
        repo: Git repository
        from_ref: Tag of the previous release
        to_ref: Tag of the release being made
        dry_run: Whether the release tag has been created
        include_thanks: Whether to append the contributors section

    Returns:
        Rendered changelog

    Raises:
        GitError: If ``git log`` fails
        LogFormatError: If the log output is malformed
        CommitParseError: If a commit cannot be classified
    """
    upper = "HEAD" if dry_run else f"{to_ref}^"
    logger.info("Generating changelog for %s...%s", from_ref, upper)

    parsed = parse_log(repo.get_log(from_ref, upper))
    return render_changelog(parsed, include_thanks=include_thanks)
