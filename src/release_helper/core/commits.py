"""Conventional commit parsing and grouping.

This module turns the raw output of ``git log`` into commits grouped by
changelog category, plus the set of people who authored them.

Each record in the log is written with sentinel markers (see
:func:`build_log_format`)::

    __BEGIN__<hash>__DELIM__<author>__DELIM__<unix date>__DELIM__<subject>
    __BODY__<body>__FILES__
    <file>
    <file>

Any record that cannot be parsed or classified fails the whole parse.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Final

from release_helper.core.commit_types import BREAKING, CommitType
from release_helper.exceptions import CommitParseError, LogFormatError

logger = logging.getLogger(__name__)

BEGIN_MARKER: Final = "__BEGIN__"
BODY_MARKER: Final = "__BODY__"
FILES_MARKER: Final = "__FILES__"
DELIMITER: Final = "__DELIM__"

# git-log pretty-format placeholders, see https://git-scm.com/docs/git-log
_PLACEHOLDERS: Final = ("%h", "%an", "%at", "%s")

_RECORD_RE: Final = re.compile(
    rf"(?P<header>[^\n]*){BODY_MARKER}(?P<body>.+)?{FILES_MARKER}(?P<files>.+)?",
    re.DOTALL,
)

_TYPE_RE: Final = re.compile(
    rf"^(?P<type>{'|'.join(re.escape(t.value) for t in CommitType)})(?P<bang>!?):"
)

_BREAKING_BODY_PREFIX: Final = "breaking change:"


def build_log_format() -> str:
    """Return the ``--pretty=format:`` string that :func:`parse_log` reads."""
    header = DELIMITER.join(_PLACEHOLDERS)
    return f"{BEGIN_MARKER}{header}{BODY_MARKER}%b{FILES_MARKER}"


# =============================================================================
# Data model
# =============================================================================


@dataclass(frozen=True, slots=True)
class Commit:
    """A single commit classified for the changelog."""

    hash_abbr: str
    author_name: str
    author_date: datetime
    subject: str
    files: tuple[str, ...]
    type: CommitType
    breaking: bool


@dataclass(frozen=True, slots=True)
class CommitClassification:
    """Successful classification of a commit subject."""

    type: CommitType
    breaking: bool


@dataclass(frozen=True, slots=True)
class ClassificationFailure:
    """A subject that does not start with a recognized commit type."""

    subject: str
    reason: str


ClassificationResult = CommitClassification | ClassificationFailure


@dataclass
class ParsedLog:
    """Commits grouped by category, and everyone who authored them."""

    commit_groups: dict[CommitType | str, list[Commit]] = field(default_factory=dict)
    contributors: set[str] = field(default_factory=set)

    @property
    def breaking(self) -> list[Commit]:
        return self.commit_groups.get(BREAKING, [])

    @property
    def commit_count(self) -> int:
        return sum(len(commits) for commits in self.commit_groups.values())

    def sorted_contributors(self) -> list[str]:
        """Contributors in a stable, case-insensitive order."""
        return sorted(self.contributors, key=lambda name: (name.casefold(), name))

    def add(self, commit: Commit) -> None:
        """Route ``commit`` into its bucket, keeping log order."""
        key: CommitType | str = BREAKING if commit.breaking else commit.type
        self.commit_groups.setdefault(key, []).append(commit)
        self.contributors.add(commit.author_name)


# =============================================================================
# Parsing
# =============================================================================


def classify_subject(subject: str, body: str | None = None) -> ClassificationResult:
    """Determine the commit type and breaking flag from a subject line.

    The subject must start with ``<type>:`` or ``<type>!:``. A ``!`` marks
    the commit as breaking, as does a body starting with
    ``BREAKING CHANGE:`` (case-insensitive).

    Never raises; callers decide what to do with a failure.
    """
    match = _TYPE_RE.match(subject)
    if match is None:
        prefix = subject.split(":", 1)[0] if ":" in subject else None
        if prefix:
            reason = (
                f'Commit type "{prefix}" does not match allowed types: '
                f"{', '.join(t.value for t in CommitType)}"
            )
        else:
            reason = "Commit subject has no conventional commit type prefix"
        return ClassificationFailure(subject=subject, reason=reason)

    breaking = match.group("bang") == "!" or bool(
        body and body.lower().startswith(_BREAKING_BODY_PREFIX)
    )
    return CommitClassification(type=CommitType(match.group("type")), breaking=breaking)


def parse_record(record: str) -> Commit:
    """Parse the text following one begin marker into a :class:`Commit`.

    Raises:
        LogFormatError: If the record layout or header fields are malformed
        CommitParseError: If the subject cannot be classified
    """
    match = _RECORD_RE.match(record)
    if match is None:
        raise LogFormatError(f"Malformed git log record: {record[:80]!r}")

    fields = match.group("header").split(DELIMITER)
    if len(fields) != len(_PLACEHOLDERS):
        raise LogFormatError(
            f"Expected {len(_PLACEHOLDERS)} header fields, got {len(fields)}: "
            f"{match.group('header')!r}"
        )
    hash_abbr, author_name, author_date_unix, subject = fields

    if not author_name:
        raise LogFormatError(f"Commit {hash_abbr} has no author name")
    try:
        author_date = datetime.fromtimestamp(int(author_date_unix), tz=UTC)
    except (ValueError, OverflowError, OSError) as e:
        raise LogFormatError(
            f"Commit {hash_abbr} has an invalid author date: {author_date_unix!r}"
        ) from e

    result = classify_subject(subject, match.group("body"))
    if isinstance(result, ClassificationFailure):
        raise CommitParseError(
            f"Cannot classify commit {hash_abbr} ({subject!r}): {result.reason}",
            hash_abbr=hash_abbr,
            subject=subject,
        )

    files_text = match.group("files") or ""
    files = tuple(line for line in files_text.split("\n") if line)

    return Commit(
        hash_abbr=hash_abbr,
        author_name=author_name,
        author_date=author_date,
        subject=subject,
        files=files,
        type=result.type,
        breaking=result.breaking,
    )


def parse_log(output: str) -> ParsedLog:
    """Parse ``git log`` output produced with :func:`build_log_format`.

    Args:
        output: Raw log text

    Returns:
        Commits grouped by category, with breaking commits only in the
        ``breaking`` group, and the set of contributors

    Raises:
        LogFormatError: If any record is malformed
        CommitParseError: If any commit cannot be classified
    """
    parsed = ParsedLog()

    # Everything before the first marker is not part of a record
    for record in output.split(BEGIN_MARKER)[1:]:
        commit = parse_record(record)
        logger.debug(
            "Parsed %s %s (%s%s)",
            commit.hash_abbr,
            commit.subject,
            commit.type,
            ", breaking" if commit.breaking else "",
        )
        parsed.add(commit)

    logger.info(
        "Parsed %d commits from %d contributors",
        parsed.commit_count,
        len(parsed.contributors),
    )
    return parsed
