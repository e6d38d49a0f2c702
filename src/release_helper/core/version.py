"""Semantic version parsing and increment.

Follows https://semver.org/ for parsing and the increment rules of the
``semver`` npm package: bumping a pre-release version first releases it
when every lower component is already zero.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from functools import total_ordering
from typing import Final

from release_helper.exceptions import InvalidVersionError

_SEMVER_RE: Final = re.compile(
    r"""
    ^(?P<major>0|[1-9]\d*)
    \.(?P<minor>0|[1-9]\d*)
    \.(?P<patch>0|[1-9]\d*)
    (?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)
        (?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?
    (?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$
    """,
    re.VERBOSE,
)


class BumpType(StrEnum):
    """Size of a version increment."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


@total_ordering
@dataclass(frozen=True)
class Version:
    """A semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a strict semantic version such as ``1.2.3-rc.1+build.5``.

        Raises:
            InvalidVersionError: If ``text`` is not a semantic version
        """
        match = _SEMVER_RE.match(text)
        if match is None:
            raise InvalidVersionError(f"{text!r} is not a valid semantic version")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for ``bump_type``. Build metadata is dropped."""
        if bump_type == BumpType.MAJOR:
            if self.is_prerelease and self.minor == 0 and self.patch == 0:
                return Version(self.major, 0, 0)
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            if self.is_prerelease and self.patch == 0:
                return Version(self.major, self.minor, 0)
            return Version(self.major, self.minor + 1, 0)
        if self.is_prerelease:
            return Version(self.major, self.minor, self.patch)
        return Version(self.major, self.minor, self.patch + 1)

    def _precedence_key(self) -> tuple:
        # A release sorts after any of its pre-releases
        if self.prerelease is None:
            pre: tuple = ((1,),)
        else:
            pre = tuple(
                (0, int(part), "") if part.isdigit() else (1, 0, part)
                for part in self.prerelease.split(".")
            )
            pre = ((0,), *pre)
        return (self.major, self.minor, self.patch, pre)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._precedence_key() < other._precedence_key()


def clean_version(text: str, tag_prefix: str = "v") -> Version:
    """Parse a version out of a tag name such as ``v1.2.3`` or ``=1.2.3``.

    Raises:
        InvalidVersionError: If what remains is not a semantic version
    """
    candidate = text.strip().lstrip("=").strip()
    if tag_prefix and candidate.startswith(tag_prefix):
        candidate = candidate[len(tag_prefix) :]
    elif candidate[:1] in ("v", "V"):
        candidate = candidate[1:]
    try:
        return Version.parse(candidate)
    except InvalidVersionError as e:
        raise InvalidVersionError(f"{text.strip()!r} is not a valid semver") from e


def bump_choices(version: Version) -> list[tuple[BumpType, Version]]:
    """Candidate next versions, smallest bump first."""
    return [(bump_type, version.bump(bump_type)) for bump_type in BumpType]
