"""Tests for semantic version parsing and bumping."""

from __future__ import annotations

import pytest

from release_helper.core.version import BumpType, Version, bump_choices, clean_version
from release_helper.exceptions import ConfigError, InvalidVersionError


class TestVersionParse:
    """Tests for Version.parse()."""

    def test_simple(self):
        assert Version.parse("1.2.3") == Version(1, 2, 3)

    def test_prerelease_and_build(self):
        version = Version.parse("1.0.0-rc.1+build.5")

        assert version.prerelease == "rc.1"
        assert version.build == "build.5"
        assert str(version) == "1.0.0-rc.1+build.5"

    @pytest.mark.parametrize("text", ["1.2", "01.2.3", "1.2.3.4", "v1.2.3", "", "latest"])
    def test_invalid(self, text: str):
        with pytest.raises(InvalidVersionError):
            Version.parse(text)

    def test_invalid_version_is_config_error(self):
        """An unusable version aborts the release before anything changes."""
        with pytest.raises(ConfigError):
            Version.parse("not-a-version")


class TestVersionOrdering:
    """Tests for version precedence."""

    def test_release_after_prerelease(self):
        assert Version.parse("1.0.0-rc.1") < Version.parse("1.0.0")

    def test_semver_example_chain(self):
        chain = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        versions = [Version.parse(v) for v in chain]
        assert sorted(reversed(versions)) == versions


class TestBump:
    """Tests for Version.bump()."""

    @pytest.mark.parametrize(
        ("current", "bump_type", "expected"),
        [
            ("1.2.3", BumpType.PATCH, "1.2.4"),
            ("1.2.3", BumpType.MINOR, "1.3.0"),
            ("1.2.3", BumpType.MAJOR, "2.0.0"),
            ("0.9.9", BumpType.MINOR, "0.10.0"),
            ("1.2.3-rc.1", BumpType.PATCH, "1.2.3"),
            ("1.2.0-rc.1", BumpType.MINOR, "1.2.0"),
            ("1.2.3-rc.1", BumpType.MINOR, "1.3.0"),
            ("2.0.0-rc.1", BumpType.MAJOR, "2.0.0"),
            ("2.1.0-rc.1", BumpType.MAJOR, "3.0.0"),
            ("1.2.3+build.7", BumpType.PATCH, "1.2.4"),
        ],
    )
    def test_bump(self, current: str, bump_type: BumpType, expected: str):
        assert str(Version.parse(current).bump(bump_type)) == expected

    def test_bump_choices(self):
        choices = bump_choices(Version(1, 2, 3))

        assert [(b, str(v)) for b, v in choices] == [
            (BumpType.PATCH, "1.2.4"),
            (BumpType.MINOR, "1.3.0"),
            (BumpType.MAJOR, "2.0.0"),
        ]


class TestCleanVersion:
    """Tests for clean_version()."""

    @pytest.mark.parametrize(
        "tag",
        ["v1.2.3", "1.2.3", "  v1.2.3\n", "=v1.2.3", "V1.2.3"],
    )
    def test_clean(self, tag: str):
        assert clean_version(tag) == Version(1, 2, 3)

    def test_custom_prefix(self):
        assert clean_version("release-2.0.0", tag_prefix="release-") == Version(2, 0, 0)

    def test_invalid_tag(self):
        with pytest.raises(InvalidVersionError, match="not a valid semver"):
            clean_version("nightly")
