"""Pydantic models for the ``[tool.release-helper]`` configuration table."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GitHubConfig(BaseModel):
    """Where releases are published."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    owner: str | None = None
    repo: str | None = None
    api_url: str = "https://api.github.com"
    token_env: str = "GITHUB_TOKEN"

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


class ChangelogConfig(BaseModel):
    """Changelog rendering options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    include_thanks: bool = True


class ReleaseHelperConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag_prefix: str = "v"
    allow_dirty: bool = False
    release_commit_message: str = "chore: release v{version}"

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)

    @field_validator("release_commit_message")
    @classmethod
    def _require_version_placeholder(cls, value: str) -> str:
        if "{version}" not in value:
            raise ValueError("release_commit_message must contain '{version}'")
        return value

    def tag_for(self, version: object) -> str:
        """Return the tag name used for ``version``."""
        return f"{self.tag_prefix}{version}"
