"""Version control integration."""

from __future__ import annotations

from release_helper.vcs.git import GitRepository, parse_github_remote

__all__ = ["GitRepository", "parse_github_remote"]
