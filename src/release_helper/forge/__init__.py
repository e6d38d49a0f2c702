"""Remote forge integration."""

from __future__ import annotations

from release_helper.forge.github import GitHubClient, get_token

__all__ = ["GitHubClient", "get_token"]
