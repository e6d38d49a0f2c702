"""Configuration management for release-helper."""

from __future__ import annotations

from release_helper.config.loader import load_config
from release_helper.config.models import (
    ChangelogConfig,
    GitHubConfig,
    ReleaseHelperConfig,
)

__all__ = [
    "ChangelogConfig",
    "GitHubConfig",
    "ReleaseHelperConfig",
    "load_config",
]
