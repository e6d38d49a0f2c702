"""Command-line interface for release-helper."""

from __future__ import annotations

from release_helper.cli.app import app

__all__ = ["app"]
