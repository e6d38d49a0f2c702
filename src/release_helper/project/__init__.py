"""Project metadata files."""

from __future__ import annotations

from release_helper.project.pyproject import get_pyproject_version, update_pyproject_version

__all__ = ["get_pyproject_version", "update_pyproject_version"]
