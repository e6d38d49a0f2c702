"""Read and write the project version in pyproject.toml.

Edits are regex-based so the file's formatting and comments survive.
Both ``[project].version`` (PEP 621) and ``[tool.poetry].version`` are
supported; the first table that holds a static version wins.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from release_helper.config.loader import find_pyproject_toml
from release_helper.exceptions import ProjectError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_VERSION_TABLES: Final = (r"project", r"tool\.poetry")
_VERSION_LINE_RE: Final = re.compile(r'^(version\s*=\s*)["\']([^"\']+)["\']', re.MULTILINE)


def _resolve(path: Path | None) -> Path:
    if path is None:
        return find_pyproject_toml()
    if path.is_dir():
        return find_pyproject_toml(path)
    return path


def _table_re(table: str) -> re.Pattern[str]:
    # Table body runs up to the next table header or end of file
    return re.compile(rf"^\[{table}\][^\n]*\n.*?(?=^\[|\Z)", re.MULTILINE | re.DOTALL)


def get_pyproject_version(path: Path | None = None) -> str:
    """Get the static version from pyproject.toml.

    Args:
        path: pyproject.toml or a directory to search upwards from

    Raises:
        VersionNotFoundError: If no table holds a static version
    """
    pyproject_path = _resolve(path)
    content = pyproject_path.read_text()

    for table in _VERSION_TABLES:
        section = _table_re(table).search(content)
        if section is None:
            continue
        version = _VERSION_LINE_RE.search(section.group(0))
        if version:
            return version.group(2)

    raise VersionNotFoundError(
        f"Could not find version in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )


def update_pyproject_version(path: Path | None, new_version: str) -> Path:
    """Set the static version in pyproject.toml.

    Args:
        path: pyproject.toml or a directory to search upwards from
        new_version: Version to write

    Returns:
        Path of the file that was written

    Raises:
        VersionNotFoundError: If no table holds a static version
        ProjectError: If the file already has ``new_version``
    """
    pyproject_path = _resolve(path)
    content = pyproject_path.read_text()

    for table in _VERSION_TABLES:
        section = _table_re(table).search(content)
        if section is None or not _VERSION_LINE_RE.search(section.group(0)):
            continue

        updated_section = _VERSION_LINE_RE.sub(
            rf'\g<1>"{new_version}"', section.group(0), count=1
        )
        if updated_section == section.group(0):
            raise ProjectError(
                f"Version in {pyproject_path} was not updated. It may already be {new_version}."
            )

        pyproject_path.write_text(
            content[: section.start()] + updated_section + content[section.end() :]
        )
        logger.info("Updated version in %s to %s", pyproject_path, new_version)
        return pyproject_path

    raise VersionNotFoundError(
        f"Could not find version to update in {pyproject_path}. "
        "Expected [project].version or [tool.poetry].version."
    )
