"""Locate and load release-helper configuration from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_helper.config.models import ReleaseHelperConfig
from release_helper.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_KEY = "release-helper"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Walk upwards from ``start`` until a pyproject.toml is found.

    Raises:
        ConfigNotFoundError: If the filesystem root is reached first
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"File not found: {path}")
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_release_helper_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.release-helper]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> ReleaseHelperConfig:
    """Load configuration for the project at ``path``.

    Missing pyproject.toml or a missing ``[tool.release-helper]`` table
    both yield the defaults.

    Raises:
        ConfigValidationError: If the table contains invalid values
    """
    try:
        pyproject_path = find_pyproject_toml(path)
    except ConfigNotFoundError:
        logger.debug("No pyproject.toml found, using default configuration")
        return ReleaseHelperConfig()

    raw = extract_release_helper_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded [tool.%s] from %s: %s", TOOL_KEY, pyproject_path, raw)

    try:
        return ReleaseHelperConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] configuration:\n{e}") from e
