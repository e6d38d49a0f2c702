"""Implementation of the 'changelog' command.

Prints the changelog for a range of history without changing anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from release_helper.config import load_config
from release_helper.core.changelog import generate_changelog
from release_helper.exceptions import ReleaseHelperError
from release_helper.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(
    path: str | None,
    from_ref: str | None,
    to_ref: str | None,
    dry_run: bool | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog command.

    Args:
        path: Optional path to project directory
        from_ref: Start of the range, defaults to the latest tag
        to_ref: Release tag; its own commit is excluded. Up to HEAD when omitted.
        dry_run: Read up to HEAD rather than ``to_ref^``, defaults to ``to_ref is None``
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()
    if dry_run is None:
        dry_run = to_ref is None

    try:
        config = load_config(project_path)
        repo = GitRepository(project_path)
        start = from_ref or repo.get_latest_tag()
        changelog = generate_changelog(
            repo,
            start,
            to_ref or "HEAD",
            dry_run=dry_run,
            include_thanks=config.changelog.include_thanks,
        )
    except ReleaseHelperError as e:
        err_console.print(f"[red]Error generating changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(changelog, markup=False, highlight=False, emoji=False, soft_wrap=True)
