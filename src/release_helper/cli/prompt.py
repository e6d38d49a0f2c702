"""Interactive questions asked before a release."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.prompt import Confirm, Prompt
from rich.table import Table

from release_helper.core.version import BumpType, Version, bump_choices

if TYPE_CHECKING:
    from rich.console import Console


@dataclass(frozen=True)
class ReleaseAnswers:
    """What the user chose for this release."""

    version: Version
    verbose: bool
    dry_run: bool


def ask_version(current_version: Version, console: Console) -> Version:
    """Ask which kind of change this is and return the bumped version."""
    choices = bump_choices(current_version)

    table = Table(show_header=False, box=None, padding=(0, 2))
    for bump_type, bumped in choices:
        table.add_row(f"[cyan]{bump_type}[/]", f"({bumped})")
    console.print(f"\nCurrent version: [bold]{current_version}[/]")
    console.print(table)

    answer = Prompt.ask(
        "What kind of change is this for your packages?",
        choices=[str(bump_type) for bump_type, _ in choices],
        default=str(BumpType.PATCH),
        console=console,
    )
    return dict(choices)[BumpType(answer)]


def run_prompt(
    current_version: Version,
    console: Console,
    *,
    version: Version | None = None,
    verbose: bool | None = None,
    dry_run: bool | None = None,
) -> ReleaseAnswers:
    """Ask for anything not already given on the command line.

    Args:
        current_version: Version of the latest release tag
        console: Console to prompt on
        version: New version, skips the bump question
        verbose: Skips the verbose question
        dry_run: Skips the dry-run question

    Returns:
        The combined answers
    """
    if version is None:
        version = ask_version(current_version, console)
    if verbose is None:
        verbose = Confirm.ask("Do you want to enable verbose output?", default=True, console=console)
    if dry_run is None:
        dry_run = Confirm.ask("Do you want to dry run these commands?", default=True, console=console)

    return ReleaseAnswers(version=version, verbose=verbose, dry_run=dry_run)
