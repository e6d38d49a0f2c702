"""Typer application for release-helper."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from release_helper import __version__
from release_helper.cli.log import configure_logging

app = typer.Typer(
    name="release-helper",
    help="Bump, tag, and publish a release with a changelog built from conventional commits.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)

PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Project directory (defaults to the current directory)."),
]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"release-helper {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Release automation from conventional commits."""


@app.command()
def release(
    path: PathOption = None,
    new_version: Annotated[
        str | None,
        typer.Option("--new-version", help="Version to release, skips the bump prompt."),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Preview without committing, tagging, pushing or publishing.",
        ),
    ] = None,
    verbose: Annotated[
        bool | None,
        typer.Option("--verbose/--quiet", help="Show debug output, including git commands."),
    ] = None,
) -> None:
    """Bump the version, tag it, and publish a GitHub release."""
    from release_helper.cli.commands.release import run_release

    run_release(
        path=path,
        version_override=new_version,
        dry_run=dry_run,
        verbose=verbose,
        console=console,
        err_console=err_console,
    )


@app.command()
def changelog(
    path: PathOption = None,
    from_ref: Annotated[
        str | None,
        typer.Option("--from", help="Previous release tag (defaults to the latest tag)."),
    ] = None,
    to_ref: Annotated[
        str | None,
        typer.Option("--to", help="Release tag; its release commit is excluded. Defaults to HEAD."),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Read up to HEAD instead of excluding the release commit of --to. "
            "Defaults to dry-run when --to is omitted.",
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug output.")] = False,
) -> None:
    """Print the changelog for a range of commits."""
    from release_helper.cli.commands.changelog import run_changelog

    configure_logging(verbose, err_console)
    run_changelog(
        path=path,
        from_ref=from_ref,
        to_ref=to_ref,
        dry_run=dry_run,
        console=console,
        err_console=err_console,
    )
