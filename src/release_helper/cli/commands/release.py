"""Implementation of the 'release' command.

The release command bumps the version, commits and tags it, renders the
changelog, then pushes and publishes a GitHub release.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from release_helper.cli.log import configure_logging
from release_helper.cli.prompt import run_prompt
from release_helper.config import load_config
from release_helper.core.changelog import generate_changelog
from release_helper.core.version import Version
from release_helper.exceptions import (
    ConfigNotFoundError,
    ConfigValidationError,
    InvalidVersionError,
    ReleaseHelperError,
    VersionNotFoundError,
)
from release_helper.forge.github import GitHubClient, get_token
from release_helper.project.pyproject import get_pyproject_version, update_pyproject_version
from release_helper.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from release_helper.config.models import ReleaseHelperConfig


def run_release(
    path: str | None,
    version_override: str | None,
    dry_run: bool | None,
    verbose: bool | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the release command.

    Args:
        path: Optional path to project directory
        version_override: New version, skips the bump prompt
        dry_run: Dry-run choice, prompted for when None
        verbose: Verbose choice, prompted for when None
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration
    try:
        config = load_config(project_path)
        repo = GitRepository(project_path)
    except ReleaseHelperError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    # Get current version from the latest tag
    try:
        current_tag, current_version = repo.get_latest_version(config.tag_prefix)
        new_version = Version.parse(version_override) if version_override else None
        if new_version is not None and new_version <= current_version:
            raise InvalidVersionError(f"{new_version} is not newer than {current_tag}")
    except ReleaseHelperError as e:
        err_console.print(f"[red]Error getting version:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    answers = run_prompt(
        current_version,
        console,
        version=new_version,
        verbose=verbose,
        dry_run=dry_run,
    )
    configure_logging(answers.verbose, err_console)

    new_tag = config.tag_for(answers.version)
    mode_str = "[yellow]DRY-RUN[/]" if answers.dry_run else "[green]EXECUTING[/]"
    console.print(
        f"\n{mode_str} - Releasing [cyan]{current_version}[/] -> [green]{answers.version}[/]\n"
    )

    # Everything needed for publishing is checked before anything changes
    if not answers.dry_run:
        try:
            if not config.allow_dirty and repo.is_dirty():
                raise ConfigValidationError(
                    "Repository has uncommitted changes. "
                    "Commit or stash them, or set allow_dirty = true in config."
                )
            owner, repo_name = _resolve_github_repo(config, repo)
            token = get_token(config.github.token_env)
        except ReleaseHelperError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e

    if answers.dry_run:
        version_step = (
            f"  • Update version in [cyan]pyproject.toml[/] to {answers.version}\n"
            if _has_static_version(project_path)
            else "  • Leave pyproject.toml unchanged (no static version)\n"
        )
        console.print(
            Panel(
                "[bold]Would make the following changes:[/]\n\n"
                f"{version_step}"
                f"  • Commit [cyan]{config.release_commit_message.format(version=answers.version)}[/]\n"
                f"  • Tag [cyan]{new_tag}[/]\n"
                "  • Push and create a GitHub release",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
    else:
        try:
            _commit_and_tag(repo, project_path, config, answers.version, new_tag, console)
        except ReleaseHelperError as e:
            err_console.print(f"[red]Error creating release commit:[/] {escape(str(e))}")
            raise SystemExit(1) from e

    # Generate changelog
    try:
        changelog = generate_changelog(
            repo,
            current_tag,
            new_tag,
            dry_run=answers.dry_run,
            include_thanks=config.changelog.include_thanks,
        )
    except ReleaseHelperError as e:
        err_console.print(f"[red]Error generating changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(changelog, markup=False, highlight=False, emoji=False, soft_wrap=True)

    if answers.dry_run:
        console.print(
            "\n[yellow]Skipping github push and release because dry run was set...[/]"
        )
        return

    # Publish
    try:
        repo.push(follow_tags=True)
        console.print("  [green]✓[/] Pushed commits and tags")

        commit_hash = repo.resolve_tag_commit(new_tag)
        with GitHubClient(token, config.github.api_url) as github:
            url = github.create_release(
                owner,
                repo_name,
                tag=new_tag,
                commit_hash=commit_hash,
                body=changelog,
                name=f"Release {new_tag}",
            )
    except ReleaseHelperError as e:
        err_console.print(f"[red]Error publishing release:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            f"[green]Released {answers.version}![/]\n\nRelease published: {url}",
            title="[green]Release Complete[/]",
            border_style="green",
        )
    )


def _resolve_github_repo(config: ReleaseHelperConfig, repo: GitRepository) -> tuple[str, str]:
    """Owner and name of the GitHub repository, from config or the origin remote.

    Raises:
        ConfigValidationError: If neither source provides them
    """
    if config.github.owner and config.github.repo:
        return config.github.owner, config.github.repo

    remote = repo.get_github_repo()
    if remote is None:
        raise ConfigValidationError(
            "Cannot determine the GitHub repository. Set [tool.release-helper.github] "
            "owner and repo, or add a GitHub 'origin' remote."
        )
    return config.github.owner or remote[0], config.github.repo or remote[1]


def _commit_and_tag(
    repo: GitRepository,
    project_path: Path,
    config: ReleaseHelperConfig,
    version: Version,
    tag: str,
    console: Console,
) -> None:
    """Write the new version, commit it and tag the commit."""
    try:
        pyproject_path = update_pyproject_version(project_path, str(version))
    except (ConfigNotFoundError, VersionNotFoundError):
        # Dynamic or missing version: the tag alone carries it
        console.print("  [dim]No static version in pyproject.toml, skipping version file[/]")
        version_file_updated = False
    else:
        repo.add(pyproject_path)
        console.print(f"  [green]✓[/] Updated version in {pyproject_path.name}")
        version_file_updated = True

    message = config.release_commit_message.format(version=version)
    repo.commit(message, allow_empty=not version_file_updated)
    console.print(f"  [green]✓[/] Committed [cyan]{message}[/]")

    repo.create_tag(tag, message)
    console.print(f"  [green]✓[/] Tagged [cyan]{tag}[/]")


def _has_static_version(project_path: Path) -> bool:
    try:
        get_pyproject_version(project_path)
    except (ConfigNotFoundError, VersionNotFoundError):
        return False
    return True
