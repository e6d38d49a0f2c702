"""Git operations used by the release flow.

All commands run as subprocesses in the repository root. A failing
command raises :class:`GitError` carrying git's stderr; nothing is
retried.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Final

from release_helper.core.commits import build_log_format
from release_helper.core.version import Version, clean_version
from release_helper.exceptions import GitError

logger = logging.getLogger(__name__)

_GITHUB_REMOTE_RE: Final = re.compile(
    r"github\.com[:/](?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)(?:\.git)?/?$"
)


def parse_github_remote(url: str) -> tuple[str, str] | None:
    """Extract ``(owner, repo)`` from a GitHub remote URL.

    Handles both ``git@github.com:owner/repo.git`` and
    ``https://github.com/owner/repo`` forms. Returns ``None`` for
    non-GitHub remotes.
    """
    match = _GITHUB_REMOTE_RE.search(url.strip())
    if match is None:
        return None
    return match.group("owner"), match.group("repo")


class GitRepository:
    """A local git working copy."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = (path or Path.cwd()).resolve()
        if not self.path.is_dir():
            raise GitError(f"Not a directory: {self.path}")

    def _run(self, *args: str) -> str:
        """Run ``git <args>`` and return stripped stdout.

        Raises:
            GitError: If git is missing or exits non-zero
        """
        command = ["git", *args]
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=self.path,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found", command=command) from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"{' '.join(command)} failed with exit code {e.returncode}",
                command=command,
                stderr=e.stderr or "",
            ) from e
        return result.stdout.strip()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get_latest_tag(self) -> str:
        """Name of the most recent tag reachable from HEAD.

        Raises:
            GitError: If there is no tag
        """
        return self._run("describe", "--tags", "--abbrev=0")

    def get_latest_version(self, tag_prefix: str = "v") -> tuple[str, Version]:
        """The most recent tag and the version it names.

        Raises:
            GitError: If there is no tag
            InvalidVersionError: If the tag is not a semantic version
        """
        tag = self.get_latest_tag()
        return tag, clean_version(tag, tag_prefix)

    def get_log(self, from_ref: str, to_ref: str) -> str:
        """Raw log for ``from_ref...to_ref`` in the format :func:`parse_log` reads."""
        return self._run(
            "--no-pager",
            "log",
            "--name-only",
            f"--pretty=format:{build_log_format()}",
            f"{from_ref}...{to_ref}",
        )

    def resolve_tag_commit(self, tag: str) -> str:
        """Hash of the commit ``tag`` points to, not of the tag object itself."""
        return self._run("rev-parse", f"{tag}^{{}}")

    def is_dirty(self) -> bool:
        return bool(self._run("status", "--porcelain"))

    def get_remote_url(self, remote: str = "origin") -> str:
        return self._run("remote", "get-url", remote)

    def get_github_repo(self, remote: str = "origin") -> tuple[str, str] | None:
        """``(owner, repo)`` of ``remote`` if it points at GitHub."""
        try:
            url = self.get_remote_url(remote)
        except GitError:
            logger.debug("No %s remote configured", remote)
            return None
        return parse_github_remote(url)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def add(self, *paths: str | Path) -> None:
        self._run("add", "--", *(str(p) for p in paths))

    def commit(self, message: str, *, allow_empty: bool = False) -> None:
        args = ["commit", "-m", message]
        if allow_empty:
            args.append("--allow-empty")
        self._run(*args)

    def create_tag(self, name: str, message: str | None = None) -> None:
        """Create an annotated tag at HEAD."""
        self._run("tag", "-a", name, "-m", message or name)

    def push(self, *, follow_tags: bool = True) -> None:
        args = ["push"]
        if follow_tags:
            args.append("--follow-tags")
        self._run(*args)
