"""Exception hierarchy for release-helper.

Errors fall into three groups:

- configuration errors, raised before anything is mutated
- parse errors, raised before anything is published
- external-call errors, raised when git or the GitHub API fails

Nothing is retried; errors propagate to the CLI, which reports them
and exits with a non-zero status.
"""

from __future__ import annotations


class ReleaseHelperError(Exception):
    """Base class for all release-helper errors."""


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigError(ReleaseHelperError):
    """Invalid or missing configuration."""


class ConfigNotFoundError(ConfigError):
    """No pyproject.toml could be found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


class MissingTokenError(ConfigError):
    """No GitHub token is available in the environment."""


class InvalidVersionError(ConfigError):
    """A version string or tag is not a valid semantic version."""


class ProjectError(ConfigError):
    """A project file could not be read or updated."""


class VersionNotFoundError(ProjectError):
    """No version could be located in a project file."""


# =============================================================================
# Parse errors
# =============================================================================


class ParseError(ReleaseHelperError):
    """Commit history could not be turned into a changelog."""


class LogFormatError(ParseError):
    """A git log record does not have the expected layout."""


class CommitParseError(ParseError):
    """A commit subject has no recognized conventional commit type."""

    def __init__(self, message: str, *, hash_abbr: str | None = None, subject: str = "") -> None:
        super().__init__(message)
        self.hash_abbr = hash_abbr
        self.subject = subject


# =============================================================================
# External-call errors
# =============================================================================


class GitError(ReleaseHelperError):
    """A git command failed."""

    def __init__(self, message: str, *, command: list[str] | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.command = command or []
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}: {self.stderr.strip()}"
        return base


class GitHubAPIError(ReleaseHelperError):
    """The GitHub API rejected a request or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
