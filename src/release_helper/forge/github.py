"""GitHub release creation.

See https://docs.github.com/en/rest/releases/releases#create-a-release
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

import httpx

from release_helper.exceptions import GitHubAPIError, MissingTokenError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
FALLBACK_TOKEN_ENV = "GH_TOKEN"


def get_token(token_env: str = "GITHUB_TOKEN", environ: Mapping[str, str] | None = None) -> str:
    """Read the GitHub token from the environment.

    ``token_env`` is tried first, then ``GH_TOKEN``.

    Raises:
        MissingTokenError: If neither variable is set
    """
    env = os.environ if environ is None else environ
    for name in (token_env, FALLBACK_TOKEN_ENV):
        token = env.get(name)
        if token:
            return token
    raise MissingTokenError(f'No "{token_env}" or "{FALLBACK_TOKEN_ENV}" found in environment variables.')


class GitHubClient:
    """Minimal GitHub REST client for publishing releases."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.post(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GitHubAPIError(
                f"GitHub API returned {e.response.status_code} for POST {path}: {e.response.text}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"GitHub API request failed for POST {path}: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"GitHub API returned a non-JSON body for POST {path}",
                status_code=response.status_code,
            ) from e

    def create_release(
        self,
        owner: str,
        repo: str,
        *,
        tag: str,
        commit_hash: str,
        body: str,
        name: str | None = None,
    ) -> str:
        """Create a release and return its html URL.

        Args:
            owner: Repository owner
            repo: Repository name
            tag: Tag the release is attached to
            commit_hash: Commit the tag points to
            body: Release notes
            name: Release title, defaults to ``Release <tag>``

        Raises:
            GitHubAPIError: If the request fails or the response has no release URL
        """
        payload = {
            "name": name or f"Release {tag}",
            "tag_name": tag,
            "body": body,
            "target_commitish": commit_hash,
        }
        logger.debug("Creating release %s for %s/%s at %s", tag, owner, repo, commit_hash)
        data = self._post(f"/repos/{owner}/{repo}/releases", payload)
        try:
            return data["html_url"]
        except (KeyError, TypeError) as e:
            raise GitHubAPIError("GitHub API response has no html_url for the new release") from e
