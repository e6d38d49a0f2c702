"""Tests for the GitHub release client."""

from __future__ import annotations

import json

import httpx
import pytest

from release_helper.exceptions import ConfigError, GitHubAPIError, MissingTokenError
from release_helper.forge.github import GitHubClient, get_token


class TestGetToken:
    def test_primary_variable(self):
        assert get_token("GITHUB_TOKEN", {"GITHUB_TOKEN": "abc", "GH_TOKEN": "def"}) == "abc"

    def test_fallback_variable(self):
        assert get_token("GITHUB_TOKEN", {"GH_TOKEN": "def"}) == "def"

    def test_custom_variable(self):
        assert get_token("RELEASE_TOKEN", {"RELEASE_TOKEN": "xyz"}) == "xyz"

    def test_missing(self):
        with pytest.raises(MissingTokenError, match="GITHUB_TOKEN"):
            get_token("GITHUB_TOKEN", {})

    def test_empty_counts_as_missing(self):
        with pytest.raises(MissingTokenError):
            get_token("GITHUB_TOKEN", {"GITHUB_TOKEN": ""})

    def test_missing_token_is_config_error(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        monkeypatch.delenv("GH_TOKEN", raising=False)

        with pytest.raises(ConfigError):
            get_token()


class TestCreateRelease:
    def test_request(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                201,
                json={"id": 1, "html_url": "https://github.com/octo/widgets/releases/tag/v1.1.0"},
            )

        with GitHubClient("secret", transport=httpx.MockTransport(handler)) as client:
            url = client.create_release(
                "octo",
                "widgets",
                tag="v1.1.0",
                commit_hash="0123abcd",
                body="## Features:\n- (a1b2c3d) feat: x",
            )

        assert url == "https://github.com/octo/widgets/releases/tag/v1.1.0"
        (request,) = requests
        assert request.method == "POST"
        assert str(request.url) == "https://api.github.com/repos/octo/widgets/releases"
        assert request.headers["Authorization"] == "Bearer secret"
        assert json.loads(request.content) == {
            "name": "Release v1.1.0",
            "tag_name": "v1.1.0",
            "body": "## Features:\n- (a1b2c3d) feat: x",
            "target_commitish": "0123abcd",
        }

    def test_custom_name_and_api_url(self):
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["name"] = json.loads(request.content)["name"]
            return httpx.Response(201, json={"html_url": "https://ghe.example/r"})

        transport = httpx.MockTransport(handler)
        with GitHubClient("t", "https://ghe.example/api/v3/", transport=transport) as client:
            client.create_release("o", "r", tag="v2.0.0", commit_hash="c", body="b", name="Two")

        assert seen == {"url": "https://ghe.example/api/v3/repos/o/r/releases", "name": "Two"}

    def test_http_error(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(422, json={"message": "Validation Failed"})
        )

        with GitHubClient("t", transport=transport) as client:
            with pytest.raises(GitHubAPIError, match="422") as exc_info:
                client.create_release("o", "r", tag="v1", commit_hash="c", body="b")

        assert exc_info.value.status_code == 422

    def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with GitHubClient("t", transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(GitHubAPIError, match="connection refused") as exc_info:
                client.create_release("o", "r", tag="v1", commit_hash="c", body="b")

        assert exc_info.value.status_code is None

    def test_non_json_response(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(201, text="<html>ok</html>"))

        with GitHubClient("t", transport=transport) as client:
            with pytest.raises(GitHubAPIError, match="non-JSON") as exc_info:
                client.create_release("o", "r", tag="v1", commit_hash="c", body="b")

        assert exc_info.value.status_code == 201

    def test_response_without_html_url(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(201, json={"id": 7}))

        with GitHubClient("t", transport=transport) as client:
            with pytest.raises(GitHubAPIError, match="html_url"):
                client.create_release("o", "r", tag="v1", commit_hash="c", body="b")
