"""
Minimal GitHub REST client.

Only the two lookups the update strategies need are implemented:
the head commit of a branch and the latest published release.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import httpx as _httpx

import recipebump.constants as constants
import recipebump.errors as errors

_logger = _logging.getLogger(__name__)


class GitHubClient:
    """
    Synchronous GitHub API client.

    Owns its httpx.Client unless one is passed in. Use as a context manager
    (or call close()) to release the connection pool.
    """

    def __init__(
        self,
        api_url: str = constants.DEFAULT_GITHUB_API_URL,
        *,
        token: str | None = None,
        timeout: float = constants.DEFAULT_HTTP_TIMEOUT,
        transport: _httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_url: Base URL of the REST API.
            token: Optional token sent as a bearer credential.
            timeout: Request timeout in seconds.
            transport: Custom httpx transport (tests use httpx.MockTransport).
        """
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": constants.GITHUB_API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._api_url = api_url.rstrip("/")
        self._client = _httpx.Client(
            base_url=self._api_url,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def latest_commit(self, repo: str, branch: str = constants.DEFAULT_BRANCH) -> str:
        """Return the sha of the head commit on ``branch``."""
        data = self._get_json(f"/repos/{repo}/commits/{branch}")
        return self._require_str(data, "sha", f"/repos/{repo}/commits/{branch}")

    def latest_release_tag(self, repo: str) -> str:
        """Return the tag name of the latest published release."""
        data = self._get_json(f"/repos/{repo}/releases/latest")
        return self._require_str(data, "tag_name", f"/repos/{repo}/releases/latest")

    def _get_json(self, path: str) -> dict[str, _typing.Any]:
        url = f"{self._api_url}{path}"
        _logger.debug("GET %s", url)
        try:
            response = self._client.get(path)
            response.raise_for_status()
            data = response.json()
        except _httpx.HTTPStatusError as e:
            raise errors.UpstreamError(
                url, f"HTTP {e.response.status_code}"
            ) from e
        except _httpx.HTTPError as e:
            raise errors.UpstreamError(url, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise errors.UpstreamError(url, f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise errors.UpstreamError(url, "expected a JSON object")
        return data

    def _require_str(self, data: dict[str, _typing.Any], key: str, path: str) -> str:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            raise errors.UpstreamError(
                f"{self._api_url}{path}", f"response has no '{key}' field"
            )
        return value
