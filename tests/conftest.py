"""
Shared pytest fixtures for recipebump tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import hashlib as _hashlib
import json as _json
import pathlib as _pathlib
import textwrap as _textwrap
import typing as _typing

import httpx as _httpx
import pytest as _pytest

import recipebump.config as config

# Environment keys that would leak the caller's setup into tests
ENV_KEYS_TO_CLEAR = [
    "GITHUB_OUTPUT",
    "GH_TOKEN",
    "GITHUB_TOKEN",
    "RECIPEBUMP_ENV_FILE",
    "RECIPEBUMP_RECIPES_DIR",
    "RECIPEBUMP_RECIPE_FILENAME",
    "RECIPEBUMP_GITHUB_API_URL",
    "RECIPEBUMP_GITHUB_URL",
    "RECIPEBUMP_GITHUB_TOKEN",
    "RECIPEBUMP_DEFAULT_BRANCH",
    "RECIPEBUMP_HTTP_TIMEOUT",
    "RECIPEBUMP_OUTPUT_FILE",
]

# =============================================================================
# Sample recipes
# =============================================================================

COMMIT_RECIPE = _textwrap.dedent(
    """\
    # Tracks upstream main
    context:
      name: rams

    package:
      name: ${{ name }}
      version: 1.2.3

    source:
      git: https://github.com/acme/rams
      rev: abc123  # pinned

    build:
      noarch: generic
    """
)

RELEASE_RECIPE = _textwrap.dedent(
    """\
    context:
      name: baseline-ui
      version: "1.4.0"

    package:
      name: ${{ name }}
      version: 0.0.7

    source:
      url: https://github.com/acme/baseline-ui/archive/refs/tags/v${{ version }}.tar.gz
      sha256: 1111111111111111111111111111111111111111111111111111111111111111
    """
)

CONTENT_RECIPE = _textwrap.dedent(
    """\
    package:
      name: notes
      version: 0.3.9

    source:
      url: https://files.example.com/notes/SKILL.md
      sha256: {sha256}
    """
)


def sha256_hex(data: bytes) -> str:
    """Hex SHA-256 of ``data``."""
    return _hashlib.sha256(data).hexdigest()


# =============================================================================
# Fake upstream
# =============================================================================


class FakeUpstream:
    """
    In-memory stand-in for the GitHub API and file downloads.

    Routes:
    - api.github.com /repos/<repo>/commits/<branch> -> {"sha": commits[(repo, branch)]}
    - api.github.com /repos/<repo>/releases/latest  -> {"tag_name": releases[repo]}
    - any other URL                                  -> files[url] bytes, else 404
    """

    def __init__(self) -> None:
        self.commits: dict[tuple[str, str], str] = {}
        self.releases: dict[str, str] = {}
        self.files: dict[str, bytes] = {}
        self.requests: list[_httpx.Request] = []

    @property
    def transport(self) -> _httpx.MockTransport:
        return _httpx.MockTransport(self._handle)

    @property
    def requested_urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def _handle(self, request: _httpx.Request) -> _httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.github.com":
            return self._handle_api(request)
        content = self.files.get(str(request.url))
        if content is None:
            return _httpx.Response(404, text="Not Found")
        return _httpx.Response(200, content=content)

    def _handle_api(self, request: _httpx.Request) -> _httpx.Response:
        parts = request.url.path.strip("/").split("/")
        # repos/<owner>/<name>/...
        if len(parts) >= 5 and parts[0] == "repos":
            repo = f"{parts[1]}/{parts[2]}"
            if parts[3] == "commits":
                sha = self.commits.get((repo, parts[4]))
                if sha is not None:
                    return _httpx.Response(200, json={"sha": sha})
            elif parts[3:5] == ["releases", "latest"]:
                tag = self.releases.get(repo)
                if tag is not None:
                    return _httpx.Response(200, json={"tag_name": tag})
        return _httpx.Response(404, content=_json.dumps({"message": "Not Found"}))


# =============================================================================
# Fixtures
# =============================================================================


@_pytest.fixture(autouse=True)
def clean_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove recipebump and GitHub Actions variables from the environment."""
    for key in ENV_KEYS_TO_CLEAR:
        monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def recipes_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """Empty recipes directory."""
    path = tmp_path / "recipes"
    path.mkdir()
    return path


@_pytest.fixture
def write_recipe(
    recipes_dir: _pathlib.Path,
) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Factory writing ``recipes/<name>/recipe.yaml`` and returning its path."""

    def _write(name: str, content: str) -> _pathlib.Path:
        package_dir = recipes_dir / name
        package_dir.mkdir(parents=True, exist_ok=True)
        path = package_dir / "recipe.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def settings(recipes_dir: _pathlib.Path) -> config.Settings:
    """Settings pointing at the temporary recipes directory."""
    return config.Settings(recipes_dir=recipes_dir)


@_pytest.fixture
def fake_upstream() -> FakeUpstream:
    """Fresh fake upstream with no commits, releases or files."""
    return FakeUpstream()
