"""
Derive the upstream ``owner/repo`` pair from a recipe.

Two URL shapes are recognised:
- ``source.git``: https://github.com/<owner>/<repo>[anything]
- ``source.url``: https://github.com/<owner>/<repo>/archive/...

``source.git`` is tried first.
"""

import re as _re

import recipebump.constants as constants
import recipebump.errors as errors
import recipebump.recipe.descriptor as descriptor_module


def _git_pattern(base_url: str) -> _re.Pattern[str]:
    return _re.compile(rf"^{_re.escape(base_url)}/([^/]+/[^/]+)")


def _archive_pattern(base_url: str) -> _re.Pattern[str]:
    return _re.compile(rf"^{_re.escape(base_url)}/([^/]+/[^/]+)/archive/")


def _clean(repo: str) -> str:
    repo = repo.split("#", 1)[0].split("?", 1)[0]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return repo


def repository_from_git_url(url: str, base_url: str = constants.DEFAULT_GITHUB_URL) -> str | None:
    """Extract owner/repo from a git URL, or None if it is not a GitHub URL."""
    match = _git_pattern(base_url).match(url.strip())
    return _clean(match.group(1)) if match else None


def repository_from_archive_url(
    url: str, base_url: str = constants.DEFAULT_GITHUB_URL
) -> str | None:
    """Extract owner/repo from a GitHub archive URL, or None if it does not match."""
    match = _archive_pattern(base_url).match(url.strip())
    return match.group(1) if match else None


def derive_repository(
    descriptor: descriptor_module.RecipeDescriptor,
    base_url: str = constants.DEFAULT_GITHUB_URL,
) -> str:
    """
    Find the owner/repo pair a recipe points at.

    Raises:
        RepositoryNotFoundError: If neither source.git nor source.url matches.
    """
    repo = repository_from_git_url(descriptor.get("source.git"), base_url)
    if repo is None:
        repo = repository_from_archive_url(descriptor.get("source.url"), base_url)
    if repo is None:
        raise errors.RepositoryNotFoundError(descriptor.path)
    return repo
