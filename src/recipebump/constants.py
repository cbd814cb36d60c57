"""
Shared constants for recipebump.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Recipe layout defaults
DEFAULT_RECIPES_DIR = "recipes"
"""Directory holding one sub-directory per package."""

DEFAULT_RECIPE_FILENAME = "recipe.yaml"
"""Descriptor file name inside each package directory."""

# Upstream defaults
DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Base URL of the GitHub REST API."""

DEFAULT_GITHUB_URL = "https://github.com"
"""Base URL for GitHub web and archive links."""

DEFAULT_BRANCH = "main"
"""Branch whose head the commit strategy tracks."""

GITHUB_API_VERSION = "2022-11-28"
"""Value sent in the X-GitHub-Api-Version header."""

RELEASE_ARCHIVE_TEMPLATE = "{base}/{repo}/archive/refs/tags/v{version}.tar.gz"
"""Archive URL for a tagged release. Tags are assumed to carry a `v` prefix."""

# HTTP defaults
DEFAULT_HTTP_TIMEOUT = 30.0
"""Seconds before an upstream request times out."""

DOWNLOAD_CHUNK_SIZE = 64 * 1024
"""Bytes per chunk when streaming an archive into the digest."""

# Pipeline output keys
OLD_VERSION_KEY = "old-version"
"""Output key for the comparison key stored in the recipe."""

NEW_VERSION_KEY = "new-version"
"""Output key for the comparison key found upstream."""
