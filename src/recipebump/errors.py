"""
Exception types for recipebump.

Every failure is fatal for the invocation. The CLI maps all of these to
exit status 1; nothing is retried or rolled back.
"""

import pathlib as _pathlib


class RecipeBumpError(Exception):
    """Base class for all recipebump errors."""

    pass


class UsageError(RecipeBumpError):
    """The command was invoked incorrectly (e.g. unknown strategy)."""

    pass


class ConfigurationError(RecipeBumpError):
    """The recipe on disk cannot be used as-is."""

    pass


class RecipeNotFoundError(ConfigurationError):
    """Raised when the recipe descriptor file does not exist."""

    def __init__(self, path: _pathlib.Path) -> None:
        self.path = path
        super().__init__(f"Recipe file not found: {path}")


class RecipeFormatError(ConfigurationError):
    """Raised when the recipe is not a YAML mapping."""

    def __init__(self, path: _pathlib.Path | None, message: str) -> None:
        self.path = path
        where = f" {path}" if path is not None else ""
        super().__init__(f"Invalid recipe{where}: {message}")


class RepositoryNotFoundError(ConfigurationError):
    """Raised when no owner/repo pair can be derived from the recipe."""

    def __init__(self, path: _pathlib.Path | None = None) -> None:
        self.path = path
        where = f" {path}" if path is not None else " recipe"
        super().__init__(f"Could not find repository URL in{where}")


class InvalidVersionError(ConfigurationError):
    """Raised when package.version is not a three-component version."""

    def __init__(self, version: object) -> None:
        self.version = version
        super().__init__(
            f"package.version must be 'major.minor.patch' with numeric parts, got {version!r}"
        )


class RecipeWriteError(ConfigurationError):
    """Raised when a recipe or results file cannot be written."""

    def __init__(self, path: _pathlib.Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot write {path}: {reason}")


class UpstreamError(RecipeBumpError):
    """An upstream request failed or returned an unexpected response."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"Upstream request to {url} failed: {message}")
