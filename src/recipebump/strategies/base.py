"""
Shared contract for update strategies.

Every strategy answers two questions about a recipe:
1. What is the comparison key upstream right now? (fetch_upstream_key)
2. Which fields change when that key differs from the stored one? (plan_updates)

The resolver owns the compare-then-mutate flow; strategies never write.
"""

import abc as _abc
import typing as _typing

import httpx as _httpx

import recipebump.config as config
import recipebump.recipe as recipe
import recipebump.upstream as upstream


class Strategy(_abc.ABC):
    """Base class for update strategies."""

    name: _typing.ClassVar[str]
    """Canonical strategy name used on the command line."""

    aliases: _typing.ClassVar[tuple[str, ...]] = ()
    """Alternative names accepted on the command line."""

    description: _typing.ClassVar[str]
    """One-line summary for help output."""

    key_field: _typing.ClassVar[str]
    """Descriptor field holding the stored comparison key."""

    key_label: _typing.ClassVar[str]
    """Short label for the key in progress messages (rev, version, sha256)."""

    bumps_version: _typing.ClassVar[bool] = False
    """Whether a change also increments the patch of package.version."""

    def __init__(
        self,
        settings: config.Settings,
        github: upstream.GitHubClient,
        http: _httpx.Client,
    ) -> None:
        self._settings = settings
        self._github = github
        self._http = http

    @_abc.abstractmethod
    def describe_source(self, descriptor: recipe.RecipeDescriptor) -> str:
        """Human-readable name of the upstream source being checked."""

    @_abc.abstractmethod
    def fetch_upstream_key(self, descriptor: recipe.RecipeDescriptor) -> str:
        """Look upstream and return the current comparison key."""

    def stored_key(self, descriptor: recipe.RecipeDescriptor) -> str:
        """Comparison key recorded in the recipe, empty if absent."""
        return descriptor.get(self.key_field)

    def plan_updates(
        self, descriptor: recipe.RecipeDescriptor, upstream_key: str
    ) -> dict[str, str]:
        """Fields to write when the key changed. Version bumps are added by the resolver."""
        return {self.key_field: upstream_key}

    def _repository(self, descriptor: recipe.RecipeDescriptor) -> str:
        return recipe.derive_repository(descriptor, self._settings.github_url)
