"""
The recipe version resolver.

One run: load the recipe, ask the strategy for the upstream key, report
both keys, and rewrite the recipe when they differ. Strategies differ only
in where the key comes from and which fields change; the flow below is
shared by all of them.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import httpx as _httpx

import recipebump.config as config
import recipebump.outputs as outputs
import recipebump.recipe as recipe
import recipebump.strategies as strategies
import recipebump.upstream as upstream

_logger = _logging.getLogger(__name__)

VERSION_FIELD = "package.version"

Reporter = _typing.Callable[[str], None]


@_dataclasses.dataclass
class Resolution:
    """Outcome of one resolver run."""

    package: str
    """Package name the run was for."""

    strategy: str
    """Canonical name of the strategy used."""

    recipe_path: _pathlib.Path
    """Descriptor that was checked."""

    stored_key: str
    """Comparison key found in the recipe (empty if absent)."""

    upstream_key: str
    """Comparison key found upstream."""

    updates: dict[str, str] = _dataclasses.field(default_factory=dict)
    """Fields changed (or that would change, on a dry run)."""

    written: bool = False
    """Whether the recipe file was rewritten."""

    @property
    def changed(self) -> bool:
        """Whether upstream differs from the recipe. Exact string comparison."""
        return self.stored_key != self.upstream_key

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "package": self.package,
            "strategy": self.strategy,
            "recipe": str(self.recipe_path),
            "old_version": self.stored_key,
            "new_version": self.upstream_key,
            "changed": self.changed,
            "updates": dict(self.updates),
            "written": self.written,
        }


def resolve(
    package_name: str,
    strategy_name: str,
    *,
    settings: config.Settings | None = None,
    dry_run: bool = False,
    report: Reporter | None = None,
    output_stream: _typing.TextIO | None = None,
    transport: _httpx.BaseTransport | None = None,
) -> Resolution:
    """
    Check one package against upstream and update its recipe if needed.

    Args:
        package_name: Directory name under the recipes directory.
        strategy_name: Strategy name or alias.
        settings: Configuration (defaults to Settings()).
        dry_run: Compute and report, but never write the recipe.
        report: Receives human-readable progress lines (default: INFO log).
        output_stream: Stream for result lines when no output file is configured.
        transport: httpx transport for all upstream requests (tests).

    Raises:
        UsageError: Unknown strategy. Raised before any file or network access.
        ConfigurationError: Missing recipe, no derivable repository, bad version.
        UpstreamError: An upstream request failed.
    """
    strategy_cls = strategies.get_strategy_class(strategy_name)
    settings = settings or config.Settings()
    say: Reporter = report or _logger.info

    descriptor = recipe.RecipeDescriptor.load(settings.recipe_path(package_name))
    recipe_path = _typing.cast(_pathlib.Path, descriptor.path)

    github = upstream.GitHubClient(
        settings.github_api_url,
        token=settings.github_token_value(),
        timeout=settings.http_timeout,
        transport=transport,
    )
    http = _httpx.Client(
        timeout=settings.http_timeout, follow_redirects=True, transport=transport
    )
    with github, http:
        strategy = strategy_cls(settings, github, http)
        label = strategy.key_label

        say(f"Fetching {strategy.describe_source(descriptor)}...")
        upstream_key = strategy.fetch_upstream_key(descriptor)
        stored_key = strategy.stored_key(descriptor)

        outputs.write_outputs(
            stored_key, upstream_key, settings.output_file, stream=output_stream
        )

        resolution = Resolution(
            package=package_name,
            strategy=strategy.name,
            recipe_path=recipe_path,
            stored_key=stored_key,
            upstream_key=upstream_key,
        )

        if not resolution.changed:
            say(f"{package_name} is up to date ({label}: {stored_key})")
            return resolution

        say(f"{package_name} needs update")
        pad = len(f"current {label}:") + 1
        say(f"  {f'current {label}:':<{pad}}{stored_key}")
        say(f"  {f'latest {label}:':<{pad}}{upstream_key}")

        updates = strategy.plan_updates(descriptor, upstream_key)
        old_version = None
        if strategy.bumps_version:
            old_version = descriptor.get(VERSION_FIELD)
            updates[VERSION_FIELD] = recipe.bump_patch(old_version)

    for field, value in updates.items():
        if field not in (strategy.key_field, VERSION_FIELD):
            say(f"  new {field.rsplit('.', 1)[-1]}: {value}")
        descriptor.set(field, value)
    if VERSION_FIELD in updates:
        say(f"  version: {old_version} -> {updates[VERSION_FIELD]}")

    resolution.updates = updates
    if dry_run:
        say(f"Dry run: {recipe_path} not written")
    else:
        descriptor.save()
        resolution.written = True
        say(f"Updated {recipe_path}")
    return resolution
