"""Track the latest published upstream release."""

import logging as _logging

import recipebump.constants as constants
import recipebump.recipe as recipe
import recipebump.strategies.base as base
import recipebump.upstream as upstream

_logger = _logging.getLogger(__name__)


def strip_tag_prefix(tag: str) -> str:
    """Drop a single leading ``v`` from a release tag (v1.2.0 -> 1.2.0)."""
    return tag[1:] if tag.startswith("v") else tag


class LatestReleaseStrategy(base.Strategy):
    """
    Compare context.version against the latest release tag.

    On change the release archive is downloaded from the tag URL template
    (never from source.url, which the recipe itself templates) and its
    digest becomes the new source.sha256. package.version is left alone:
    the upstream version already changes the built artifact.
    """

    name = "track-latest-release"
    aliases = ("github-latest-release",)
    description = "Update context.version and source.sha256 to the latest GitHub release"
    key_field = "context.version"
    key_label = "version"

    def describe_source(self, descriptor: recipe.RecipeDescriptor) -> str:
        return f"latest release from {self._repository(descriptor)}"

    def fetch_upstream_key(self, descriptor: recipe.RecipeDescriptor) -> str:
        tag = self._github.latest_release_tag(self._repository(descriptor))
        _logger.debug("Latest release tag is %s", tag)
        return strip_tag_prefix(tag)

    def archive_url(self, descriptor: recipe.RecipeDescriptor, version: str) -> str:
        """Release archive URL for ``version``."""
        return constants.RELEASE_ARCHIVE_TEMPLATE.format(
            base=self._settings.github_url,
            repo=self._repository(descriptor),
            version=version,
        )

    def plan_updates(
        self, descriptor: recipe.RecipeDescriptor, upstream_key: str
    ) -> dict[str, str]:
        sha256 = upstream.sha256_of_url(self._http, self.archive_url(descriptor, upstream_key))
        return {
            self.key_field: upstream_key,
            "source.sha256": sha256,
        }
