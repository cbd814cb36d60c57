"""Re-fetch source.url and track its content hash."""

import recipebump.errors as errors
import recipebump.recipe as recipe
import recipebump.strategies.base as base
import recipebump.upstream as upstream


class ContentHashStrategy(base.Strategy):
    """Compare source.sha256 against a fresh download of source.url; bump the patch on change."""

    name = "track-content-hash"
    aliases = ("yolo",)
    description = "Re-fetch source.url and update source.sha256 if the content changed"
    key_field = "source.sha256"
    key_label = "sha256"
    bumps_version = True

    def describe_source(self, descriptor: recipe.RecipeDescriptor) -> str:
        return self._source_url(descriptor)

    def fetch_upstream_key(self, descriptor: recipe.RecipeDescriptor) -> str:
        return upstream.sha256_of_url(self._http, self._source_url(descriptor))

    def _source_url(self, descriptor: recipe.RecipeDescriptor) -> str:
        url = descriptor.get("source.url")
        if not url:
            where = descriptor.path or "recipe"
            raise errors.ConfigurationError(f"No source.url to fetch in {where}")
        return url
