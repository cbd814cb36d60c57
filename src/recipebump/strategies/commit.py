"""Track the head commit of the upstream default branch."""

import logging as _logging

import recipebump.recipe as recipe
import recipebump.strategies.base as base

_logger = _logging.getLogger(__name__)


class LatestCommitStrategy(base.Strategy):
    """Compare source.rev against the branch head; bump the patch on change."""

    name = "track-latest-commit"
    aliases = ("git-main",)
    description = "Update source.rev to the latest commit on the default branch"
    key_field = "source.rev"
    key_label = "rev"
    bumps_version = True

    def describe_source(self, descriptor: recipe.RecipeDescriptor) -> str:
        return f"latest commit from {self._repository(descriptor)} {self._settings.default_branch} branch"

    def fetch_upstream_key(self, descriptor: recipe.RecipeDescriptor) -> str:
        repo = self._repository(descriptor)
        sha = self._github.latest_commit(repo, self._settings.default_branch)
        _logger.debug("Head of %s@%s is %s", repo, self._settings.default_branch, sha)
        return sha
