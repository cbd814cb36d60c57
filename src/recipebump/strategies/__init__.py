"""
Update strategies and the registry mapping command-line names to them.
"""

import recipebump.errors as errors
from recipebump.strategies.base import Strategy
from recipebump.strategies.commit import LatestCommitStrategy
from recipebump.strategies.content_hash import ContentHashStrategy
from recipebump.strategies.release import LatestReleaseStrategy

STRATEGIES: dict[str, type[Strategy]] = {
    cls.name: cls
    for cls in (LatestCommitStrategy, LatestReleaseStrategy, ContentHashStrategy)
}
"""Strategy classes keyed by canonical name, in help-output order."""

_ALIASES: dict[str, str] = {
    alias: name for name, cls in STRATEGIES.items() for alias in cls.aliases
}


def strategy_names() -> list[str]:
    """Canonical strategy names."""
    return list(STRATEGIES)


def get_strategy_class(name: str) -> type[Strategy]:
    """
    Look up a strategy by canonical name or alias.

    Raises:
        UsageError: If the name is not known.
    """
    canonical = _ALIASES.get(name, name)
    try:
        return STRATEGIES[canonical]
    except KeyError:
        raise errors.UsageError(
            f"Unknown strategy '{name}'. Available: {', '.join(STRATEGIES)}"
        ) from None


__all__ = [
    "STRATEGIES",
    "ContentHashStrategy",
    "LatestCommitStrategy",
    "LatestReleaseStrategy",
    "Strategy",
    "get_strategy_class",
    "strategy_names",
]
