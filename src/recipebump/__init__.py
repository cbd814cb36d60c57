"""
recipebump - upstream update checks for conda recipes

Looks upstream for a newer commit, release or archive and bumps the
recipe descriptor in place when one is found.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("recipebump")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "recipebump Contributors"

from recipebump.config import Settings  # noqa: E402
from recipebump.resolver import Resolution, resolve  # noqa: E402

__all__ = ["__version__", "__version_info__", "Settings", "Resolution", "resolve"]
