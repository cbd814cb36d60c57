"""Three-component package versions."""

from __future__ import annotations

import dataclasses as _dataclasses
import re as _re

import recipebump.errors as errors

_VERSION_RE = _re.compile(r"^(\d+)\.(\d+)\.(\d+)$")


@_dataclasses.dataclass(frozen=True)
class PackageVersion:
    """A ``major.minor.patch`` version as stored in ``package.version``."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> PackageVersion:
        """
        Parse a dotted version string.

        Raises:
            InvalidVersionError: If the text is not three dot-separated integers.
        """
        match = _VERSION_RE.match(text.strip())
        if match is None:
            raise errors.InvalidVersionError(text)
        major, minor, patch = (int(part) for part in match.groups())
        return cls(major, minor, patch)

    def bump_patch(self) -> PackageVersion:
        """Return the next patch version; major and minor never change."""
        return _dataclasses.replace(self, patch=self.patch + 1)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def bump_patch(text: str) -> str:
    """Increment the patch component of a version string (0.0.1 -> 0.0.2)."""
    return str(PackageVersion.parse(text).bump_patch())
