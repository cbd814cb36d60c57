"""
Recipe descriptors: loading, editing, versions and repository lookup.
"""

from recipebump.recipe.descriptor import RecipeDescriptor
from recipebump.recipe.discovery import discover_recipes
from recipebump.recipe.repository import derive_repository
from recipebump.recipe.version import PackageVersion, bump_patch

__all__ = [
    "PackageVersion",
    "RecipeDescriptor",
    "bump_patch",
    "derive_repository",
    "discover_recipes",
]
