"""Recipe discovery under the recipes directory."""

import pathlib as _pathlib

import recipebump.constants as constants


def discover_recipes(
    recipes_dir: _pathlib.Path,
    filename: str = constants.DEFAULT_RECIPE_FILENAME,
) -> dict[str, _pathlib.Path]:
    """
    Find every ``<recipes_dir>/<package>/<filename>``.

    Returns:
        Dict mapping package name to descriptor path, sorted by name.
        Empty if the directory does not exist.
    """
    if not recipes_dir.is_dir():
        return {}

    found: dict[str, _pathlib.Path] = {}
    for package_dir in sorted(recipes_dir.iterdir()):
        if not package_dir.is_dir() or package_dir.name.startswith("."):
            continue
        recipe_file = package_dir / filename
        if recipe_file.is_file():
            found[package_dir.name] = recipe_file
    return found
