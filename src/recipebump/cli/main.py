"""
Main CLI entry point for recipebump.

Provides the command-line interface using Click. Every failure exits with
status 1, including argument errors that Click would report with status 2.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.table as _rich_table

import recipebump
import recipebump.config as config
import recipebump.errors as errors
import recipebump.recipe as recipe
import recipebump.resolver as resolver
import recipebump.strategies as strategies

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_EPILOG = """\b
Examples:
  recipebump resolve vercel-react-best-practices track-latest-commit
  recipebump resolve baseline-ui track-latest-release
  recipebump resolve rams track-content-hash
"""


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    _logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    _logging.getLogger("recipebump").setLevel(_logging.DEBUG)


def _strategy_help() -> str:
    lines = ["Strategies:"]
    for name, cls in strategies.STRATEGIES.items():
        lines.append(f"  {name:<22} {cls.description}")
    return "\n".join(lines)


def _get_settings(
    ctx: _click.Context, recipes_dir: _pathlib.Path | None = None
) -> config.Settings:
    settings: config.Settings = ctx.obj["settings"]
    if recipes_dir is not None:
        # Subcommand option wins over the group option
        settings = settings.model_copy(update={"recipes_dir": recipes_dir})
    return settings


_recipes_dir_option = _click.option(
    "--recipes-dir",
    type=_click.Path(file_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Directory containing <package>/recipe.yaml (default: ./recipes)",
)


@_click.group(context_settings=CONTEXT_SETTINGS, epilog=_EPILOG)
@_click.version_option(recipebump.__version__, "-v", "--version", prog_name="recipebump")
@_recipes_dir_option
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@_click.pass_context
def cli(ctx: _click.Context, recipes_dir: _pathlib.Path | None, verbose: bool) -> None:
    """recipebump - check conda recipes for upstream updates."""
    _configure_logging(verbose)

    overrides: dict[str, _typing.Any] = {}
    if recipes_dir is not None:
        overrides["recipes_dir"] = recipes_dir
    try:
        settings = config.Settings(**overrides)
    except _pydantic.ValidationError as e:
        _click.echo(f"Error: invalid configuration:\n{e}", err=True)
        raise SystemExit(1) from None

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@_click.argument("package_name", metavar="PACKAGE")
@_click.argument("strategy_name", metavar="STRATEGY")
@_click.option(
    "--dry-run",
    is_flag=True,
    help="Report what would change without writing the recipe",
)
@_click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Print the result as JSON after the progress output",
)
@_recipes_dir_option
@_click.pass_context
def resolve(
    ctx: _click.Context,
    package_name: str,
    strategy_name: str,
    dry_run: bool,
    json_output: bool,
    recipes_dir: _pathlib.Path | None,
) -> None:
    """Check PACKAGE upstream using STRATEGY and bump its recipe if needed."""
    settings = _get_settings(ctx, recipes_dir)

    try:
        result = resolver.resolve(
            package_name,
            strategy_name,
            settings=settings,
            dry_run=dry_run,
            report=_click.echo,
        )
    except errors.UsageError as e:
        _click.echo(f"Error: {e}", err=True)
        _click.echo(ctx.get_usage(), err=True)
        _click.echo("", err=True)
        _click.echo(_strategy_help(), err=True)
        raise SystemExit(1) from None
    except errors.RecipeBumpError as e:
        _click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    if json_output:
        _click.echo(_json.dumps(result.to_dict(), indent=2))


@cli.command("list")
@_click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output in JSON format",
)
@_recipes_dir_option
@_click.pass_context
def list_recipes(
    ctx: _click.Context, json_output: bool, recipes_dir: _pathlib.Path | None
) -> None:
    """List recipes with their stored versions and upstream repository."""
    settings = _get_settings(ctx, recipes_dir)
    found = recipe.discover_recipes(settings.recipes_dir, settings.recipe_filename)

    rows: list[dict[str, _typing.Any]] = []
    for name, path in found.items():
        row: dict[str, _typing.Any] = {"name": name, "path": str(path)}
        try:
            descriptor = recipe.RecipeDescriptor.load(path)
        except errors.ConfigurationError as e:
            row["error"] = str(e)
            rows.append(row)
            continue
        row["version"] = descriptor.get("package.version")
        row["rev"] = descriptor.get("source.rev")
        row["context_version"] = descriptor.get("context.version")
        row["sha256"] = descriptor.get("source.sha256")
        try:
            row["repository"] = recipe.derive_repository(descriptor, settings.github_url)
        except errors.RepositoryNotFoundError:
            row["repository"] = None
        rows.append(row)

    if json_output:
        _click.echo(_json.dumps(rows, indent=2))
        return

    if not rows:
        _click.echo(f"No recipes found in {settings.recipes_dir}")
        return

    table = _rich_table.Table(title=f"Recipes in {settings.recipes_dir}")
    table.add_column("Package", style="cyan", no_wrap=True)
    table.add_column("Version")
    table.add_column("Repository")
    table.add_column("Tracked key")
    for row in rows:
        if "error" in row:
            table.add_row(row["name"], "-", f"[red]{row['error']}[/red]", "-")
            continue
        tracked = row["rev"] or row["context_version"] or row["sha256"][:12]
        table.add_row(row["name"], row["version"], row["repository"] or "-", tracked or "-")
    _rich_console.Console().print(table)


@cli.command("strategies")
def list_strategies() -> None:
    """List update strategies and their aliases."""
    for name, cls in strategies.STRATEGIES.items():
        aliases = f" (alias: {', '.join(cls.aliases)})" if cls.aliases else ""
        _click.echo(f"{name}{aliases}")
        _click.echo(f"  {cls.description}")


def main(args: list[str] | None = None) -> None:
    """Entry point for the console script."""
    try:
        cli.main(args=args, prog_name="recipebump", standalone_mode=False)
    except _click.ClickException as e:
        e.show()
        raise SystemExit(1) from None
    except _click.Abort:
        _click.echo("Aborted!", err=True)
        raise SystemExit(1) from None


if __name__ == "__main__":
    main()
