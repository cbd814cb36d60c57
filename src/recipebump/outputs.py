"""
Machine-readable results for the enclosing CI pipeline.

Two ``key=value`` lines are appended to the results file (GitHub Actions'
``$GITHUB_OUTPUT``) or written to standard output when no file is set.
"""

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click

import recipebump.constants as constants
import recipebump.errors as errors

_logger = _logging.getLogger(__name__)


def format_outputs(old_key: str, new_key: str) -> list[str]:
    """The two result lines, without trailing newlines."""
    return [
        f"{constants.OLD_VERSION_KEY}={old_key}",
        f"{constants.NEW_VERSION_KEY}={new_key}",
    ]


def write_outputs(
    old_key: str,
    new_key: str,
    output_file: _pathlib.Path | None = None,
    *,
    stream: _typing.TextIO | None = None,
) -> None:
    """
    Emit the old/new comparison keys.

    Args:
        old_key: Key stored in the recipe before this run.
        new_key: Key found upstream.
        output_file: File to append to. Standard output when None.
        stream: Explicit stream used instead of standard output.

    Raises:
        RecipeWriteError: If the output file cannot be appended to.
    """
    lines = format_outputs(old_key, new_key)
    if output_file is not None:
        _logger.debug("Appending results to %s", output_file)
        try:
            with output_file.open("a", encoding="utf-8") as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            raise errors.RecipeWriteError(output_file, e.strerror or str(e)) from e
        return

    for line in lines:
        _click.echo(line, file=stream)
