"""
CLI module for recipebump.

Provides the command-line interface using Click.
"""

from recipebump.cli.main import cli, main

__all__ = ["main", "cli"]
