"""CLI commands for manifestgen.

This package contains all subcommand implementations.
"""

from manifestgen.cli.commands import generate, init

__all__ = ["generate", "init"]
