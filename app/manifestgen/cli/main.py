"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from manifestgen import __version__
from manifestgen.cli.commands import generate, init
from manifestgen.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="manifestgen",
    help="Generate a typed module manifest from a source tree.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"manifestgen version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output and debug logging.",
        ),
    ] = False,
) -> None:
    """manifestgen - map every module of a source tree to a typed key.

    Scans a directory, derives a dotted key for each source file and
    writes the mapping to <base-dir>/.manifest.ts.
    """
    configure_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(generate.app, name="generate")
app.add_typer(init.app, name="init")


if __name__ == "__main__":
    app()
