"""Init command implementation.

Creates a manifestgen.toml file with the default settings.
"""

from pathlib import Path
from typing import Annotated

import typer

from manifestgen.core.config import ProjectConfig, save_config
from manifestgen.core.paths import DEFAULT_BASE_DIR, get_project_config_path
from manifestgen.generator.errors import ConfigurationError
from manifestgen.utils.formatting import print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Create a manifestgen.toml config file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    path: Annotated[
        Path | None,
        typer.Option(
            "--path",
            "-p",
            help="Where to write the config (default: ./manifestgen.toml).",
        ),
    ] = None,
    base_dir: Annotated[
        str,
        typer.Option(
            "--base-dir",
            "-b",
            help="Base directory to record in the config.",
        ),
    ] = DEFAULT_BASE_DIR,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file holding the default settings."""
    config_path = path or get_project_config_path()

    if config_path.exists() and not force:
        print_warning(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    if not Path(base_dir).is_dir():
        print_warning(f"Base directory does not exist yet: {base_dir}")

    try:
        saved = save_config(ProjectConfig(base_dir=base_dir), config_path)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
