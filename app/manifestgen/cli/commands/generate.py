"""Generate command implementation.

Scans the source tree and writes the manifest once, or keeps it up to
date in watch mode.
"""

from pathlib import Path
from typing import Annotated

import typer

from manifestgen.core.config import load_config_or_default, resolve_options
from manifestgen.generator.builder import ManifestBuilder
from manifestgen.generator.errors import ConfigurationError, ManifestError
from manifestgen.generator.watcher import ManifestWatcher, install_shutdown_handlers
from manifestgen.models.options import ScanOptions
from manifestgen.utils.formatting import console, print_error, print_info, print_separator

app = typer.Typer(
    help="Generate the manifest from the source tree.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def generate(
    ctx: typer.Context,
    watch: Annotated[
        bool,
        typer.Option(
            "--watch",
            "-w",
            help="Keep running and rebuild the manifest on every change.",
        ),
    ] = False,
    base_dir: Annotated[
        Path | None,
        typer.Option(
            "--base-dir",
            "-b",
            help="Directory to scan (default: src).",
            envvar="BASE_DIR",
        ),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-e",
            help="Pattern of files to exclude (repeatable).",
        ),
    ] = None,
    extensions: Annotated[
        list[str] | None,
        typer.Option(
            "--extensions",
            "-x",
            help="Extra file extension to include (repeatable).",
        ),
    ] = None,
    exclude_tests: Annotated[
        bool | None,
        typer.Option(
            "--exclude-tests/--keep-tests",
            help="Exclude *.test.* and *.spec.* files (default: exclude).",
            envvar="EXCLUDE_TESTS",
        ),
    ] = None,
    as_const: Annotated[
        bool | None,
        typer.Option(
            "--const/--no-const",
            "-c",
            help="Append 'as const' to the generated manifest.",
            envvar="AS_CONST",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show detailed progress.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Print the manifest instead of writing it.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Config file (default: ./manifestgen.toml if present).",
        ),
    ] = None,
) -> None:
    """Scan the source tree and write <base-dir>/.manifest.ts."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    verbose = verbose or bool(obj.get("verbose", False))

    try:
        config = load_config_or_default(config_path)
        options = resolve_options(
            config,
            base_dir=base_dir,
            exclude=exclude or (),
            extensions=extensions or (),
            exclude_tests=exclude_tests,
            as_const=as_const,
            verbose=verbose,
        )
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if dry_run:
        _print_manifest(options)
        return

    if watch:
        _run_watch(options)
        return

    _run_once(options)


# === Private helper functions ===


def _print_manifest(options: ScanOptions) -> None:
    """Render the manifest to stdout without writing it."""
    try:
        content = ManifestBuilder(options).render()
    except ManifestError as e:
        print_error(f"Failed to generate manifest: {e}")
        raise typer.Exit(code=1) from e
    console.print(content, end="", markup=False, emoji=False, highlight=False, soft_wrap=True)


def _run_once(options: ScanOptions) -> None:
    """Build the manifest once; any failure is fatal."""
    print_separator()
    print_info("Generating manifest...")
    try:
        ManifestBuilder(options).build()
    except ManifestError as e:
        print_error(f"Failed to generate manifest: {e}")
        raise typer.Exit(code=1) from e


def _run_watch(options: ScanOptions) -> None:
    """Build, then rebuild on every change until SIGINT/SIGTERM."""
    print_separator()
    print_info("Initial manifest generation...")

    watcher = ManifestWatcher(options)
    install_shutdown_handlers(watcher)
    try:
        watcher.start()
    except ManifestError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        watcher.wait()
    finally:
        print_info("Stopping watcher...")
        watcher.stop()
    print_info("Watcher stopped.")
