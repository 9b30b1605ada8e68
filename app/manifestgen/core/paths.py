"""Well-known paths and file names for manifestgen.

This module provides the reserved manifest file name, the default
source root, the project config location and the XDG user config
directory used for theme overrides.

XDG defaults:
- Config: ~/.config/manifestgen/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "manifestgen"

# Reserved name of the generated file, written inside the base directory
MANIFEST_NAME = ".manifest.ts"

# Name of the exported object in the generated file
EXPORT_NAME = "MANIFEST"

# Conventional source root, relative to the working directory
DEFAULT_BASE_DIR = "src"

# The one designated source extension (stripped silently from keys)
DEFAULT_EXTENSION = ".ts"

# Project configuration file, looked up in the working directory
CONFIG_FILE_NAME = "manifestgen.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the user configuration directory path.

    Returns:
        Path to ~/.config/manifestgen/ (or XDG_CONFIG_HOME/manifestgen/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_manifest_path(base_dir: Path) -> Path:
    """Get the generated manifest path for a base directory.

    Returns:
        Path to <base_dir>/.manifest.ts.
    """
    return base_dir / MANIFEST_NAME


def get_project_config_path(cwd: Path | None = None) -> Path:
    """Get the project configuration file path.

    Returns:
        Path to <cwd>/manifestgen.toml.
    """
    return (cwd or Path.cwd()) / CONFIG_FILE_NAME


def to_base_prefix(base_dir: Path, cwd: Path | None = None) -> str:
    """Express a base directory as the prefix stored in manifest values.

    The prefix is the base directory relative to the working directory,
    in forward-slash form. A base directory outside the working directory
    keeps its absolute path (still forward slashes).

    Args:
        base_dir: Absolute base directory.
        cwd: Working directory. Defaults to Path.cwd().

    Returns:
        Prefix string without a trailing slash (empty when base_dir == cwd).
    """
    root = (cwd or Path.cwd()).resolve()
    try:
        relative = base_dir.resolve().relative_to(root)
    except ValueError:
        return base_dir.resolve().as_posix()
    prefix = relative.as_posix()
    return "" if prefix == "." else prefix
