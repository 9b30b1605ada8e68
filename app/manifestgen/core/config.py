"""Project configuration for manifestgen.

Settings can live in a ``manifestgen.toml`` file next to the project.
Command-line options (and their environment variables) override the
file, which overrides the built-in defaults.

Example ``manifestgen.toml``::

    base_dir = "src"
    exclude = ["fixtures"]
    extensions = [".css"]
    exclude_tests = true
    as_const = false
"""

import os
import tomllib
from collections.abc import Sequence
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from manifestgen.core.paths import DEFAULT_BASE_DIR, get_project_config_path
from manifestgen.generator.errors import ConfigurationError
from manifestgen.models.options import IncludePredicate, ScanOptions


class ProjectConfig(BaseModel):
    """Settings read from ``manifestgen.toml``.

    Attributes:
        base_dir: Directory to scan, relative to the working directory.
        exclude: Wildcard patterns of files to exclude.
        extensions: Extra extensions to include besides ``.ts``.
        exclude_tests: Exclude test and spec files.
        as_const: Append ``as const`` to the generated object.
    """

    model_config = ConfigDict(extra="forbid")

    base_dir: Annotated[str, Field(description="Directory to scan")] = DEFAULT_BASE_DIR
    exclude: Annotated[
        list[str],
        Field(default_factory=list, description="Exclude patterns"),
    ]
    extensions: Annotated[
        list[str],
        Field(default_factory=list, description="Extra extensions"),
    ]
    exclude_tests: Annotated[bool, Field(description="Exclude test and spec files")] = True
    as_const: Annotated[bool, Field(description="Append 'as const'")] = False


class ConfigNotFoundError(ConfigurationError):
    """Raised when a config file is not found."""


class ConfigParseError(ConfigurationError):
    """Raised when a config file cannot be parsed."""


def load_config(path: Path | None = None) -> ProjectConfig:
    """Load project configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses ./manifestgen.toml.

    Returns:
        Validated ProjectConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigurationError: If the content doesn't match the schema.
    """
    config_path = path or get_project_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config {config_path}: {e}") from e

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config content in {config_path}: {e}") from e


def load_config_or_default(path: Path | None = None) -> ProjectConfig:
    """Load an explicit config file, or ./manifestgen.toml if it exists.

    An explicit ``path`` must exist; the implicit project file is optional.

    Raises:
        ConfigurationError: If the file is missing (explicit path) or invalid.
    """
    if path is not None:
        return load_config(path)

    default_path = get_project_config_path()
    if default_path.exists():
        return load_config(default_path)
    return ProjectConfig()


def save_config(config: ProjectConfig, path: Path | None = None) -> Path:
    """Save project configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ProjectConfig object to save.
        path: Path to save the config. If None, uses ./manifestgen.toml.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    config_path = path or get_project_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigurationError(f"Failed to write config {config_path}: {e}") from e

    return config_path


def resolve_options(
    config: ProjectConfig,
    *,
    base_dir: Path | None = None,
    exclude: Sequence[str] = (),
    extensions: Sequence[str] = (),
    exclude_tests: bool | None = None,
    as_const: bool | None = None,
    verbose: bool = False,
    include: IncludePredicate | None = None,
) -> ScanOptions:
    """Merge command-line values over the project config into ScanOptions.

    Scalar values given on the command line replace the config values;
    list values (exclude patterns, extensions) are appended to them.

    Raises:
        ConfigurationError: If the merged options are invalid (e.g. the
            base directory does not exist).
    """
    try:
        return ScanOptions(
            base_dir=base_dir if base_dir is not None else Path(config.base_dir),
            exclude_patterns=(*config.exclude, *exclude),
            exclude_tests=config.exclude_tests if exclude_tests is None else exclude_tests,
            extensions=(*config.extensions, *extensions),
            as_const=config.as_const if as_const is None else as_const,
            verbose=verbose,
            include=include,
        )
    except ValidationError as e:
        messages = "; ".join(str(error["msg"]) for error in e.errors())
        raise ConfigurationError(messages) from e
