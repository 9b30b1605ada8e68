"""Scan options model.

This module defines the immutable configuration shared by every stage
of manifest generation: which directory to scan, which files to keep,
and how to render the result.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from manifestgen.core.paths import DEFAULT_EXTENSION, get_manifest_path, to_base_prefix

# Predicate receiving (relative_path, is_dir); returning False excludes the path
IncludePredicate = Callable[[str, bool], bool]


def normalize_extension(extension: str) -> str:
    """Normalize an extension to carry a leading dot ("css" -> ".css")."""
    extension = extension.strip()
    if not extension:
        return extension
    return extension if extension.startswith(".") else f".{extension}"


class ScanOptions(BaseModel):
    """Immutable configuration for one manifest generation.

    Attributes:
        base_dir: Directory to scan (resolved to an absolute path, must exist).
        exclude_patterns: Simple wildcard patterns; any match excludes a file.
        exclude_tests: Exclude ``*.test.<ext>`` and ``*.spec.<ext>`` files.
        extensions: Extra extensions to include besides the default ``.ts``.
        as_const: Close the generated object with ``as const``.
        verbose: Emit progress notices during the build.
        base_prefix: Prefix of every stored value. Defaults to the base
            directory relative to the working directory.
        include: Optional predicate evaluated after all other exclusion rules.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_dir: Annotated[Path, Field(description="Directory to scan")]
    exclude_patterns: Annotated[
        tuple[str, ...],
        Field(description="Wildcard patterns of files to exclude"),
    ] = ()
    exclude_tests: Annotated[bool, Field(description="Exclude test and spec files")] = True
    extensions: Annotated[
        tuple[str, ...],
        Field(description="Extra file extensions to include"),
    ] = ()
    as_const: Annotated[bool, Field(description="Append 'as const' to the manifest")] = False
    verbose: Annotated[bool, Field(description="Emit progress notices")] = False
    base_prefix: Annotated[str | None, Field(description="Prefix of stored paths")] = None
    include: Annotated[
        IncludePredicate | None,
        Field(description="Extra inclusion predicate (path, is_dir) -> bool", exclude=True),
    ] = None

    @model_validator(mode="before")
    @classmethod
    def default_base_prefix(cls, data: Any) -> Any:
        """Derive base_prefix from base_dir when it is not given."""
        if isinstance(data, dict) and data.get("base_prefix") is None and data.get("base_dir"):
            data = {**data, "base_prefix": to_base_prefix(Path(data["base_dir"]))}
        return data

    @field_validator("base_dir")
    @classmethod
    def validate_base_dir(cls, v: Path) -> Path:
        """Resolve base_dir and check that it is an existing directory."""
        resolved = v.expanduser().resolve()
        if not resolved.exists():
            msg = f"Base directory does not exist: {resolved}"
            raise ValueError(msg)
        if not resolved.is_dir():
            msg = f"Base directory is not a directory: {resolved}"
            raise ValueError(msg)
        return resolved

    @field_validator("base_prefix")
    @classmethod
    def validate_base_prefix(cls, v: str | None) -> str | None:
        """Use forward slashes and drop trailing separators."""
        if v is None:
            return v
        return v.replace("\\", "/").rstrip("/")

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Give every extension a leading dot and drop duplicates of the default."""
        seen: list[str] = []
        for raw in v:
            ext = normalize_extension(raw)
            if ext and ext != DEFAULT_EXTENSION and ext not in seen:
                seen.append(ext)
        return tuple(seen)

    @property
    def all_extensions(self) -> tuple[str, ...]:
        """Default extension followed by the extra ones."""
        return (DEFAULT_EXTENSION, *self.extensions)

    @property
    def manifest_path(self) -> Path:
        """Path of the generated manifest file."""
        return get_manifest_path(self.base_dir)

    def value_for(self, relative_path: str) -> str:
        """Build the stored value of a file from its path relative to base_dir."""
        if not self.base_prefix:
            return relative_path
        return f"{self.base_prefix}/{relative_path}"
