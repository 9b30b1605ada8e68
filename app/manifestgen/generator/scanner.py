"""Source tree scanner.

Walks the base directory depth-first, applies the exclusion rules and
builds the flat key -> value mapping of the manifest. Every scan starts
from an empty mapping; nothing is carried over between scans.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from manifestgen.generator.errors import ConfigurationError, ScanError
from manifestgen.generator.filters import exclusion_reason, validate_patterns
from manifestgen.generator.keys import derive_key, match_extension
from manifestgen.models.manifest import (
    ExcludedPath,
    ExclusionReason,
    FlatManifest,
    IncludedFile,
    ScanResult,
)
from manifestgen.models.options import ScanOptions

logger = logging.getLogger(__name__)


class ManifestScanner:
    """Scans a base directory for files to list in the manifest.

    Symbolic links are neither followed nor listed. Subdirectories are
    always entered unless the include predicate rejects them.

    Example:
        >>> scanner = ManifestScanner(ScanOptions(base_dir=Path("src")))
        >>> result = scanner.scan()
        >>> result.entries["index"]
        'src/index.ts'

    Args:
        options: Active scan options.
    """

    def __init__(self, options: ScanOptions) -> None:
        self._options = options
        self._entries: FlatManifest = {}
        self._sources: dict[str, str] = {}
        self._notices: list[IncludedFile | ExcludedPath] = []

    def scan(self) -> ScanResult:
        """Scan the base directory.

        Returns:
            ScanResult holding a fresh flat mapping and per-path notices.

        Raises:
            ConfigurationError: If an exclude pattern is invalid.
            ScanError: If any directory of the tree cannot be read.
        """
        validate_patterns(self._options.exclude_patterns)

        # Reset state for each scan session
        self._entries = {}
        self._sources = {}
        self._notices = []

        self._scan_directory(self._options.base_dir, "")

        return ScanResult(
            entries=self._entries,
            notices=tuple(self._notices),
        )

    def _scan_directory(self, directory: Path, relative: str) -> None:
        """Scan one directory and recurse into its subdirectories.

        Args:
            directory: Absolute directory path.
            relative: Directory path relative to the base directory ("" for the root).

        Raises:
            ScanError: If the directory or one of its entries cannot be read.
        """
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ScanError(f"Cannot read directory {directory}: {e}") from e

        for entry in entries:
            relative_path = f"{relative}/{entry.name}" if relative else entry.name

            try:
                if entry.is_symlink():
                    continue
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                raise ScanError(f"Cannot stat {entry}: {e}") from e

            if is_dir:
                reason = exclusion_reason(relative_path, self._options, is_dir=True)
                if reason is not None:
                    self._notices.append(ExcludedPath(relative_path, reason, is_dir=True))
                    continue
                self._scan_directory(entry, relative_path)
            elif is_file and self._is_candidate(entry.name):
                self._add_file(relative_path)

    def _is_candidate(self, name: str) -> bool:
        """Check whether a file name carries one of the configured extensions."""
        extension = match_extension(name, self._options.all_extensions)
        return extension is not None and len(name) > len(extension)

    def _add_file(self, relative_path: str) -> None:
        """Filter a candidate file and record it in the flat mapping."""
        reason: ExclusionReason | None = exclusion_reason(relative_path, self._options)
        if reason is not None:
            self._notices.append(ExcludedPath(relative_path, reason))
            return

        key = derive_key(relative_path, self._options.all_extensions)
        if key in self._entries:
            logger.warning(
                "Key %r derived from both %s and %s; keeping %s",
                key,
                self._sources[key],
                relative_path,
                relative_path,
            )

        self._entries[key] = self._options.value_for(relative_path)
        self._sources[key] = relative_path
        self._notices.append(IncludedFile(relative_path, key))


def scan(base_dir: Path, options: ScanOptions) -> FlatManifest:
    """Scan ``base_dir`` with ``options`` and return the flat mapping.

    The options' own base directory is replaced by ``base_dir``.

    Raises:
        ConfigurationError: If base_dir is invalid or a pattern does not compile.
        ScanError: If any directory of the tree cannot be read.
    """
    if Path(base_dir).resolve() != options.base_dir:
        try:
            options = ScanOptions(
                **options.model_dump(exclude={"base_dir", "base_prefix"}),
                base_dir=base_dir,
                include=options.include,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid scan options: {e}") from e
    return ManifestScanner(options).scan().entries
