"""One-shot manifest generation.

ManifestBuilder runs the whole pipeline: scan the base directory, group
the flat mapping into regions, render the declaration and write it.
The rendered text is complete in memory before the single write, and
the write goes through a temporary file so readers never see a
half-written manifest.
"""

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from manifestgen.core.paths import MANIFEST_NAME
from manifestgen.generator.errors import ManifestWriteError
from manifestgen.generator.regions import group
from manifestgen.generator.renderer import render
from manifestgen.generator.scanner import ManifestScanner
from manifestgen.models.manifest import BuildResult, ExcludedPath, ScanResult
from manifestgen.models.options import ScanOptions
from manifestgen.utils.formatting import print_info, print_muted, print_separator, print_success

logger = logging.getLogger(__name__)


def write_manifest(path: Path, content: str) -> None:
    """Write the manifest atomically, replacing any previous version.

    The content goes to a temporary file in the same directory, which is
    then renamed over the target with os.replace().

    Raises:
        ManifestWriteError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f"{MANIFEST_NAME}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
        # os.replace() is atomic on POSIX
        os.replace(tmp_path, path)
    except OSError as e:
        # Cleanup temp file on failure
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ManifestWriteError(f"Failed to write manifest {path}: {e}") from e


def _display_path(path: Path) -> str:
    """Show a path relative to the working directory when possible."""
    try:
        return path.relative_to(Path.cwd().resolve()).as_posix()
    except ValueError:
        return str(path)


class ManifestBuilder:
    """Generates the manifest file for one set of options.

    Example:
        >>> builder = ManifestBuilder(ScanOptions(base_dir=Path("src")))
        >>> result = builder.build()
        >>> result.manifest_path.name
        '.manifest.ts'

    Args:
        options: Active scan options.
    """

    def __init__(self, options: ScanOptions) -> None:
        self._options = options

    @property
    def options(self) -> ScanOptions:
        return self._options

    def render(self) -> str:
        """Scan and render the manifest without writing it.

        Raises:
            ConfigurationError: If an exclude pattern is invalid.
            ScanError: If the tree cannot be read.
        """
        return self._render(self._scan())

    def build(self) -> BuildResult:
        """Scan, render and write the manifest.

        Returns:
            BuildResult describing the written manifest.

        Raises:
            ConfigurationError: If an exclude pattern is invalid.
            ScanError: If the tree cannot be read. Nothing is written.
            ManifestWriteError: If the manifest cannot be written.
        """
        result = self._scan()
        content = self._render(result)

        manifest_path = self._options.manifest_path
        write_manifest(manifest_path, content)
        logger.debug("Wrote %d entries to %s", len(result.entries), manifest_path)

        build = BuildResult(
            manifest_path=manifest_path,
            content=content,
            included_count=len(result.included),
            excluded_count=len(result.excluded),
        )
        self._report_summary(build)
        return build

    def _scan(self) -> ScanResult:
        verbose = self._options.verbose
        if verbose:
            print_info("Scanning files...")
            print_info(f"Base directory: {_display_path(self._options.base_dir)}")
            if self._options.exclude_patterns:
                print_info(f"Exclude patterns: {', '.join(self._options.exclude_patterns)}")

        result = ManifestScanner(self._options).scan()

        if verbose:
            for notice in result.notices:
                if isinstance(notice, ExcludedPath):
                    kind = "directory" if notice.is_dir else "file"
                    print_muted(f"Excluded {kind}: {notice.relative_path} ({notice.reason.value})")
                else:
                    print_info(f"Included: {notice.relative_path} -> {notice.key}")

        return result

    def _render(self, result: ScanResult) -> str:
        root = group(result.entries, self._options.base_prefix or "")
        return render(root, as_const=self._options.as_const)

    def _report_summary(self, build: BuildResult) -> None:
        print_success("Manifest generated successfully!")
        if not self._options.verbose:
            return

        print_info(f"Files included: {build.included_count}")
        if build.excluded_count > 0:
            print_info(f"Files excluded: {build.excluded_count}")
        print_info(f"Output file: {_display_path(build.manifest_path)}")
        print_separator()


def build_manifest(options: ScanOptions) -> BuildResult:
    """Generate the manifest for ``options`` in one shot."""
    return ManifestBuilder(options).build()
