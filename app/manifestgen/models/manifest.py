"""Manifest domain models.

This module defines the data structures produced by scanning and
grouping: manifest entries, the region tree used for rendering, and
the results of a scan and of a full build.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# Flat key -> value mapping produced by one scan
FlatManifest = dict[str, str]


class ExclusionReason(str, Enum):
    """Reason why a scanned path was left out of the manifest.

    Attributes:
        MANIFEST: The path is the generated manifest itself.
        TEST_FILE: The path is a test or spec file and tests are excluded.
        PATTERN: The path matches a configured exclude pattern.
        PREDICATE: The include predicate rejected the path.
    """

    MANIFEST = "manifest"
    TEST_FILE = "test_file"
    PATTERN = "pattern"
    PREDICATE = "predicate"


def key_sort_key(key: str) -> tuple[int, str]:
    """Order keys by segment count first, then alphabetically."""
    return (key.count(".") + 1, key)


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """One key/value pair of the manifest.

    Attributes:
        key: Dotted hierarchical key, unique within a scan.
        value: File path under the base prefix, with forward slashes.
    """

    key: str
    value: str

    @property
    def depth(self) -> int:
        """Number of dot-separated segments in the key."""
        return self.key.count(".") + 1

    @property
    def sort_key(self) -> tuple[int, str]:
        return key_sort_key(self.key)


@dataclass(frozen=True, slots=True)
class RegionNode:
    """One directory level of the manifest.

    Attributes:
        name: Directory name of this level (empty for the root).
        entries: Files located directly in this directory.
        children: Regions for subdirectories holding included files.
    """

    name: str
    entries: tuple[ManifestEntry, ...] = ()
    children: tuple["RegionNode", ...] = ()

    def members(self) -> Iterator[ManifestEntry]:
        """Yield every entry of this region and its descendants."""
        yield from self.entries
        for child in self.children:
            yield from child.members()

    @property
    def sort_key(self) -> tuple[int, str]:
        """Smallest sort key among all members of the region."""
        return min((entry.sort_key for entry in self.members()), default=(0, self.name))

    def find(self, name: str) -> "RegionNode | None":
        """Return the direct child region called ``name``, if any."""
        for child in self.children:
            if child.name == name:
                return child
        return None


@dataclass(frozen=True, slots=True)
class IncludedFile:
    """A file that made it into the manifest."""

    relative_path: str
    key: str


@dataclass(frozen=True, slots=True)
class ExcludedPath:
    """A file or directory left out of the manifest."""

    relative_path: str
    reason: ExclusionReason
    is_dir: bool = False


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of scanning one base directory.

    Attributes:
        entries: Flat key -> value mapping.
        notices: Included files and excluded paths, in traversal order.
    """

    entries: FlatManifest
    notices: tuple[IncludedFile | ExcludedPath, ...] = ()

    @property
    def included(self) -> tuple[IncludedFile, ...]:
        """Included files, in traversal order."""
        return tuple(n for n in self.notices if isinstance(n, IncludedFile))

    @property
    def excluded(self) -> tuple[ExcludedPath, ...]:
        """Excluded files and directories, in traversal order."""
        return tuple(n for n in self.notices if isinstance(n, ExcludedPath))


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of one manifest build.

    Attributes:
        manifest_path: File the manifest was written to.
        content: Rendered manifest text.
        included_count: Number of files in the manifest.
        excluded_count: Number of files and directories left out.
    """

    manifest_path: Path
    content: str
    included_count: int
    excluded_count: int
