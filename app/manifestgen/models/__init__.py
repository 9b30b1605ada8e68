"""Data models for manifestgen.

This module exports the scan options and manifest domain models.
"""

from manifestgen.models.manifest import (
    BuildResult,
    ExcludedPath,
    ExclusionReason,
    FlatManifest,
    IncludedFile,
    ManifestEntry,
    RegionNode,
    ScanResult,
    key_sort_key,
)
from manifestgen.models.options import IncludePredicate, ScanOptions, normalize_extension

__all__ = [
    "BuildResult",
    "ExcludedPath",
    "ExclusionReason",
    "FlatManifest",
    "IncludePredicate",
    "IncludedFile",
    "ManifestEntry",
    "RegionNode",
    "ScanOptions",
    "ScanResult",
    "key_sort_key",
    "normalize_extension",
]
