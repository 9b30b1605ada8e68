"""Manifest generation pipeline.

This module provides key derivation, filtering, scanning, region
grouping, rendering, the one-shot builder and the watch loop.
"""

from manifestgen.generator.builder import ManifestBuilder, build_manifest, write_manifest
from manifestgen.generator.errors import (
    ConfigurationError,
    ManifestError,
    ManifestWriteError,
    ScanError,
)
from manifestgen.generator.filters import exclusion_reason, should_exclude
from manifestgen.generator.keys import derive_key
from manifestgen.generator.regions import group
from manifestgen.generator.renderer import render
from manifestgen.generator.scanner import ManifestScanner, scan
from manifestgen.generator.watcher import (
    ManifestWatcher,
    SettleQueue,
    install_shutdown_handlers,
)

__all__ = [
    "ConfigurationError",
    "ManifestBuilder",
    "ManifestError",
    "ManifestScanner",
    "ManifestWatcher",
    "ManifestWriteError",
    "ScanError",
    "SettleQueue",
    "build_manifest",
    "derive_key",
    "exclusion_reason",
    "group",
    "install_shutdown_handlers",
    "render",
    "scan",
    "should_exclude",
    "write_manifest",
]
