"""Exceptions raised while generating a manifest.

Core modules raise these; the CLI layer reports them and decides
whether the failure is fatal (one-shot mode) or not (watch mode).
"""


class ManifestError(Exception):
    """Base exception for manifest generation errors."""


class ConfigurationError(ManifestError):
    """Raised when options or configuration are invalid.

    Configuration errors are detected before any scan is attempted.
    """


class ScanError(ManifestError):
    """Raised when a directory cannot be read during traversal.

    A scan error aborts the whole build; no partial manifest is written.
    """


class ManifestWriteError(ManifestError):
    """Raised when the manifest file cannot be written."""
