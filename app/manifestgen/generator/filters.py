"""Inclusion and exclusion rules for scanned paths.

Rules are evaluated in a fixed order and the first match wins:

1. the manifest file itself,
2. test and spec files (when ``exclude_tests`` is set),
3. configured exclude patterns,
4. the optional include predicate.
"""

import re
from functools import lru_cache

from manifestgen.core.paths import MANIFEST_NAME
from manifestgen.generator.errors import ConfigurationError
from manifestgen.models.manifest import ExclusionReason
from manifestgen.models.options import ScanOptions

# Suffixes marking test files, completed with each configured extension
_TEST_MARKERS: tuple[str, ...] = (".test", ".spec")


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a simple wildcard pattern into a regular expression.

    ``.`` matches a literal dot, ``*`` any sequence and ``?`` any single
    character. Other characters keep their regular-expression meaning.
    The result is searched anywhere in the path (not anchored).

    Raises:
        ConfigurationError: If the translated pattern is not a valid regex.
    """
    translated = pattern.replace(".", r"\.").replace("*", ".*").replace("?", ".")
    try:
        return re.compile(translated)
    except re.error as e:
        raise ConfigurationError(f"Invalid exclude pattern {pattern!r}: {e}") from e


def matches_pattern(relative_path: str, patterns: tuple[str, ...]) -> bool:
    """Check whether any exclude pattern matches the path."""
    return any(compile_pattern(pattern).search(relative_path) for pattern in patterns)


def is_test_file(relative_path: str, extensions: tuple[str, ...]) -> bool:
    """Check whether the path is a ``.test.<ext>`` or ``.spec.<ext>`` file."""
    return any(
        relative_path.endswith(f"{marker}{ext}") for marker in _TEST_MARKERS for ext in extensions
    )


def exclusion_reason(
    relative_path: str,
    options: ScanOptions,
    *,
    is_dir: bool = False,
) -> ExclusionReason | None:
    """Determine why a path should be excluded.

    Directories are only offered to the include predicate; the file
    rules do not apply to them.

    Args:
        relative_path: Path relative to the base directory, forward slashes.
        options: Active scan options.
        is_dir: Whether the path is a directory.

    Returns:
        The first matching ExclusionReason, or None to keep the path.
    """
    if not is_dir:
        if MANIFEST_NAME in relative_path:
            return ExclusionReason.MANIFEST

        if options.exclude_tests and is_test_file(relative_path, options.all_extensions):
            return ExclusionReason.TEST_FILE

        if matches_pattern(relative_path, options.exclude_patterns):
            return ExclusionReason.PATTERN

    if options.include is not None and not options.include(relative_path, is_dir):
        return ExclusionReason.PREDICATE

    return None


def should_exclude(relative_path: str, options: ScanOptions) -> bool:
    """Check whether a file should be left out of the manifest."""
    return exclusion_reason(relative_path, options) is not None


def validate_patterns(patterns: tuple[str, ...]) -> None:
    """Compile every pattern up front so bad ones fail before scanning.

    Raises:
        ConfigurationError: If a pattern does not compile.
    """
    for pattern in patterns:
        compile_pattern(pattern)
