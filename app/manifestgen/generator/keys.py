"""Derivation of manifest keys from file paths.

A key is the file path with separators turned into dots. The default
source extension disappears; any other extension becomes a ``:ext``
marker so that ``x/y.ts`` and ``x/y.css`` map to distinct keys. Dots inside
the marker become underscores, so the marker never adds a key segment.
"""

from collections.abc import Sequence

from manifestgen.core.paths import DEFAULT_EXTENSION


def match_extension(name: str, extensions: Sequence[str]) -> str | None:
    """Return the longest extension of ``extensions`` that ``name`` ends with."""
    matches = [ext for ext in extensions if ext and name.endswith(ext)]
    if not matches:
        return None
    return max(matches, key=len)


def derive_key(relative_path: str, extensions: Sequence[str] = (DEFAULT_EXTENSION,)) -> str:
    """Convert a path relative to the base directory into a dotted key.

    Examples:
        >>> derive_key("a/b.ts")
        'a.b'
        >>> derive_key("a/index.ts")
        'a.index'
        >>> derive_key("x/y.css", (".ts", ".css"))
        'x.y:css'
        >>> derive_key("x/y.d.ts", (".ts", ".d.ts"))
        'x.y:d_ts'

    Two paths can derive the same key (``a.b.ts`` and ``a/b.ts``); callers
    keep the last one and should warn about it.

    Args:
        relative_path: Path relative to the base directory.
        extensions: Recognized extensions, each with a leading dot.

    Returns:
        Dotted hierarchical key.
    """
    path = relative_path.replace("\\", "/")
    extension = match_extension(path, extensions)

    if extension is not None:
        path = path[: -len(extension)]
        if extension != DEFAULT_EXTENSION:
            path = f"{path}:{extension.lstrip('.').replace('.', '_')}"

    return path.replace("/", ".")
