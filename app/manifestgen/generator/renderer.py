"""Rendering of the region tree as a TypeScript declaration.

The output is one exported object literal. Regions are marked with
``// #region`` / ``// #endregion`` comments so editors can fold them;
the object itself stays flat, so every line shares one indentation.
"""

import re

from manifestgen.core.paths import EXPORT_NAME
from manifestgen.models.manifest import ManifestEntry, RegionNode

INDENT = "  "

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def quote(text: str) -> str:
    """Wrap text in single quotes, escaping backslashes and quotes."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def format_key(key: str) -> str:
    """Quote a key unless it is a plain identifier.

    Keys containing ``.``, ``-`` or ``:`` (and any other character not
    allowed in an identifier) are quoted.
    """
    return key if _IDENTIFIER.match(key) else quote(key)


def format_entry(entry: ManifestEntry) -> str:
    """Render one ``key: 'value',`` line."""
    return f"{INDENT}{format_key(entry.key)}: {quote(entry.value)},"


def _render_region(node: RegionNode, lines: list[str]) -> None:
    for entry in sorted(node.entries, key=lambda e: e.sort_key):
        lines.append(format_entry(entry))

    children = sorted(node.children, key=lambda c: c.sort_key)
    if children:
        lines.append("")

    for index, child in enumerate(children):
        lines.append(f"{INDENT}// #region {child.name}")
        _render_region(child, lines)
        lines.append(f"{INDENT}// #endregion")
        if index < len(children) - 1:
            lines.append("")


def render(root: RegionNode, as_const: bool = False) -> str:
    """Render the manifest source text.

    Entries are ordered by key depth, then alphabetically; child regions
    by the smallest such order among their members. The same tree always
    renders to the same text.

    Args:
        root: Root region of the manifest.
        as_const: Close the object with ``as const``.

    Returns:
        Manifest source, terminated by a newline.
    """
    lines = [f"export const {EXPORT_NAME} = {{"]
    _render_region(root, lines)
    lines.append("} as const;" if as_const else "};")
    return "\n".join(lines) + "\n"
