"""Grouping of the flat manifest into nested regions.

Each region mirrors one directory of the scanned tree. The tree is built
bottom-up from immutable nodes: a directory's region is only created once
all of its children are complete.
"""

from collections.abc import Iterable

from manifestgen.models.manifest import FlatManifest, ManifestEntry, RegionNode


def _relative_to_prefix(value: str, prefix: str) -> str:
    """Strip ``prefix/`` from the front of a stored value."""
    if not prefix:
        return value
    head = f"{prefix}/"
    return value[len(head) :] if value.startswith(head) else value


def _build_region(name: str, entries: Iterable[ManifestEntry], prefix: str) -> RegionNode:
    leaves: list[ManifestEntry] = []
    buckets: dict[str, list[ManifestEntry]] = {}

    for entry in entries:
        segment, separator, _ = _relative_to_prefix(entry.value, prefix).partition("/")
        if separator:
            buckets.setdefault(segment, []).append(entry)
        else:
            leaves.append(entry)

    children = tuple(
        _build_region(segment, members, f"{prefix}/{segment}" if prefix else segment)
        for segment, members in buckets.items()
    )
    return RegionNode(name=name, entries=tuple(leaves), children=children)


def group(flat: FlatManifest, base_prefix: str) -> RegionNode:
    """Partition a flat manifest into a region tree.

    Entries whose value, after the current prefix, has no further path
    separator become leaves of the current region; the others go to a
    child region named after their next path segment. Ordering is left
    to the renderer.

    Args:
        flat: Flat key -> value mapping from a scan.
        base_prefix: Prefix shared by every value (no trailing slash).

    Returns:
        Root RegionNode (empty name) for the base directory.
    """
    entries = [ManifestEntry(key=key, value=value) for key, value in flat.items()]
    return _build_region("", entries, base_prefix.rstrip("/"))
