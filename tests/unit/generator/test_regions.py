"""Unit tests for region grouping."""

from manifestgen.generator.regions import group
from manifestgen.models.manifest import ManifestEntry


class TestGroup:
    """Tests for group."""

    def test_flat_files_stay_in_root(self) -> None:
        """Files directly under the base directory become root leaves."""
        root = group({"a": "src/a.ts", "b": "src/b.ts"}, "src")

        assert root.name == ""
        assert set(root.entries) == {
            ManifestEntry("a", "src/a.ts"),
            ManifestEntry("b", "src/b.ts"),
        }
        assert root.children == ()

    def test_nested_regions(self) -> None:
        """a/b/c.ts and a/d.ts produce region a holding d and region b."""
        root = group({"a.b.c": "src/a/b/c.ts", "a.d": "src/a/d.ts"}, "src")

        region_a = root.find("a")
        assert region_a is not None
        assert region_a.entries == (ManifestEntry("a.d", "src/a/d.ts"),)

        region_b = region_a.find("b")
        assert region_b is not None
        assert region_b.entries == (ManifestEntry("a.b.c", "src/a/b/c.ts"),)
        assert region_b.children == ()

    def test_no_empty_regions(self) -> None:
        """Only directories holding entries become regions."""
        root = group({"x.y.z": "src/x/y/z.ts"}, "src")

        assert [child.name for child in root.children] == ["x"]
        region_x = root.find("x")
        assert region_x is not None
        assert region_x.entries == ()
        assert [child.name for child in region_x.children] == ["y"]

    def test_empty_prefix(self) -> None:
        """Values without a prefix are grouped by their first segment."""
        root = group({"a": "a.ts", "d.e": "d/e.ts"}, "")

        assert root.entries == (ManifestEntry("a", "a.ts"),)
        assert root.find("d") is not None

    def test_every_entry_kept(self) -> None:
        """Grouping neither drops nor duplicates entries."""
        flat = {"a": "src/a.ts", "b.c": "src/b/c.ts", "b.d.e": "src/b/d/e.ts"}

        root = group(flat, "src")

        assert {entry.key: entry.value for entry in root.members()} == flat

    def test_empty_manifest(self) -> None:
        """An empty mapping gives an empty root."""
        root = group({}, "src")
        assert root.entries == ()
        assert root.children == ()
