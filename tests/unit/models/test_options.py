"""Unit tests for ScanOptions."""

from pathlib import Path

import pytest
from manifestgen.models.options import ScanOptions, normalize_extension
from pydantic import ValidationError


class TestNormalizeExtension:
    """Tests for normalize_extension."""

    @pytest.mark.parametrize(
        ("raw", "expected"), [("css", ".css"), (".css", ".css"), (" txt ", ".txt")]
    )
    def test_leading_dot(self, raw: str, expected: str) -> None:
        """Extensions always carry a leading dot."""
        assert normalize_extension(raw) == expected

    def test_empty(self) -> None:
        """Empty input stays empty."""
        assert normalize_extension("  ") == ""


class TestScanOptions:
    """Tests for the ScanOptions model."""

    def test_defaults(self, source_tree: Path) -> None:
        """Defaults exclude tests and add no extensions."""
        options = ScanOptions(base_dir=source_tree)

        assert options.exclude_tests is True
        assert options.exclude_patterns == ()
        assert options.all_extensions == (".ts",)
        assert options.as_const is False
        assert options.include is None

    def test_base_dir_resolved(self, source_tree: Path) -> None:
        """Relative base directories are resolved against cwd."""
        options = ScanOptions(base_dir=Path("src"))
        assert options.base_dir == source_tree.resolve()

    def test_missing_base_dir(self, project_dir: Path) -> None:
        """A missing base directory is rejected."""
        with pytest.raises(ValidationError, match="Base directory does not exist"):
            ScanOptions(base_dir=project_dir / "missing")

    def test_base_dir_must_be_directory(self, project_dir: Path) -> None:
        """A file cannot be a base directory."""
        (project_dir / "file.ts").write_text("")
        with pytest.raises(ValidationError, match="is not a directory"):
            ScanOptions(base_dir=project_dir / "file.ts")

    def test_extensions_normalized(self, source_tree: Path) -> None:
        """Extensions get a dot, duplicates and the default are dropped."""
        options = ScanOptions(base_dir=source_tree, extensions=("css", ".css", ".ts", "txt"))

        assert options.extensions == (".css", ".txt")
        assert options.all_extensions == (".ts", ".css", ".txt")

    def test_base_prefix_derived(self, source_tree: Path) -> None:
        """base_prefix defaults to the base dir relative to cwd."""
        options = ScanOptions(base_dir=source_tree / "cli")
        assert options.base_prefix == "src/cli"
        assert options.value_for("a.ts") == "src/cli/a.ts"

    def test_explicit_base_prefix(self, source_tree: Path) -> None:
        """An explicit prefix is kept as given."""
        options = ScanOptions(base_dir=source_tree, base_prefix="@app")
        assert options.value_for("cli/cli.ts") == "@app/cli/cli.ts"

    @pytest.mark.parametrize("prefix", ["src/", "src//", "src\\"])
    def test_base_prefix_normalized(self, source_tree: Path, prefix: str) -> None:
        """Trailing separators are dropped so values keep single slashes."""
        options = ScanOptions(base_dir=source_tree, base_prefix=prefix)

        assert options.base_prefix == "src"
        assert options.value_for("helpers.ts") == "src/helpers.ts"

    def test_base_prefix_backslashes(self, source_tree: Path) -> None:
        """Backslashes in an explicit prefix become forward slashes."""
        options = ScanOptions(base_dir=source_tree, base_prefix="web\\src\\")
        assert options.value_for("cli/cli.ts") == "web/src/cli/cli.ts"

    def test_empty_prefix(self, project_dir: Path) -> None:
        """With the working directory as base, values are bare paths."""
        options = ScanOptions(base_dir=project_dir)
        assert options.base_prefix == ""
        assert options.value_for("a.ts") == "a.ts"

    def test_manifest_path(self, source_tree: Path) -> None:
        """The manifest lives inside the base directory."""
        options = ScanOptions(base_dir=source_tree)
        assert options.manifest_path == source_tree.resolve() / ".manifest.ts"

    def test_frozen(self, source_tree: Path) -> None:
        """Options cannot be modified after creation."""
        options = ScanOptions(base_dir=source_tree)
        with pytest.raises(ValidationError):
            options.as_const = True  # type: ignore[misc]

    def test_unknown_field_rejected(self, source_tree: Path) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            ScanOptions(base_dir=source_tree, watch=True)  # type: ignore[call-arg]

    def test_include_predicate_kept(self, source_tree: Path) -> None:
        """The include predicate is stored but not serialized."""

        def include(path: str, is_dir: bool) -> bool:
            return True

        options = ScanOptions(base_dir=source_tree, include=include)

        assert options.include is include
        assert "include" not in options.model_dump()
