"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

# Files of the sample project, relative to its src/ directory
SOURCE_FILES: tuple[str, ...] = (
    "index.ts",
    "helpers.ts",
    "helpers.test.ts",
    "types.ts",
    "globals.css",
    "cli/cli.ts",
    "cli/cli.test.ts",
    "cli/constants.ts",
    "cli/fixtures.ts",
    "cli/index.ts",
    "cli/bac/manifext.txt",
    "cli/bac2/other.txt",
)

EXPECTED_ALL_TESTS_KEPT = """export const MANIFEST = {
  helpers: 'src/helpers.ts',
  index: 'src/index.ts',
  types: 'src/types.ts',
  'helpers.test': 'src/helpers.test.ts',

  // #region cli
  'cli.cli': 'src/cli/cli.ts',
  'cli.constants': 'src/cli/constants.ts',
  'cli.fixtures': 'src/cli/fixtures.ts',
  'cli.index': 'src/cli/index.ts',
  'cli.cli.test': 'src/cli/cli.test.ts',
  // #endregion
};
"""

EXPECTED_TESTS_EXCLUDED = """export const MANIFEST = {
  helpers: 'src/helpers.ts',
  index: 'src/index.ts',
  types: 'src/types.ts',

  // #region cli
  'cli.cli': 'src/cli/cli.ts',
  'cli.constants': 'src/cli/constants.ts',
  'cli.fixtures': 'src/cli/fixtures.ts',
  'cli.index': 'src/cli/index.ts',
  // #endregion
};
"""

EXPECTED_TXT_AND_CSS = """export const MANIFEST = {
  'globals:css': 'src/globals.css',
  helpers: 'src/helpers.ts',
  index: 'src/index.ts',
  types: 'src/types.ts',
  'helpers.test': 'src/helpers.test.ts',

  // #region cli
  'cli.cli': 'src/cli/cli.ts',
  'cli.constants': 'src/cli/constants.ts',
  'cli.fixtures': 'src/cli/fixtures.ts',
  'cli.index': 'src/cli/index.ts',
  'cli.cli.test': 'src/cli/cli.test.ts',

  // #region bac
  'cli.bac.manifext:txt': 'src/cli/bac/manifext.txt',
  // #endregion

  // #region bac2
  'cli.bac2.other:txt': 'src/cli/bac2/other.txt',
  // #endregion
  // #endregion
};
"""


def make_tree(root: Path, files: tuple[str, ...] | list[str]) -> None:
    """Create empty-ish files (and their directories) under ``root``."""
    for relative in files:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {relative}\n")


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Project root holding src/, used as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def source_tree(project_dir: Path) -> Path:
    """Sample src/ tree with modules, tests, assets and nested folders."""
    src = project_dir / "src"
    make_tree(src, SOURCE_FILES)
    return src


@pytest.fixture
def expected_manifests() -> dict[str, str]:
    """Manifests expected for the sample tree, by scenario."""
    return {
        "tests_kept": EXPECTED_ALL_TESTS_KEPT,
        "tests_excluded": EXPECTED_TESTS_EXCLUDED,
        "txt_and_css": EXPECTED_TXT_AND_CSS,
    }
