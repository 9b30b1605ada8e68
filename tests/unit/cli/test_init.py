"""Unit tests for init command.

Tests for the CLI init command implementation.
"""

from pathlib import Path

from manifestgen.cli.main import app
from manifestgen.core.config import load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestInitCommand:
    """Tests for manifestgen init command."""

    def test_init_writes_defaults(self, source_tree: Path, project_dir: Path) -> None:
        """init writes ./manifestgen.toml with the default settings."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0, result.output
        assert "Config written to" in result.output
        config = load_config(project_dir / "manifestgen.toml")
        assert config.base_dir == "src"
        assert config.exclude_tests is True

    def test_init_refuses_overwrite(self, project_dir: Path) -> None:
        """An existing config is kept unless --force is given."""
        path = project_dir / "manifestgen.toml"
        path.write_text('base_dir = "lib"\n')

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "Config already exists" in result.output
        assert path.read_text() == 'base_dir = "lib"\n'

    def test_init_force(self, project_dir: Path) -> None:
        """--force overwrites an existing config."""
        path = project_dir / "manifestgen.toml"
        path.write_text('base_dir = "lib"\n')

        result = runner.invoke(app, ["init", "--force", "--base-dir", "app"])

        assert result.exit_code == 0, result.output
        assert load_config(path).base_dir == "app"
        assert "Base directory does not exist yet: app" in result.output

    def test_init_custom_path(self, source_tree: Path, project_dir: Path) -> None:
        """--path writes the config elsewhere."""
        result = runner.invoke(app, ["init", "--path", "conf/manifest.toml"])

        assert result.exit_code == 0, result.output
        assert (project_dir / "conf" / "manifest.toml").exists()
