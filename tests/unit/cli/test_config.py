"""Unit tests for config commands."""

from pathlib import Path

from diskord.cli.main import app
from diskord.core.config import DiskordConfig, load_config
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigCommands:
    """Tests for diskord config show/init/path."""

    def test_path(self, cli_env: Path, tmp_path: Path) -> None:
        """config path prints the XDG config file location."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(tmp_path / "config" / "diskord" / "config.toml")

    def test_init_writes_defaults(self, cli_env: Path, tmp_path: Path) -> None:
        """config init creates a file holding the defaults."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert load_config(tmp_path / "config" / "diskord" / "config.toml") == DiskordConfig()

    def test_init_refuses_overwrite(self, cli_env: Path, tmp_path: Path) -> None:
        """An existing file is kept unless --force is given."""
        config_file = tmp_path / "config" / "diskord" / "config.toml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text("result_limit = 10\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert load_config(config_file).result_limit == 10

    def test_init_force(self, cli_env: Path, tmp_path: Path) -> None:
        """--force resets the file to defaults."""
        config_file = tmp_path / "config" / "diskord" / "config.toml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text("result_limit = 10\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        assert load_config(config_file).result_limit == 50

    def test_show_defaults(self, cli_env: Path) -> None:
        """config show lists settings and notes when defaults are used."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "result_limit" in result.output
        assert "pkexec" in result.output
        assert "defaults" in result.output
