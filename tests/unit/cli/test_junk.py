"""Unit tests for junk commands."""

from pathlib import Path
from unittest.mock import MagicMock, patch

from diskord.cli.main import app
from typer.testing import CliRunner

from tests.helpers import make_tree

runner = CliRunner()


class TestJunkList:
    """Tests for diskord junk list."""

    @patch("diskord.cleaners.targets.OrphanedPackagesTarget.packages", return_value=[])
    @patch("diskord.cleaners.targets.du_bytes", return_value=0)
    def test_lists_targets(
        self, _mock_du: MagicMock, _mock_orphans: MagicMock, cli_env: Path
    ) -> None:
        """Every known target is listed."""
        result = runner.invoke(app, ["junk", "list"])

        assert result.exit_code == 0
        for target_id in ("pacman", "yay", "journal", "trash", "orphans", "docker", "cargo", "npm"):
            assert target_id in result.output
        assert "reclaimable" in result.output


class TestJunkClean:
    """Tests for diskord junk clean."""

    def test_unknown_target(self, cli_env: Path) -> None:
        """Unknown ids are rejected with the list of valid ones."""
        result = runner.invoke(app, ["junk", "clean", "bogus"])

        assert result.exit_code == 1
        assert "Unknown target" in result.output

    @patch("diskord.cleaners.targets.du_bytes", return_value=0)
    def test_cleans_user_cache(self, _mock_du: MagicMock, cli_env: Path) -> None:
        """A home cache is emptied after confirmation."""
        cache = cli_env / ".cache" / "yay"
        make_tree(cache, {"pkg/a": 100})

        result = runner.invoke(app, ["junk", "clean", "yay"], input="y\n")

        assert result.exit_code == 0
        assert cache.is_dir()
        assert list(cache.iterdir()) == []
        assert "Freed" in result.output

    def test_declined(self, cli_env: Path) -> None:
        """Declining the prompt cleans nothing."""
        cache = cli_env / ".cache" / "yay"
        make_tree(cache, {"pkg/a": 100})

        result = runner.invoke(app, ["junk", "clean", "yay"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert (cache / "pkg" / "a").exists()

    def test_unavailable_target_skipped(self, cli_env: Path) -> None:
        """Targets whose cache does not exist are skipped."""
        result = runner.invoke(app, ["junk", "clean", "npm", "--yes"])

        assert result.exit_code == 0
        assert "not installed" in result.output
        assert "Nothing to clean" in result.output
